from abc import ABC, abstractmethod

from upify.domain.entities.notification import Notification


class NotifierPort(ABC):
    @abstractmethod
    def show(self, kind: str, text: str) -> Notification:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def current(self) -> Notification:
        raise NotImplementedError
