from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    kind: str = ""  # "", "info", "error", "success"
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.text


EMPTY_NOTIFICATION = Notification()
