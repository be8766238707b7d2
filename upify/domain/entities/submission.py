from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from upify.domain.entities.notification import Notification


class SubmissionStatus(str, Enum):
    rejected = "rejected"
    config_error = "config_error"
    auth_error = "auth_error"
    success = "success"
    server_rejected = "server_rejected"
    network_error = "network_error"


@dataclass(frozen=True)
class SubmissionOutcome:
    status: SubmissionStatus
    notification: Notification

    @property
    def succeeded(self) -> bool:
        return self.status is SubmissionStatus.success
