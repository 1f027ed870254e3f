"""
slackpost
Outbound delivery abstraction

This module defines a stable SendGateway interface and strongly-typed
request/result objects for posting to a Slack channel.

Guardrails:
- Gateways report failure through SendResult, never by raising.
- A SendResult is returned per call; gateways keep no per-call state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Protocol


class SendStatus(str, Enum):
    DRY_RUN = "dry_run"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class OutboundSendRequest:
    """
    A single post to the configured channel.

    - message is the text (or the initial comment when a file is attached)
    - file_path is used only when it points at a readable file
    """
    message: str
    file_path: Optional[str] = None


@dataclass(frozen=True)
class UploadTicket:
    """
    Returned by files.getUploadURLExternal, consumed by the upload and
    completion steps, then dropped.
    """
    upload_url: str
    file_id: str


@dataclass(frozen=True)
class SendResult:
    """
    Result of a delivery attempt (or simulated attempt).
    """
    status: SendStatus
    error_message: Optional[str]
    error_data: Optional[Dict[str, Any]]
    detail: str
    created_at_utc: datetime

    @property
    def ok(self) -> bool:
        return self.status != SendStatus.FAILED

    @staticmethod
    def sent(detail: str = "") -> "SendResult":
        return SendResult(
            status=SendStatus.SENT,
            error_message=None,
            error_data=None,
            detail=detail,
            created_at_utc=datetime.now(timezone.utc),
        )

    @staticmethod
    def failed(
        error_message: str, error_data: Optional[Dict[str, Any]] = None
    ) -> "SendResult":
        return SendResult(
            status=SendStatus.FAILED,
            error_message=error_message,
            error_data=error_data,
            detail=error_message,
            created_at_utc=datetime.now(timezone.utc),
        )

    @staticmethod
    def dry_run(detail: str) -> "SendResult":
        return SendResult(
            status=SendStatus.DRY_RUN,
            error_message=None,
            error_data=None,
            detail=detail,
            created_at_utc=datetime.now(timezone.utc),
        )


class SendGateway(Protocol):
    """
    Abstract gateway for outbound delivery.
    """
    def deliver(self, req: OutboundSendRequest) -> SendResult:
        """
        Post a message (optionally with an attachment), or simulate it,
        depending on gateway. Must not throw in normal cases.
        """
        ...
