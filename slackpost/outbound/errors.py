"""
slackpost/outbound/errors.py

Failure kinds raised inside the Slack client.
They never leave SlackClient.deliver(); they are turned into SendResult.failed().
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SlackClientError(RuntimeError):
    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload


class TransportError(SlackClientError):
    """Connection / timeout / other requests-level failure."""


class ResponseDecodeError(SlackClientError):
    """Body is not a JSON object."""


class RemoteApiError(SlackClientError):
    """Well-formed response reporting failure (ok=false, missing fields, bad HTTP status)."""


class LocalIoError(SlackClientError):
    """Attachment unreadable or its size cannot be determined."""


class EncodingError(SlackClientError):
    """Request body could not be serialised (JSON or UTF-8)."""
