"""
slackpost/outbound/settings.py
slackpost
Outbound Settings

Purpose:
- Centralised Slack Web API configuration.
- Keep secrets out of code via environment variables.

Notes:
- These are required when loading from the environment:
  - SLACK_BOT_TOKEN
  - SLACK_CHANNEL_ID
- Optional:
  - SLACK_API_BASE_URL (defaults to https://slack.com/api)
  - SLACK_TIMEOUT_SECONDS (defaults to 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_API_BASE_URL = "https://slack.com/api"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(
            f"Missing required environment variable: {name}. "
            f"Set it in your .env / shell before running."
        )
    return value


@dataclass(frozen=True)
class SlackSettings:
    bot_token: str = field(repr=False)
    channel_id: str
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return self.api_base_url.rstrip("/")

    @property
    def post_message_url(self) -> str:
        return f"{self.base_url}/chat.postMessage"

    @property
    def get_upload_url_url(self) -> str:
        return f"{self.base_url}/files.getUploadURLExternal"

    @property
    def complete_upload_url(self) -> str:
        return f"{self.base_url}/files.completeUploadExternal"


def load_slack_settings() -> SlackSettings:
    timeout_raw = os.getenv("SLACK_TIMEOUT_SECONDS", "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
    except ValueError as e:
        raise RuntimeError(
            f"SLACK_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
        ) from e

    return SlackSettings(
        bot_token=_require_env("SLACK_BOT_TOKEN"),
        channel_id=_require_env("SLACK_CHANNEL_ID"),
        api_base_url=os.getenv("SLACK_API_BASE_URL", DEFAULT_API_BASE_URL).strip()
        or DEFAULT_API_BASE_URL,
        timeout=timeout,
    )
