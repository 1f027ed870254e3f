"""
File: slackpost/outbound/factory.py
Path: slackpost/outbound/factory.py

Project: slackpost

Purpose:
- Provide a single place to construct outbound clients/gateways
- Reuse a single Slack client instance (singleton-style)

Design rules:
- No business logic here
- Only construction / wiring
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .dry_run import DryRunSendGateway
from .gateway import SendGateway
from .settings import SlackSettings, load_slack_settings
from .slack import SlackClient

MODE_DRY_RUN = "dry_run"
MODE_SLACK = "slack"


@dataclass(frozen=True)
class OutboundDeliverySettings:
    mode: str = MODE_DRY_RUN
    slack: Optional[SlackSettings] = None

    @staticmethod
    def from_env() -> "OutboundDeliverySettings":
        mode = os.getenv("OUTBOUND_MODE", MODE_DRY_RUN).strip().lower() or MODE_DRY_RUN
        slack = load_slack_settings() if mode == MODE_SLACK else None
        return OutboundDeliverySettings(mode=mode, slack=slack)


def build_send_gateway(settings: OutboundDeliverySettings) -> SendGateway:
    if settings.mode == MODE_DRY_RUN:
        return DryRunSendGateway()

    if settings.mode == MODE_SLACK:
        if settings.slack is None:
            raise ValueError("OUTBOUND_MODE=slack requires Slack settings")
        return SlackClient.from_settings(settings.slack)

    raise ValueError(f"Unknown outbound mode: {settings.mode!r}")


# -------------------------------------------------
# Slack client singleton
# -------------------------------------------------
_slack_client: SlackClient | None = None


def get_slack_client() -> SlackClient:
    global _slack_client
    if _slack_client is None:
        _slack_client = SlackClient.from_settings(load_slack_settings())
    return _slack_client
