"""Dry-run gateway and factory wiring."""

from __future__ import annotations

import pytest
import requests

from slackpost.outbound import factory
from slackpost.outbound.dry_run import DryRunSendGateway
from slackpost.outbound.factory import OutboundDeliverySettings, build_send_gateway, get_slack_client
from slackpost.outbound.gateway import OutboundSendRequest, SendStatus
from slackpost.outbound.settings import SlackSettings
from slackpost.outbound.slack import SlackClient


def test_dry_run_never_sends(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_network(*args, **kwargs):
        raise AssertionError("dry-run gateway made an HTTP request")

    monkeypatch.setattr(requests.Session, "request", _no_network)
    monkeypatch.setattr(requests.Session, "post", _no_network)

    result = DryRunSendGateway().deliver(
        OutboundSendRequest(message="hello", file_path="/tmp/reports/q3.pdf")
    )

    assert result.status == SendStatus.DRY_RUN
    assert result.ok is True
    assert result.error_message is None
    assert "attachment=q3.pdf" in result.detail
    assert "chars=5" in result.detail


def test_build_dry_run_gateway_by_default() -> None:
    gateway = build_send_gateway(OutboundDeliverySettings())
    assert isinstance(gateway, DryRunSendGateway)


def test_build_slack_gateway() -> None:
    settings = OutboundDeliverySettings(
        mode="slack",
        slack=SlackSettings(bot_token="xoxb-1", channel_id="C1", timeout=3),
    )

    gateway = build_send_gateway(settings)

    assert isinstance(gateway, SlackClient)
    assert gateway.settings.channel_id == "C1"
    assert gateway.settings.timeout == 3


def test_slack_mode_requires_settings() -> None:
    with pytest.raises(ValueError, match="requires Slack settings"):
        build_send_gateway(OutboundDeliverySettings(mode="slack"))


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown outbound mode"):
        build_send_gateway(OutboundDeliverySettings(mode="carrier_pigeon"))


def test_delivery_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTBOUND_MODE", "SLACK")
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-env")
    monkeypatch.setenv("SLACK_CHANNEL_ID", "C99")

    settings = OutboundDeliverySettings.from_env()

    assert settings.mode == "slack"
    assert settings.slack.channel_id == "C99"


def test_delivery_settings_from_env_defaults_to_dry_run(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OUTBOUND_MODE", raising=False)
    monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)

    settings = OutboundDeliverySettings.from_env()

    assert settings.mode == "dry_run"
    assert settings.slack is None


def test_get_slack_client_is_singleton(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(factory, "_slack_client", None)
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-env")
    monkeypatch.setenv("SLACK_CHANNEL_ID", "C42")

    first = get_slack_client()
    second = get_slack_client()

    assert first is second
    assert first.settings.channel_id == "C42"
