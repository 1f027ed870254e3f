"""
slackpost
Minimal Slack channel poster (text messages + file attachments).
"""

from .outbound import (
    DryRunSendGateway,
    OutboundSendRequest,
    SendGateway,
    SendResult,
    SendStatus,
    SlackClient,
    SlackSettings,
)

__version__ = "0.1.0"
