"""
slackpost
Outbound delivery abstraction - DRY-RUN gateway

This gateway never sends anything.
It simply returns a result that indicates a simulated send.
"""

from __future__ import annotations

import os

from .gateway import OutboundSendRequest, SendGateway, SendResult


class DryRunSendGateway(SendGateway):
    def deliver(self, req: OutboundSendRequest) -> SendResult:
        # No side effects. Never raises. Never calls external services.
        attachment = os.path.basename(req.file_path) if req.file_path else "-"
        detail = (
            "DRY_RUN: slack post simulated (not sent). "
            f"chars={len(req.message)} attachment={attachment}"
        )
        return SendResult.dry_run(detail)
