"""
File: slackpost/outbound/slack.py
Path: slackpost/outbound/slack.py

Project: slackpost

Purpose:
Slack Web API client for a single channel.
Supports:
- Plain text messages (chat.postMessage)
- Message + file attachment via the external upload flow:
    1. files.getUploadURLExternal
    2. POST raw bytes to the returned upload_url
    3. files.completeUploadExternal

Failures never raise to the caller: deliver() returns a SendResult,
send() returns a bool and keeps the last result for get_last_error() /
get_error_data().
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import requests

from .errors import (
    EncodingError,
    LocalIoError,
    RemoteApiError,
    ResponseDecodeError,
    SlackClientError,
    TransportError,
)
from .gateway import OutboundSendRequest, SendResult, UploadTicket
from .settings import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS, SlackSettings

logger = logging.getLogger("slack_client")


def _is_readable_file(file_path: Optional[str]) -> bool:
    return bool(file_path) and os.path.isfile(file_path) and os.access(file_path, os.R_OK)


class SlackClient:
    def __init__(
        self,
        bot_token: str,
        channel_id: str,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = SlackSettings(
            bot_token=bot_token,
            channel_id=channel_id,
            api_base_url=api_base_url,
            timeout=timeout,
        )
        self._session = session or requests.Session()
        self._last_result: Optional[SendResult] = None

    @classmethod
    def from_settings(
        cls, settings: SlackSettings, session: Optional[requests.Session] = None
    ) -> "SlackClient":
        return cls(
            settings.bot_token,
            settings.channel_id,
            api_base_url=settings.api_base_url,
            timeout=settings.timeout,
            session=session,
        )

    @property
    def settings(self) -> SlackSettings:
        return self._settings

    # ---------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------
    def send(self, message: str, file_path: Optional[str] = None) -> bool:
        """
        Send a message with an optional file attachment.

        Not safe to share across concurrent callers: the outcome is kept
        on the instance. Use deliver() for that.
        """
        self._last_result = None
        result = self.deliver(OutboundSendRequest(message=message, file_path=file_path))
        self._last_result = result
        return result.ok

    def deliver(self, req: OutboundSendRequest) -> SendResult:
        """
        Post one message (and attachment, if the path is a readable file).
        Returns the outcome without touching instance state.
        """
        try:
            if _is_readable_file(req.file_path):
                filename = self._send_with_file(req.message, req.file_path)
                detail = f"posted to {self._settings.channel_id} with {filename}"
            else:
                self._send_text_only(req.message)
                detail = f"posted to {self._settings.channel_id}"
        except SlackClientError as e:
            logger.warning("Slack post to %s failed: %s", self._settings.channel_id, e.message)
            return SendResult.failed(e.message, e.payload)

        logger.info("Slack %s", detail)
        return SendResult.sent(detail)

    @property
    def last_result(self) -> Optional[SendResult]:
        return self._last_result

    def get_last_error(self) -> Optional[str]:
        if self._last_result is None:
            return None
        return self._last_result.error_message

    def get_error_data(self) -> Optional[Dict[str, Any]]:
        if self._last_result is None:
            return None
        return self._last_result.error_data

    # ---------------------------------------------------------
    # TEXT ONLY (chat.postMessage)
    # ---------------------------------------------------------
    def _send_text_only(self, message: str) -> None:
        call = "chat.postMessage"
        try:
            body = json.dumps(
                {"channel": self._settings.channel_id, "text": message},
                ensure_ascii=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError("Failed to encode JSON payload.") from e

        headers = self._auth_headers()
        headers["Content-Type"] = "application/json; charset=utf-8"

        resp = self._post(call, self._settings.post_message_url, data=body, headers=headers)
        data = self._decode(call, resp)
        self._require_ok(call, data, expose_payload=True)

    # ---------------------------------------------------------
    # FILE (external upload flow)
    # ---------------------------------------------------------
    def _send_with_file(self, message: str, file_path: str) -> str:
        filename = os.path.basename(file_path)
        try:
            length = os.path.getsize(file_path)
        except OSError as e:
            raise LocalIoError("Unable to determine file size.") from e

        ticket = self._get_upload_url_external(filename, length)
        # No cleanup call exists for an abandoned ticket.
        self._upload_binary(ticket, file_path)
        self._complete_upload_external(ticket.file_id, filename, message)
        return filename

    def _get_upload_url_external(self, filename: str, length: int) -> UploadTicket:
        call = "files.getUploadURLExternal"
        body = self._encode_form(
            {"filename": filename, "length": length},
            "Failed to encode upload request for Slack.",
        )
        resp = self._post(
            call,
            self._settings.get_upload_url_url,
            data=body,
            headers=self._auth_headers(),
        )
        data = self._decode(call, resp)
        self._require_ok(call, data, expose_payload=True)

        upload_url = data.get("upload_url")
        file_id = data.get("file_id")
        if not upload_url or not file_id:
            raise RemoteApiError(
                "Slack files.getUploadURLExternal response is missing upload_url or file_id.",
                data,
            )

        logger.debug("Slack upload ticket acquired: file_id=%s", file_id)
        return UploadTicket(upload_url=upload_url, file_id=file_id)

    def _upload_binary(self, ticket: UploadTicket, file_path: str) -> None:
        try:
            with open(file_path, "rb") as fh:
                contents = fh.read()
        except OSError as e:
            raise LocalIoError(f"Unable to read file contents: {file_path}") from e

        resp = self._post(
            "upload",
            ticket.upload_url,
            data=contents,
            headers={"Content-Type": "application/octet-stream"},
        )
        if resp.status_code != 200:
            raise RemoteApiError(
                f"Slack upload URL returned HTTP {resp.status_code}, body: {resp.text}"
            )

    def _complete_upload_external(self, file_id: str, filename: str, message: str) -> None:
        call = "files.completeUploadExternal"
        try:
            files_payload = json.dumps([{"id": file_id, "title": filename}], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise EncodingError("Failed to encode files payload for Slack.") from e

        body = self._encode_form(
            {
                "files": files_payload,
                "channel_id": self._settings.channel_id,
                "initial_comment": message,
            },
            "Failed to encode files payload for Slack.",
        )
        resp = self._post(
            call,
            self._settings.complete_upload_url,
            data=body,
            headers=self._auth_headers(),
        )
        data = self._decode(call, resp)
        self._require_ok(call, data, expose_payload=False)

    # ---------------------------------------------------------
    # HTTP helpers
    # ---------------------------------------------------------
    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.bot_token}"}

    @staticmethod
    def _encode_form(fields: Dict[str, Any], error_message: str) -> Dict[str, bytes]:
        # Encoded here so a bad str fails before requests prepares the body.
        try:
            return {k: str(v).encode("utf-8") for k, v in fields.items()}
        except ValueError as e:
            raise EncodingError(error_message) from e

    def _post(self, call: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._session.post(url, timeout=self._settings.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Transport error ({call}): {e}") from e

    @staticmethod
    def _decode(call: str, resp: requests.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Unable to decode JSON response ({call}).") from e

        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Unable to decode JSON response ({call}).")
        return data

    @staticmethod
    def _require_ok(call: str, data: Dict[str, Any], *, expose_payload: bool) -> None:
        if data.get("ok"):
            return
        raise RemoteApiError(
            f"Slack {call} error: {data.get('error') or 'unknown'}",
            data if expose_payload else None,
        )
