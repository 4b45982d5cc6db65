"""SMS delivery channels.

Every channel implements ``SMSSender.send(message) -> SMSResult``; the active
one is picked from ``settings.sms_provider`` at startup.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Protocol

import httpx

from lodgedesk.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMSMessage:
    to: str  # E.164, e.g. +919876543210
    message: str


@dataclass(frozen=True)
class SMSResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


class SMSSender(Protocol):
    name: str

    async def send(self, message: SMSMessage) -> SMSResult: ...


class LoggingSMSSender:
    """Development channel: writes the SMS to the log and reports success."""

    name = "log"

    async def send(self, message: SMSMessage) -> SMSResult:
        message_id = f"log-{uuid.uuid4().hex[:12]}"
        logger.info("[SMS %s] to %s: %s", message_id, message.to, message.message)
        return SMSResult(success=True, message_id=message_id)


class TwilioSMSSender:
    """Twilio Programmable Messaging over its REST API."""

    name = "twilio"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def send(self, message: SMSMessage) -> SMSResult:
        url = f"{self.base_url}/Accounts/{self.account_sid}/Messages.json"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    url,
                    data={"To": message.to, "From": self.from_number, "Body": message.message},
                    auth=(self.account_sid, self.auth_token),
                )
        except httpx.HTTPError as e:
            logger.error("Twilio request to %s failed: %s", message.to, e)
            return SMSResult(success=False, error=f"Twilio unreachable: {e}")

        if resp.status_code >= 400:
            try:
                error = resp.json().get("message") or resp.text
            except ValueError:
                error = resp.text
            logger.warning("Twilio rejected SMS to %s (%s): %s", message.to, resp.status_code, error)
            return SMSResult(success=False, error=error)

        sid = resp.json().get("sid")
        logger.info("Twilio accepted SMS %s to %s", sid, message.to)
        return SMSResult(success=True, message_id=sid)


def build_sender(settings: Settings) -> SMSSender:
    """Create the channel configured by ``SMS_PROVIDER``."""
    if settings.sms_provider == "twilio":
        return TwilioSMSSender(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_from_number,
            base_url=settings.twilio_api_base_url,
            timeout=settings.sms_timeout_seconds,
        )
    logger.warning("No SMS provider configured; messages will only be logged.")
    return LoggingSMSSender()
