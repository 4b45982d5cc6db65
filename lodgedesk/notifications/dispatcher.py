"""Notification dispatcher: render, throttle, deliver and record SMS messages."""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.config import Settings
from lodgedesk.database import utcnow
from lodgedesk.errors import DependencyError, LodgeError, RateLimited
from lodgedesk.models.notification_log import NotificationLog
from lodgedesk.notifications.phone import normalize_phone_number
from lodgedesk.notifications.rate_limit import SlidingWindowRateLimiter
from lodgedesk.notifications.senders import SMSMessage, SMSResult, SMSSender, build_sender
from lodgedesk.notifications.templates import get_template, render_template

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]
Schedule = Callable[..., Any]


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    message_id: str | None = None
    error: str | None = None
    log_id: uuid.UUID | None = None


class NotificationDispatcher:
    """Sends SMS through one channel and writes an audit row per attempt.

    The dispatcher opens its own database sessions so that logging is
    independent of the request that triggered the message.
    """

    def __init__(
        self,
        sender: SMSSender,
        session_factory: SessionFactory,
        rate_limiter: SlidingWindowRateLimiter,
        country_code: str = "91",
    ) -> None:
        self.sender = sender
        self.rate_limiter = rate_limiter
        self.country_code = country_code
        self._session_factory = session_factory
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send(
        self,
        template_id: str,
        phone: str,
        variables: dict[str, str],
        guest_id: uuid.UUID | None = None,
    ) -> NotificationResult:
        """Render ``template_id`` with ``variables`` and deliver it to ``phone``.

        Raises:
            TemplateNotFound, MissingVariables: before anything is sent or logged.
            RateLimited: the phone number used up its window; logged as failed.
        """
        template = get_template(template_id)
        message = render_template(template, variables)
        return await self._deliver(phone, message, guest_id=guest_id, template_id=template.id)

    async def send_message(
        self,
        phone: str,
        message: str,
        guest_id: uuid.UUID | None = None,
    ) -> NotificationResult:
        """Deliver free text, e.g. a bill typed by staff."""
        return await self._deliver(phone, message, guest_id=guest_id, template_id=None)

    async def _deliver(
        self,
        phone: str,
        message: str,
        *,
        guest_id: uuid.UUID | None,
        template_id: str | None,
    ) -> NotificationResult:
        to = normalize_phone_number(phone, self.country_code)

        if not self.rate_limiter.allow(to):
            await self._record(guest_id, phone, message, template_id, SMSResult(False, error="Rate limit exceeded"))
            raise RateLimited(f"Rate limit exceeded for {to}. Please try again later.")

        try:
            result = await self.sender.send(SMSMessage(to=to, message=message))
        except Exception as e:
            logger.exception("SMS channel %r raised while sending to %s", self.sender.name, to)
            result = SMSResult(success=False, error=str(e) or e.__class__.__name__)

        log_id = await self._record(guest_id, phone, message, template_id, result)
        return NotificationResult(
            success=result.success,
            message_id=result.message_id,
            error=result.error,
            log_id=log_id,
        )

    async def _record(
        self,
        guest_id: uuid.UUID | None,
        phone: str,
        message: str,
        template_id: str | None,
        result: SMSResult,
    ) -> uuid.UUID:
        entry = NotificationLog(
            guest_id=guest_id,
            phone_number=phone,
            message=message,
            template_id=template_id,
            status="sent" if result.success else "failed",
            provider_message_id=result.message_id,
            error=result.error,
            sent_at=utcnow(),
        )
        try:
            async with self._session_factory() as session:
                session.add(entry)
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception("Could not record notification to %s", phone)
            raise DependencyError("Notification log unavailable") from e
        return entry.id

    # ------------------------------------------------------------------
    # Fire-and-forget
    # ------------------------------------------------------------------

    async def send_in_background(
        self,
        template_id: str,
        phone: str,
        variables: dict[str, str],
        guest_id: uuid.UUID | None = None,
    ) -> None:
        """``send`` for detached use: every failure is logged, none is raised."""
        try:
            result = await self.send(template_id, phone, variables, guest_id)
        except LodgeError as e:
            logger.warning("Notification %s to %s not sent: %s", template_id, phone, e.detail)
            return
        except Exception:
            logger.exception("Notification %s to %s crashed", template_id, phone)
            return

        if result.success:
            logger.info("Notification %s sent to %s (%s)", template_id, phone, result.message_id)
        else:
            logger.warning("Notification %s to %s failed: %s", template_id, phone, result.error)

    def notify(
        self,
        template_id: str,
        phone: str,
        variables: dict[str, str],
        guest_id: uuid.UUID | None = None,
        *,
        schedule: Schedule | None = None,
    ) -> None:
        """Queue a templated message without waiting for it.

        ``schedule`` is called as ``schedule(func, *args)``, e.g.
        ``BackgroundTasks.add_task``; by default a detached task is spawned.
        """
        runner = schedule or self.spawn
        try:
            runner(self.send_in_background, template_id, phone, variables, guest_id)
        except Exception:
            logger.exception("Could not schedule notification %s for %s", template_id, phone)

    def spawn(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> None:
        """Run ``func`` as a detached task; same call shape as ``BackgroundTasks.add_task``."""
        task = asyncio.create_task(func(*args, **kwargs))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for detached tasks, used on shutdown."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)


def create_dispatcher(settings: Settings, session_factory: SessionFactory) -> NotificationDispatcher:
    return NotificationDispatcher(
        sender=build_sender(settings),
        session_factory=session_factory,
        rate_limiter=SlidingWindowRateLimiter(
            max_events=settings.sms_rate_limit_max,
            window_seconds=settings.sms_rate_limit_window_seconds,
        ),
        country_code=settings.sms_country_code,
    )
