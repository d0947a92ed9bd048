"""
Session Manager

Tracks which identity each access token speaks for and enforces session
lifetimes. Demo sessions additionally carry a countdown:

    Anonymous -> Authenticated              (login / registration)
    Anonymous -> DemoAuthenticated          (demo activation)
    Authenticated -> Anonymous              (logout, lifetime elapsed)
    DemoAuthenticated -> Anonymous          (logout, countdown reached zero)

Expiry is enforced twice: a background task ticks every session once per
tick interval, and every request re-checks its own session before it is
honored. Whichever notices first revokes the session; both paths only ever
move towards rejection.
"""

import asyncio
import logging
import math
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from eduhub.core.config import settings

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
ExpiryListener = Callable[["DemoCountdown"], None]


class SessionError(Exception):
    """Base exception for session errors."""
    pass


class SessionNotFoundError(SessionError):
    """Session never existed or was closed."""
    pass


class SessionExpiredError(SessionError):
    """Session outlived its deadline."""
    pass


# ============================================================
# Demo Countdown
# ============================================================

class DemoCountdown:
    """
    Time remaining in a demo session.

    `time_left` is recomputed on every tick as whole seconds until the
    deadline, never below zero. `is_expiring` and `expired` are latches:
    once set they stay set, even if a later tick reads an earlier clock
    value. Expiry listeners fire exactly once, on the tick that reaches
    zero.
    """

    def __init__(
        self,
        deadline: float,
        warning_seconds: int,
        clock: Clock,
    ):
        self.deadline = deadline
        self.warning_seconds = warning_seconds
        self.clock = clock
        self.time_left = self._remaining(clock())
        self.is_expiring = False
        self.expired = False
        self._listeners: List[ExpiryListener] = []

    def _remaining(self, now: float) -> int:
        return max(0, math.ceil(self.deadline - now))

    def on_expire(self, listener: ExpiryListener) -> None:
        self._listeners.append(listener)

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Recompute the remaining time.

        Returns:
            True only for the tick that crossed zero
        """
        if self.expired:
            return False

        if now is None:
            now = self.clock()

        self.time_left = self._remaining(now)

        if self.time_left <= self.warning_seconds:
            self.is_expiring = True

        if self.time_left > 0:
            return False

        self.expired = True
        for listener in self._listeners:
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Demo expiry listener failed: {e}")
        return True

    def status(self) -> dict:
        return {
            "time_left": self.time_left,
            "is_expiring": self.is_expiring,
            "expired": self.expired,
        }


# ============================================================
# Session
# ============================================================

@dataclass
class Session:
    """A server-side session bound to one user."""
    id: str
    user_id: int
    is_demo: bool
    created_at: float
    expires_at: float
    countdown: Optional[DemoCountdown] = field(default=None, repr=False)

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)

    def seconds_left(self, now: float) -> int:
        return max(0, int(self.expires_at - now))


# ============================================================
# Session Manager
# ============================================================

class SessionManager:
    """
    Registry of live sessions.

    Features:
    - Regular sessions with a fixed lifetime
    - Demo sessions with a countdown and an expiry event
    - Lazy expiry checks on resolve
    - Background ticker for demo countdowns and regular deadlines
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        session_seconds: Optional[int] = None,
        demo_seconds: Optional[int] = None,
        warning_seconds: Optional[int] = None,
        tick_seconds: Optional[float] = None,
    ):
        self.clock: Clock = clock or time.time
        self.session_seconds = (
            settings.SESSION_EXPIRE_MINUTES * 60 if session_seconds is None else session_seconds
        )
        self.demo_seconds = (
            settings.DEMO_SESSION_SECONDS if demo_seconds is None else demo_seconds
        )
        self.warning_seconds = (
            settings.DEMO_WARNING_SECONDS if warning_seconds is None else warning_seconds
        )
        self.tick_seconds = (
            settings.DEMO_TICK_SECONDS if tick_seconds is None else tick_seconds
        )

        # Map: session_id -> Session
        self._sessions: Dict[str, Session] = {}

        # Map: session_id -> (is_demo, deadline), for sessions revoked by their
        # deadline. Kept for one regular session lifetime past the deadline.
        self._expired: Dict[str, Tuple[bool, float]] = {}

        self._ticker_task: Optional[asyncio.Task] = None

    # ============================================================
    # Opening / Closing
    # ============================================================

    def open(self, user_id: int) -> Session:
        """Open a regular session for a user."""
        now = self.clock()
        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            is_demo=False,
            created_at=now,
            expires_at=now + self.session_seconds,
        )
        self._sessions[session.id] = session
        logger.info(f"Session opened: user={user_id}, session={session.id}")
        return session

    def open_demo(self, user_id: int) -> Session:
        """Open a demo session whose countdown starts now."""
        now = self.clock()
        deadline = now + self.demo_seconds
        countdown = DemoCountdown(
            deadline=deadline,
            warning_seconds=self.warning_seconds,
            clock=lambda: self.clock(),
        )
        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            is_demo=True,
            created_at=now,
            expires_at=deadline,
            countdown=countdown,
        )
        countdown.on_expire(lambda _: self._expire(session.id))
        self._sessions[session.id] = session
        logger.info(
            f"Demo session opened: user={user_id}, session={session.id}, "
            f"expires in {self.demo_seconds}s"
        )
        return session

    def close(self, session_id: str) -> bool:
        """Close a session (logout). Returns False if it was not open."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info(f"Session closed: user={session.user_id}, session={session_id}")
        return True

    def _expire(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        self._expired[session_id] = (session.is_demo, session.expires_at)
        kind = "Demo session" if session.is_demo else "Session"
        logger.info(f"{kind} expired: user={session.user_id}, session={session_id}")

    # ============================================================
    # Lookup
    # ============================================================

    def resolve(self, session_id: str) -> Session:
        """
        Get a live session, enforcing its deadline first.

        Raises:
            SessionExpiredError: If the session ran out of time
            SessionNotFoundError: If the session is unknown or closed
        """
        session = self._sessions.get(session_id)

        if session is not None:
            if session.countdown is not None:
                session.countdown.tick()
            elif self.clock() >= session.expires_at:
                self._expire(session_id)

        if session_id in self._expired:
            is_demo, _ = self._expired[session_id]
            if is_demo:
                raise SessionExpiredError("Demo session expired")
            raise SessionExpiredError("Session expired")

        if session is None:
            raise SessionNotFoundError("Session not found")

        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def active_sessions(self) -> List[Session]:
        return list(self._sessions.values())

    # ============================================================
    # Ticking
    # ============================================================

    def tick(self, now: Optional[float] = None) -> List[str]:
        """
        Advance every demo countdown once, expire regular sessions past
        their deadline and forget expiry records older than one regular
        session lifetime.

        Returns:
            Ids of the sessions that expired on this tick
        """
        if now is None:
            now = self.clock()

        expired = []
        for session in list(self._sessions.values()):
            if session.countdown is not None:
                if session.countdown.tick(now):
                    expired.append(session.id)
            elif now >= session.expires_at:
                self._expire(session.id)
                expired.append(session.id)

        self._prune_expired(now)
        return expired

    def _prune_expired(self, now: float) -> None:
        stale = [
            session_id
            for session_id, (_, deadline) in self._expired.items()
            if now >= deadline + self.session_seconds
        ]
        for session_id in stale:
            del self._expired[session_id]

    async def run_ticker(self) -> None:
        """Tick sessions until cancelled."""
        while True:
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Demo ticker error: {e}")
            await asyncio.sleep(self.tick_seconds)

    def start(self) -> None:
        """Start the background ticker if not running."""
        if self._ticker_task is None or self._ticker_task.done():
            self._ticker_task = asyncio.create_task(self.run_ticker())
            logger.info("Demo session ticker started")

    async def stop(self) -> None:
        """Cancel the background ticker."""
        if self._ticker_task is None:
            return
        self._ticker_task.cancel()
        try:
            await self._ticker_task
        except asyncio.CancelledError:
            pass
        self._ticker_task = None
        logger.info("Demo session ticker stopped")
