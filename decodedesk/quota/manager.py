"""
Translation quota for guests and logged-in users.

Guests get ``guest_limit`` actions. A logged-in identity gets
``user_weekly_limit`` actions, or ``total_weekly_limit`` combined actions
when guest actions were already taken in the same window. The window is a
rolling 7 days anchored at the first action since the last reset, and the
reset is applied lazily on the next read.

The quota is advisory: storage problems never block the caller, they reset
the record to a fresh one instead.
"""

import json
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from decodedesk.core.exceptions import ConfigurationError, StorageError
from decodedesk.core.models import QuotaRecord, QuotaStatus, QuotaSummary, week_start
from decodedesk.quota.storage import QUOTA_KEY, SESSION_KEY, QuotaStorage

logger = logging.getLogger(__name__)

GUEST_LIMIT = 8
USER_WEEKLY_LIMIT = 5
TOTAL_WEEKLY_LIMIT = 13
WINDOW_DAYS = 7


@dataclass(frozen=True)
class QuotaLimits:
    """Allowance constants."""
    guest_limit: int = GUEST_LIMIT
    user_weekly_limit: int = USER_WEEKLY_LIMIT
    total_weekly_limit: int = TOTAL_WEEKLY_LIMIT
    window_days: int = WINDOW_DAYS

    def __post_init__(self):
        for name in ("guest_limit", "user_weekly_limit", "total_weekly_limit", "window_days"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"Quota limit {name} must be a non-negative integer, got {value!r}",
                    config_key=f"quota.{name}",
                    invalid_value=value
                )

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "QuotaLimits":
        section = (config or {}).get("quota", {}) or {}
        known = {k: section[k] for k in ("guest_limit", "user_weekly_limit", "total_weekly_limit", "window_days") if k in section}
        return cls(**known)


def local_now() -> datetime:
    return datetime.now().astimezone()


class QuotaManager:
    """Single source of truth for "may this caller take one more action"."""

    def __init__(
        self,
        storage: QuotaStorage,
        limits: Optional[QuotaLimits] = None,
        clock: Callable[[], datetime] = local_now
    ):
        """
        Args:
            storage: Where the quota record and session identifier live
            limits: Allowance constants (defaults: 8 guest, 5 user, 13 combined)
            clock: Returns the current time; naive values are taken as local time
        """
        self.storage = storage
        self.limits = limits or QuotaLimits()
        self._clock = clock

    def _now(self) -> datetime:
        now = self._clock()
        return now if now.tzinfo is not None else now.astimezone()

    def _save(self, record: QuotaRecord) -> None:
        try:
            self.storage.set(QUOTA_KEY, json.dumps(record.to_dict()))
        except StorageError as e:
            logger.warning(f"Could not persist quota record: {e.message}")

    def _window_expired(self, record: QuotaRecord, now: datetime) -> bool:
        anchor = record.first_translation_date
        return anchor is not None and now - anchor >= timedelta(days=self.limits.window_days)

    def get_quota(self) -> QuotaRecord:
        """
        Current quota record, reset first if its window has run out.

        Never raises: unreadable or corrupt storage yields a fresh record,
        which is persisted.
        """
        now = self._now()
        raw = None
        try:
            raw = self.storage.get(QUOTA_KEY)
        except StorageError as e:
            logger.warning(f"Error reading quota: {e.message}")

        if raw:
            try:
                record = QuotaRecord.from_dict(json.loads(raw))
            except (ValueError, TypeError) as e:
                logger.warning(f"Discarding corrupt quota record: {e}")
            else:
                if not self._window_expired(record, now):
                    return record
                logger.info(
                    f"Quota window started {record.first_translation_date.isoformat()} has expired; resetting"
                )

        fresh = QuotaRecord.fresh(now)
        self._save(fresh)
        return fresh

    def _update(self, guest_used: int, user_used: int) -> QuotaRecord:
        """Store new counters; the window anchor is set once and then kept."""
        current = self.get_quota()
        now = self._now()
        anchor = current.first_translation_date
        if anchor is None and (guest_used > 0 or user_used > 0):
            anchor = now

        updated = QuotaRecord(
            guest_used=guest_used,
            user_used=user_used,
            week_start_date=week_start(now),
            first_translation_date=anchor
        )
        self._save(updated)
        return updated

    def can_translate(self, is_authenticated: bool) -> QuotaStatus:
        """
        Check whether one more action is allowed.

        Args:
            is_authenticated: Whether the caller is logged in

        Returns:
            QuotaStatus with remaining/total counts; logged-in callers also
            get the days until the weekly reset
        """
        quota = self.get_quota()

        if not is_authenticated:
            limit = self.limits.guest_limit
            return QuotaStatus(
                allowed=quota.guest_used < limit,
                remaining=limit - quota.guest_used,
                total=limit,
                is_weekly_limit=False
            )

        # Guest usage in the window switches to the combined cap
        limit = self.limits.total_weekly_limit if quota.guest_used > 0 else self.limits.user_weekly_limit
        used = quota.total_used
        return QuotaStatus(
            allowed=used < limit,
            remaining=limit - used,
            total=limit,
            is_weekly_limit=True,
            days_until_reset=self.days_until_reset()
        )

    def can_guest_translate(self) -> bool:
        return self.get_quota().guest_used < self.limits.guest_limit

    def record_consumption(self, is_authenticated: bool) -> QuotaRecord:
        """Count one successful action against the guest or user counter."""
        quota = self.get_quota()
        if is_authenticated:
            updated = self._update(quota.guest_used, quota.user_used + 1)
        else:
            updated = self._update(quota.guest_used + 1, quota.user_used)
        logger.debug(f"Recorded {'user' if is_authenticated else 'guest'} action: "
                     f"guest={updated.guest_used}, user={updated.user_used}")
        return updated

    def migrate_on_login(self) -> QuotaRecord:
        """
        Carry guest usage over to a freshly logged-in identity.

        Guest usage is kept (it counts against the combined cap) and the user
        counter starts from zero. The window anchor is kept as is, so a login
        late in a guest window still resets when that window ends.
        """
        quota = self.get_quota()
        if quota.guest_used > 0:
            migrated = self._update(quota.guest_used, 0)
        else:
            migrated = self._update(0, 0)
        logger.info(f"Migrated quota on login: guest={migrated.guest_used}, user={migrated.user_used}")
        return migrated

    def days_until_reset(self) -> int:
        """Whole days left in the window; a full window when nothing was used yet."""
        quota = self.get_quota()
        if quota.first_translation_date is None:
            return self.limits.window_days

        reset_at = quota.first_translation_date + timedelta(days=self.limits.window_days)
        days = math.ceil((reset_at - self._now()) / timedelta(days=1))
        return max(0, days)

    def get_summary(self, is_authenticated: bool) -> QuotaSummary:
        """Usage numbers for display."""
        quota = self.get_quota()
        status = self.can_translate(is_authenticated)
        return QuotaSummary(
            used=quota.total_used,
            total=status.total,
            remaining=status.remaining,
            reset_in=self.days_until_reset(),
            identity="user" if is_authenticated else "guest"
        )

    def get_session_id(self) -> str:
        """Anonymous session identifier, created on first use."""
        try:
            session_id = self.storage.get(SESSION_KEY)
        except StorageError as e:
            logger.warning(f"Error reading session id: {e.message}")
            session_id = None
        if session_id:
            return session_id

        session_id = f"session_{uuid.uuid4().hex}"
        try:
            self.storage.set(SESSION_KEY, session_id)
        except StorageError as e:
            logger.warning(f"Could not persist session id: {e.message}")
        return session_id

    def reset(self) -> None:
        """Remove the quota record and the session identifier."""
        for key in (QUOTA_KEY, SESSION_KEY):
            try:
                self.storage.delete(key)
            except StorageError as e:
                logger.warning(f"Could not clear {key}: {e.message}")
        logger.info("All quota data and session identifiers have been reset")
