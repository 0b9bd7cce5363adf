from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value):
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_before(days: int, now: datetime | None = None) -> datetime:
    """Start of a trailing window of ``days`` ending at ``now`` (UTC)."""
    reference = ensure_utc(now) if now is not None else utc_now()
    return reference - timedelta(days=days)
