# utils/clock.py
import calendar
from datetime import datetime, date, timezone

DAY_SECONDS = 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    # 주차/요일 계산은 모두 UTC 기준
    return utcnow().date()


def to_iso(value: datetime) -> str:
    return value.isoformat()


def parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def add_months(value: datetime, months: int) -> datetime:
    # 말일 보정 (1/31 + 1개월 → 2/28 또는 2/29)
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def calendar_months_between(start: datetime, end: datetime) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)
