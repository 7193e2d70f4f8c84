"""Naive-UTC time helpers shared by the domain services"""

from datetime import datetime, time, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time without tzinfo, matching what the database stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_today() -> datetime:
    return datetime.combine(utcnow().date(), time.min)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
