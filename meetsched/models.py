"""Domain records for users, events, time slots and availability."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:(Z)|([+-])(\d{2}):(\d{2}))"
)

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class ModelError(ValueError):
    """Raised when a record cannot be built from its serialized form."""


def parse_time(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp into a timezone-aware datetime."""
    if not isinstance(value, str):
        raise ModelError(f"invalid time {value!r}: expected a string")
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise ModelError(f"invalid time {value!r}: expected RFC 3339")
    year, month, day, hour, minute, second, frac, zulu, sign, off_h, off_m = match.groups()
    micro = int(frac.ljust(6, "0")[:6]) if frac else 0
    try:
        if zulu:
            tz = timezone.utc
        else:
            hours, minutes = int(off_h), int(off_m)
            if hours > 23 or minutes > 59:
                raise ValueError("time zone offset out of range")
            offset = timedelta(hours=hours, minutes=minutes)
            if sign == "-":
                offset = -offset
            tz = timezone(offset) if offset else timezone.utc
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micro,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise ModelError(f"invalid time {value!r}: {exc}") from exc


def format_time(value: datetime) -> str:
    """Format a timezone-aware datetime as an RFC 3339 timestamp."""
    if not isinstance(value, datetime):
        raise ModelError(f"cannot format {value!r} as a time")
    offset = value.utcoffset()
    if offset is None:
        raise ModelError(f"cannot format naive time {value.isoformat()}")
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    total_minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _require_mapping(data: Any, kind: str) -> dict:
    if not isinstance(data, dict):
        raise ModelError(f"{kind} must be a JSON object")
    return data


def _str_field(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ModelError(f"field {key!r} must be a string")
    return value


def _int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ModelError(f"field {key!r} must be an integer")
    return value


def _time_field(data: dict, key: str) -> datetime:
    value = data.get(key)
    if value is None:
        return _ZERO_TIME
    return parse_time(value)


def _str_list_field(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ModelError(f"field {key!r} must be a list of strings")
    return list(value)


def _slots_field(data: dict, key: str) -> list[Slot]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelError(f"field {key!r} must be a list of slots")
    return [Slot.from_dict(item) for item in value]


@dataclass
class User:
    """A registered participant."""

    id: str = ""
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> User:
        data = _require_mapping(data, "user")
        return cls(id=_str_field(data, "id"), name=_str_field(data, "name"))


@dataclass
class Slot:
    """A time window from start to end."""

    start: datetime = _ZERO_TIME
    end: datetime = _ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        return {"start": format_time(self.start), "end": format_time(self.end)}

    @classmethod
    def from_dict(cls, data: Any) -> Slot:
        data = _require_mapping(data, "slot")
        return cls(start=_time_field(data, "start"), end=_time_field(data, "end"))


@dataclass
class Event:
    """A meeting to be scheduled within candidate slots."""

    id: str = ""
    title: str = ""
    duration_min: int = 0
    slots: list[Slot] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "duration_min": self.duration_min,
            "slots": [slot.to_dict() for slot in self.slots],
            "participants": list(self.participants),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        data = _require_mapping(data, "event")
        return cls(
            id=_str_field(data, "id"),
            title=_str_field(data, "title"),
            duration_min=_int_field(data, "duration_min"),
            slots=_slots_field(data, "slots"),
            participants=_str_list_field(data, "participants"),
        )


@dataclass
class Availability:
    """The slots in which one user can attend one event."""

    event_id: str = ""
    user_id: str = ""
    slots: list[Slot] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "user_id": self.user_id,
            "slots": [slot.to_dict() for slot in self.slots],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Availability:
        data = _require_mapping(data, "availability")
        return cls(
            event_id=_str_field(data, "event_id"),
            user_id=_str_field(data, "user_id"),
            slots=_slots_field(data, "slots"),
        )


@dataclass
class SlotSuggestion:
    """A proposed meeting window and the participants who cannot make it."""

    slot: Slot
    unavailable_users: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot": self.slot.to_dict(),
            "unavailable_users": list(self.unavailable_users),
        }