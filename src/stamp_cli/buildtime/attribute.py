"""The build time attribute record and its tick/date-time codec."""

import re
from dataclasses import dataclass
from datetime import MINYEAR, date, datetime, time, timedelta, timezone


# Ticks are 100-nanosecond intervals since 0001-01-01T00:00:00Z
TICKS_EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)
TICKS_PER_SECOND = 10_000_000
TICKS_PER_MICROSECOND = 10

_TICKS_RE = re.compile(r'^\s*[+-]?\d+\s*$')


class TimestampFormatError(ValueError):
    """A build stamp is present but its text is not a timestamp."""


def ticks_to_datetime(ticks: int) -> datetime:
    """Convert UTC ticks to an aware UTC datetime (sub-microsecond ticks are truncated)."""
    try:
        return TICKS_EPOCH + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)
    except OverflowError as e:
        raise TimestampFormatError(f"Tick count out of range: {ticks}") from e


def datetime_to_ticks(value: datetime) -> int:
    """Convert an aware datetime to UTC ticks."""
    delta = value.astimezone(timezone.utc) - TICKS_EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * TICKS_PER_SECOND + delta.microseconds * TICKS_PER_MICROSECOND


def to_local_time(value: datetime) -> datetime:
    """Convert an aware datetime to the local timezone.

    Instants whose local time falls outside the datetime range are clamped to
    ``datetime.min`` or ``datetime.max`` in the local zone.
    """
    try:
        return value.astimezone()
    except (OverflowError, OSError):
        local_tz = datetime.now().astimezone().tzinfo
        bound = datetime.min if value.year == MINYEAR else datetime.max
        return bound.replace(tzinfo=local_tz)


def parse_datetime(text: str) -> datetime:
    """Parse date-time text and convert it to UTC.

    Naive values are taken as local time, like a build machine writing its
    wall clock.

    Raises:
        TimestampFormatError: If the text is not an ISO 8601 date-time.
    """
    if text is None:
        raise TimestampFormatError("Timestamp text is missing")
    value = text.strip()
    # fromisoformat only learned "Z" in 3.11
    if value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(value)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise TimestampFormatError(f"Invalid timestamp '{text}': {e}") from e


@dataclass(frozen=True)
class AssemblyBuildTime:
    """The build time of an artifact.

    Only the UTC instant is stored; every other view is derived from it.
    """
    utc_build_time: datetime

    NAME = "AssemblyBuildTime"

    def __post_init__(self):
        if self.utc_build_time.tzinfo is None:
            raise ValueError("utc_build_time must be timezone-aware")
        if self.utc_build_time.utcoffset() != timedelta(0):
            object.__setattr__(self, 'utc_build_time', self.utc_build_time.astimezone(timezone.utc))

    @classmethod
    def parse(cls, utc_ticks_or_datetime: str) -> 'AssemblyBuildTime':
        """Build the record from its constructor argument.

        Args:
            utc_ticks_or_datetime: An integer tick count, or a date-time string.
                Anything that reads as an integer is treated as ticks.

        Raises:
            TimestampFormatError: If the argument is neither.
        """
        if utc_ticks_or_datetime is not None and _TICKS_RE.match(utc_ticks_or_datetime):
            return cls(ticks_to_datetime(int(utc_ticks_or_datetime)))
        return cls(parse_datetime(utc_ticks_or_datetime))

    @classmethod
    def from_ticks(cls, ticks: int) -> 'AssemblyBuildTime':
        return cls(ticks_to_datetime(ticks))

    @property
    def utc_ticks(self) -> int:
        return datetime_to_ticks(self.utc_build_time)

    def to_argument(self) -> str:
        """Render the constructor argument (tick count) that round-trips this record."""
        return str(self.utc_ticks)

    @property
    def build_time(self) -> datetime:
        """The build time in the local timezone."""
        return to_local_time(self.utc_build_time)

    @property
    def utc_build_date(self) -> date:
        return self.utc_build_time.date()

    @property
    def build_date(self) -> date:
        return self.build_time.date()

    @property
    def utc_build_time_of_day(self) -> time:
        return self.utc_build_time.time()

    @property
    def build_time_of_day(self) -> time:
        return self.build_time.time()
