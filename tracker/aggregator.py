"""Period aggregation over logged internship entries.

Groups entries into calendar weeks (Monday to Sunday) and calendar months,
totals logged minutes, computes completion rates and tallies tags and tools.
Everything here is pure: no I/O, inputs are never mutated.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in_progress"
STATUS_PENDING = "pending"
STATUSES = (STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_PENDING)

STATUS_LABELS = {
    STATUS_COMPLETED: "Completed",
    STATUS_IN_PROGRESS: "In Progress",
    STATUS_PENDING: "Pending",
}

_STATUS_ALIASES = {
    "completed": STATUS_COMPLETED,
    "complete": STATUS_COMPLETED,
    "done": STATUS_COMPLETED,
    "in_progress": STATUS_IN_PROGRESS,
    "in progress": STATUS_IN_PROGRESS,
    "inprogress": STATUS_IN_PROGRESS,
    "in-progress": STATUS_IN_PROGRESS,
    "pending": STATUS_PENDING,
}


def normalize_status(value: object) -> str:
    if not isinstance(value, str):
        return STATUS_PENDING
    return _STATUS_ALIASES.get(value.strip().lower(), STATUS_PENDING)


def is_known_status(value: object) -> bool:
    return isinstance(value, str) and value.strip().lower() in _STATUS_ALIASES


def parse_record_date(value: object) -> Optional[date]:
    """Return the calendar date of ``value`` or None when it cannot be read.

    Accepts ``date``/``datetime`` objects and ISO strings; a time part after
    the date (``2024-01-05T10:00:00``) is ignored.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if len(text) > 10:
            if text[10] not in "T ":
                return None
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def coerce_minutes(value: object) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return 0
    return max(minutes, 0)


def minutes_to_hours(total_minutes: int, places: int = 1) -> float:
    return round(coerce_minutes(total_minutes) / 60, places)


def minutes_to_label(total_minutes: int) -> str:
    minutes = coerce_minutes(total_minutes)
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def split_minutes(total_minutes: int) -> Tuple[int, int]:
    return divmod(coerce_minutes(total_minutes), 60)


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # half-up rounding in integer arithmetic
    return (200 * part + whole) // (2 * whole)


@dataclass(frozen=True)
class ActivityRecord:
    date: Optional[date]
    duration_minutes: int = 0
    status: str = STATUS_PENDING
    tags: str = ""
    skills_tools: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, object]) -> "ActivityRecord":
        keys = set(row.keys())

        def _get(*names: str) -> object:
            for name in names:
                if name in keys:
                    return row[name]
            return None

        return cls(
            date=parse_record_date(_get("entry_date", "date")),
            duration_minutes=coerce_minutes(_get("duration_minutes", "time_spent")),
            status=normalize_status(_get("status")),
            tags=str(_get("tags") or ""),
            skills_tools=str(_get("skills_tools") or ""),
        )

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED


RecordLike = Union[ActivityRecord, Mapping[str, object]]


@dataclass(frozen=True)
class PeriodRange:
    start: date
    end: date

    def effective_end(self, today: Optional[date] = None) -> date:
        today = today or date.today()
        return min(today, self.end)


@dataclass
class DaySlot:
    day: date
    minutes: int = 0

    @property
    def label(self) -> str:
        return self.day.strftime("%a")

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def to_dict(self) -> Dict[str, object]:
        return {
            "day": self.label,
            "date": self.day.isoformat(),
            "minutes": self.minutes,
            "hours": self.hours,
        }


@dataclass
class _Bucket:
    total_minutes: int = 0
    completed_count: int = 0
    record_count: int = 0

    def add(self, record: ActivityRecord) -> None:
        self.total_minutes += record.duration_minutes
        self.record_count += 1
        if record.is_completed:
            self.completed_count += 1

    @property
    def completion_rate(self) -> int:
        return percentage(self.completed_count, self.record_count)

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.total_minutes)


@dataclass
class WeekBucket(_Bucket):
    week_start: date = date.min
    week_end: date = date.min
    daily_breakdown: List[DaySlot] = field(default_factory=list)

    def add(self, record: ActivityRecord) -> None:
        super().add(record)
        for slot in self.daily_breakdown:
            if slot.day == record.date:
                slot.minutes += record.duration_minutes
                break

    @property
    def label(self) -> str:
        return f"{self.week_start:%b %d} - {self.week_end:%b %d}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "label": self.label,
            "total_minutes": self.total_minutes,
            "total_hours": self.total_hours,
            "completion_rate": self.completion_rate,
            "record_count": self.record_count,
            "days": [slot.to_dict() for slot in self.daily_breakdown],
        }


@dataclass
class MonthBucket(_Bucket):
    month_start: date = date.min
    month_end: date = date.min

    @property
    def label(self) -> str:
        return self.month_start.strftime("%b %Y")

    def to_dict(self) -> Dict[str, object]:
        return {
            "month": self.label,
            "month_start": self.month_start.isoformat(),
            "month_end": self.month_end.isoformat(),
            "total_minutes": self.total_minutes,
            "total_hours": self.total_hours,
            "completion_rate": self.completion_rate,
            "record_count": self.record_count,
        }


def as_records(records: Iterable[RecordLike]) -> List[ActivityRecord]:
    converted = []
    for record in records:
        if isinstance(record, ActivityRecord):
            converted.append(record)
        else:
            converted.append(ActivityRecord.from_mapping(record))
    return converted


def _dated_records(records: Iterable[RecordLike]) -> List[ActivityRecord]:
    dated = []
    skipped = 0
    for record in as_records(records):
        if record.date is None:
            skipped += 1
            continue
        dated.append(record)
    if skipped:
        logger.warning("Skipped %d record(s) with an unparseable date", skipped)
    dated.sort(key=lambda r: r.date)
    return dated


def week_start_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def month_start_of(day: date) -> date:
    return day.replace(day=1)


def month_end_of(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def weeks_between(start: date, end: date) -> int:
    return (end - start).days // 7


def months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def _fill(bucket: _Bucket, records: List[ActivityRecord], first: date, last: date, cursor: int) -> int:
    # records are sorted by date; return the index of the first record after ``last``
    while cursor < len(records) and records[cursor].date < first:
        cursor += 1
    while cursor < len(records) and records[cursor].date <= last:
        bucket.add(records[cursor])
        cursor += 1
    return cursor


def bucket_by_week(
    records: Iterable[RecordLike],
    period: PeriodRange,
    today: Optional[date] = None,
) -> List[WeekBucket]:
    """Partition ``period`` into Monday-to-Sunday weeks and total each one.

    The analysis stops at the effective end (the earlier of ``today`` and
    ``period.end``), so the last week may be shorter than seven days. A start
    after the effective end yields a single empty one-day bucket.
    """
    effective_end = period.effective_end(today)
    dated = _dated_records(records)

    if period.start > effective_end:
        logger.info("Week aggregation: start %s is after %s", period.start, effective_end)
        return [
            WeekBucket(
                week_start=period.start,
                week_end=period.start,
                daily_breakdown=[DaySlot(period.start)],
            )
        ]

    first_monday = week_start_of(period.start)
    count = max(1, weeks_between(first_monday, effective_end) + 1)

    buckets: List[WeekBucket] = []
    cursor = 0
    for index in range(count):
        anchor = period.start + timedelta(weeks=index)
        if week_start_of(anchor) > effective_end:
            break
        week_start = week_start_of(anchor)
        week_end = min(week_start + timedelta(days=6), effective_end)
        days = (week_end - week_start).days + 1
        bucket = WeekBucket(
            week_start=week_start,
            week_end=week_end,
            daily_breakdown=[DaySlot(week_start + timedelta(days=i)) for i in range(days)],
        )
        cursor = _fill(bucket, dated, week_start, week_end, cursor)
        buckets.append(bucket)
    return buckets


def bucket_by_month(
    records: Iterable[RecordLike],
    period: PeriodRange,
    today: Optional[date] = None,
) -> List[MonthBucket]:
    """Partition ``period`` into calendar months, clipping the last one."""
    effective_end = period.effective_end(today)
    dated = _dated_records(records)

    if period.start > effective_end:
        logger.info("Month aggregation: start %s is after %s", period.start, effective_end)
        return [MonthBucket(month_start=month_start_of(period.start), month_end=period.start)]

    first_month = month_start_of(period.start)
    count = max(1, months_between(first_month, effective_end) + 1)

    buckets: List[MonthBucket] = []
    cursor = 0
    for index in range(count):
        month_start = add_months(first_month, index)
        if month_start > effective_end:
            break
        month_end = min(month_end_of(month_start), effective_end)
        bucket = MonthBucket(month_start=month_start, month_end=month_end)
        cursor = _fill(bucket, dated, month_start, month_end, cursor)
        buckets.append(bucket)
    return buckets


def split_labels(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [piece.strip() for piece in value.split(",") if piece.strip()]


def _tally(records: Iterable[RecordLike], attribute: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for record in as_records(records):
        for label in split_labels(getattr(record, attribute)):
            counts[label] = counts.get(label, 0) + 1
    return counts


def tally_tags(records: Iterable[RecordLike]) -> Dict[str, int]:
    return _tally(records, "tags")


def tally_tools(records: Iterable[RecordLike]) -> Dict[str, int]:
    return _tally(records, "skills_tools")


def top_labels(counts: Mapping[str, int], limit: int) -> List[Tuple[str, int]]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[: max(limit, 0)]


@dataclass
class ReportSummary:
    total_entries: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    total_minutes: int = 0
    active_days: int = 0

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    @property
    def open_entries(self) -> int:
        return self.in_progress + self.pending

    def status_distribution(self) -> List[Dict[str, object]]:
        counts = {
            STATUS_COMPLETED: self.completed,
            STATUS_PENDING: self.pending,
            STATUS_IN_PROGRESS: self.in_progress,
        }
        return [
            {
                "status": status,
                "name": STATUS_LABELS[status],
                "value": value,
                "percent": percentage(value, self.total_entries),
            }
            for status, value in counts.items()
        ]

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_entries": self.total_entries,
            "completed": self.completed,
            "in_progress": self.in_progress,
            "pending": self.pending,
            "total_minutes": self.total_minutes,
            "total_hours": self.total_hours,
            "active_days": self.active_days,
            "status_distribution": self.status_distribution(),
        }


def summarize(records: Iterable[RecordLike]) -> ReportSummary:
    summary = ReportSummary()
    days = set()
    for record in as_records(records):
        summary.total_entries += 1
        summary.total_minutes += record.duration_minutes
        if record.status == STATUS_COMPLETED:
            summary.completed += 1
        elif record.status == STATUS_IN_PROGRESS:
            summary.in_progress += 1
        else:
            summary.pending += 1
        if record.date is not None:
            days.add(record.date)
    summary.active_days = len(days)
    return summary


def current_week(records: Iterable[RecordLike], today: Optional[date] = None) -> List[DaySlot]:
    today = today or date.today()
    monday = week_start_of(today)
    slots = [DaySlot(monday + timedelta(days=i)) for i in range(7)]
    by_day = {slot.day: slot for slot in slots}
    for record in as_records(records):
        slot = by_day.get(record.date)
        if slot is not None:
            slot.minutes += record.duration_minutes
    return slots
