import logging
from datetime import date, timedelta

import pytest

from tracker.aggregator import (
    ActivityRecord,
    PeriodRange,
    add_months,
    bucket_by_month,
    bucket_by_week,
    current_week,
    minutes_to_hours,
    minutes_to_label,
    months_between,
    normalize_status,
    parse_record_date,
    percentage,
    split_minutes,
    summarize,
    tally_tags,
    tally_tools,
    top_labels,
)


def daily_records(start, end, minutes=60, status="completed"):
    records = []
    day = start
    while day <= end:
        records.append(ActivityRecord(date=day, duration_minutes=minutes, status=status))
        day += timedelta(days=1)
    return records


def test_weekly_buckets_for_three_weeks():
    start, end = date(2024, 1, 1), date(2024, 1, 20)
    records = daily_records(start, end)

    buckets = bucket_by_week(records, PeriodRange(start, end), today=date(2024, 1, 20))

    assert len(buckets) == 3
    assert [b.total_minutes for b in buckets[:2]] == [420, 420]
    assert all(b.completion_rate == 100 for b in buckets)
    last = buckets[2]
    assert last.week_start == date(2024, 1, 15)
    assert last.week_end == date(2024, 1, 20)
    assert last.total_minutes == 60 * 6
    assert [slot.label for slot in last.daily_breakdown] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def test_weekly_buckets_are_contiguous():
    start, end = date(2024, 2, 7), date(2024, 3, 20)
    buckets = bucket_by_week([], PeriodRange(start, end), today=date(2024, 3, 20))

    assert buckets[0].week_start == date(2024, 2, 5)
    for previous, following in zip(buckets, buckets[1:]):
        assert following.week_start == previous.week_end + timedelta(days=1)
        assert (previous.week_end - previous.week_start).days == 6
    assert buckets[-1].week_end == end


def test_weekly_total_matches_records_in_range():
    start, end = date(2024, 1, 3), date(2024, 2, 12)
    records = daily_records(start, end, minutes=45)
    records.append(ActivityRecord(date=date(2024, 2, 13), duration_minutes=500))

    buckets = bucket_by_week(records, PeriodRange(start, end), today=date(2024, 6, 1))

    in_range = sum(r.duration_minutes for r in records if start <= r.date <= end)
    assert sum(b.total_minutes for b in buckets) == in_range


def test_weekly_sunday_start_keeps_final_partial_week():
    start, end = date(2024, 1, 7), date(2024, 1, 15)
    records = [ActivityRecord(date=date(2024, 1, 15), duration_minutes=30, status="completed")]

    buckets = bucket_by_week(records, PeriodRange(start, end), today=end)

    assert len(buckets) == 3
    assert buckets[-1].week_start == date(2024, 1, 15)
    assert buckets[-1].total_minutes == 30


def test_end_is_clamped_to_today():
    start, end = date(2024, 1, 1), date(2024, 6, 30)
    records = daily_records(start, date(2024, 1, 31))

    weeks = bucket_by_week(records, PeriodRange(start, end), today=date(2024, 1, 10))
    months = bucket_by_month(records, PeriodRange(start, end), today=date(2024, 1, 10))

    assert len(weeks) == 2
    assert weeks[-1].week_end == date(2024, 1, 10)
    assert sum(b.total_minutes for b in weeks) == 600
    assert len(months) == 1
    assert months[0].month_end == date(2024, 1, 10)
    assert months[0].total_minutes == 600


def test_completion_rate_mixed_statuses():
    day = date(2024, 1, 2)
    records = [
        ActivityRecord(date=day, duration_minutes=10, status="completed"),
        ActivityRecord(date=day, duration_minutes=10, status="pending"),
        ActivityRecord(date=day, duration_minutes=10, status="in_progress"),
    ]

    (bucket,) = bucket_by_week(records, PeriodRange(day, day), today=day)

    assert bucket.completion_rate == 33
    assert bucket.record_count == 3


def test_completion_rate_rounds_half_up():
    assert percentage(1, 8) == 13
    assert percentage(1, 2) == 50
    assert percentage(2, 3) == 67
    assert percentage(0, 0) == 0


def test_empty_records_single_month_bucket():
    buckets = bucket_by_month([], PeriodRange(date(2024, 1, 1), date(2024, 1, 31)), today=date(2024, 5, 1))

    assert len(buckets) == 1
    assert buckets[0].total_hours == 0
    assert buckets[0].completion_rate == 0
    assert buckets[0].label == "Jan 2024"


def test_monthly_buckets_clip_last_month():
    start, end = date(2024, 1, 15), date(2024, 3, 10)
    records = daily_records(start, end, minutes=30, status="pending")

    buckets = bucket_by_month(records, PeriodRange(start, end), today=date(2024, 12, 1))

    assert [b.label for b in buckets] == ["Jan 2024", "Feb 2024", "Mar 2024"]
    assert buckets[0].month_start == date(2024, 1, 1)
    assert buckets[1].month_end == date(2024, 2, 29)
    assert buckets[2].month_end == date(2024, 3, 10)
    assert buckets[0].total_minutes == 17 * 30
    assert buckets[1].total_minutes == 29 * 30
    assert buckets[2].total_minutes == 10 * 30
    assert all(b.completion_rate == 0 for b in buckets)


def test_monthly_end_of_month_start_reaches_last_month():
    start, end = date(2024, 1, 31), date(2024, 3, 1)
    buckets = bucket_by_month(
        [ActivityRecord(date=end, duration_minutes=90)],
        PeriodRange(start, end),
        today=end,
    )

    assert len(buckets) == 3
    assert buckets[-1].total_minutes == 90


def test_bad_date_is_excluded_without_error(caplog):
    records = [{"date": "bad-date", "duration_minutes": 30, "status": "completed"}]
    period = PeriodRange(date(2024, 1, 1), date(2024, 1, 31))

    with caplog.at_level(logging.WARNING, logger="tracker.aggregator"):
        weeks = bucket_by_week(records, period, today=date(2024, 2, 1))
        months = bucket_by_month(records, period, today=date(2024, 2, 1))

    assert all(b.total_minutes == 0 and b.record_count == 0 for b in weeks + months)
    assert "unparseable date" in caplog.text


def test_start_after_end_returns_degenerate_bucket():
    period = PeriodRange(date(2024, 3, 10), date(2024, 3, 1))
    records = [ActivityRecord(date=date(2024, 3, 10), duration_minutes=60, status="completed")]

    weeks = bucket_by_week(records, period, today=date(2024, 4, 1))
    months = bucket_by_month(records, period, today=date(2024, 4, 1))

    assert len(weeks) == 1
    assert weeks[0].week_start == weeks[0].week_end == date(2024, 3, 10)
    assert weeks[0].total_minutes == 0
    assert weeks[0].completion_rate == 0
    assert len(months) == 1
    assert months[0].total_minutes == 0


def test_negative_and_missing_minutes_count_as_zero():
    day = date(2024, 1, 1)
    records = [
        {"date": "2024-01-01", "duration_minutes": -15, "status": "completed"},
        {"date": "2024-01-01", "status": "completed"},
        {"date": "2024-01-01T09:30:00", "time_spent": 45, "status": "in progress"},
    ]

    (bucket,) = bucket_by_week(records, PeriodRange(day, day), today=day)

    assert bucket.total_minutes == 45
    assert bucket.record_count == 3
    assert bucket.completion_rate == 67


def test_aggregation_is_idempotent_and_does_not_mutate_input():
    start, end = date(2024, 1, 1), date(2024, 2, 15)
    records = list(reversed(daily_records(start, end, minutes=20)))
    snapshot = list(records)
    period = PeriodRange(start, end)

    first = [b.to_dict() for b in bucket_by_week(records, period, today=end)]
    second = [b.to_dict() for b in bucket_by_week(records, period, today=end)]

    assert first == second
    assert records == snapshot
    assert [b.to_dict() for b in bucket_by_month(records, period, today=end)] == [
        b.to_dict() for b in bucket_by_month(records, period, today=end)
    ]


def test_tally_tags_counts_in_first_seen_order():
    records = [
        ActivityRecord(date=date(2024, 1, 1), tags="api, testing"),
        ActivityRecord(date=date(2024, 1, 2), tags="api, design"),
    ]

    counts = tally_tags(records)

    assert counts == {"api": 2, "testing": 1, "design": 1}
    assert list(counts) == ["api", "testing", "design"]


def test_tally_tools_skips_blank_labels():
    records = [
        {"date": "2024-01-01", "skills_tools": "Python,, SQL , "},
        {"date": "not a date", "skills_tools": "python"},
        {"date": "2024-01-03", "skills_tools": None},
    ]

    assert tally_tools(records) == {"Python": 1, "SQL": 1, "python": 1}


def test_top_labels_sorts_descending_and_keeps_ties_stable():
    counts = {"a": 1, "b": 3, "c": 1, "d": 2}

    assert top_labels(counts, 3) == [("b", 3), ("d", 2), ("a", 1)]
    assert top_labels(counts, 0) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("completed", "completed"),
        ("In Progress", "in_progress"),
        ("inprogress", "in_progress"),
        ("in_progress", "in_progress"),
        ("pending", "pending"),
        ("", "pending"),
        (None, "pending"),
        ("archived", "pending"),
    ],
)
def test_normalize_status(raw, expected):
    assert normalize_status(raw) == expected


def test_parse_record_date():
    assert parse_record_date("2024-05-09") == date(2024, 5, 9)
    assert parse_record_date("2024-05-09T23:59:00+00:00") == date(2024, 5, 9)
    assert parse_record_date("May 09, 2025") is None
    assert parse_record_date("2024-01-05junk") is None
    assert parse_record_date("2024-01-05 08:15") == date(2024, 1, 5)
    assert parse_record_date("2024-01-05Tnoon") is None
    assert parse_record_date(None) is None


def test_summarize_counts_statuses_and_days():
    records = [
        {"date": "2024-01-01", "duration_minutes": 90, "status": "completed"},
        {"date": "2024-01-01", "duration_minutes": 30, "status": "in progress"},
        {"date": "2024-01-02", "duration_minutes": 60, "status": "pending"},
    ]

    summary = summarize(records)

    assert summary.total_entries == 3
    assert (summary.completed, summary.in_progress, summary.pending) == (1, 1, 1)
    assert summary.total_hours == 3.0
    assert summary.active_days == 2
    assert [item["value"] for item in summary.status_distribution()] == [1, 1, 1]
    assert [item["percent"] for item in summary.status_distribution()] == [33, 33, 33]


def test_current_week_covers_monday_to_sunday():
    records = [
        ActivityRecord(date=date(2024, 1, 17), duration_minutes=120),
        ActivityRecord(date=date(2024, 1, 10), duration_minutes=999),
    ]

    week = current_week(records, today=date(2024, 1, 18))

    assert [slot.day for slot in week] == [date(2024, 1, 15) + timedelta(days=i) for i in range(7)]
    assert week[2].hours == 2.0
    assert sum(slot.minutes for slot in week) == 120


def test_formatting_helpers():
    assert minutes_to_label(125) == "02:05"
    assert minutes_to_hours(90) == 1.5
    assert split_minutes(135) == (2, 15)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert months_between(date(2024, 1, 31), date(2024, 3, 1)) == 1


def test_first_buckets_include_records_before_start_in_same_week_and_month():
    start, end = date(2024, 1, 10), date(2024, 1, 20)
    records = [
        ActivityRecord(date=date(2024, 1, 8), duration_minutes=30, status="completed"),
        ActivityRecord(date=date(2024, 1, 2), duration_minutes=15, status="pending"),
        ActivityRecord(date=date(2024, 1, 12), duration_minutes=60, status="completed"),
    ]

    weeks = bucket_by_week(records, PeriodRange(start, end), today=end)
    months = bucket_by_month(records, PeriodRange(start, end), today=end)

    assert weeks[0].week_start == date(2024, 1, 8)
    assert weeks[0].total_minutes == 90
    assert sum(b.total_minutes for b in weeks) == 90
    assert months[0].month_start == date(2024, 1, 1)
    assert months[0].total_minutes == 105
    assert months[0].completion_rate == 67
