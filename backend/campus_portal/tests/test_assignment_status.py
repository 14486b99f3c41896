from datetime import datetime, timedelta
from types import SimpleNamespace

from campus_portal.services.assignment_status import (
    COMPLETED_LABEL,
    Urgency,
    classify_urgency,
    days_until_due,
    enrich_with_submission_status,
    filter_by_date_range,
    latest_submission_by_assignment,
    partition_active_vs_past,
    status_label,
)

NOW = datetime(2030, 3, 10, 12, 0, 0)
MS = timedelta(milliseconds=1)


def assignment(assignment_id: int, due_date: datetime, is_published: bool = True):
    return SimpleNamespace(id=assignment_id, due_date=due_date, is_published=is_published)


def submission(submission_id: int, assignment_id: int, submitted_at: datetime = NOW):
    return SimpleNamespace(id=submission_id, assignment_id=assignment_id, submitted_at=submitted_at)


def test_enrich_keeps_order_and_count():
    assignments = [assignment(3, NOW), assignment(1, NOW), assignment(2, NOW)]
    enriched = enrich_with_submission_status(assignments, [submission(10, 1)])

    assert [item.id for item in enriched] == [3, 1, 2]
    assert [item.has_submitted for item in enriched] == [False, True, False]
    assert enriched[1].assignment is assignments[1]


def test_enrich_flag_for_zero_one_and_many_submissions():
    assignments = [assignment(1, NOW), assignment(2, NOW), assignment(3, NOW)]
    submissions = [submission(10, 2), submission(11, 3), submission(12, 3), submission(13, 3)]

    flags = {item.id: item.has_submitted for item in enrich_with_submission_status(assignments, submissions)}

    assert flags == {1: False, 2: True, 3: True}


def test_enrich_ignores_unrelated_submissions_and_empty_inputs():
    assert enrich_with_submission_status([], [submission(10, 1)]) == []
    enriched = enrich_with_submission_status([assignment(1, NOW)], [submission(10, 99)])
    assert [item.has_submitted for item in enriched] == [False]
    assert [item.has_submitted for item in enrich_with_submission_status([assignment(1, NOW)], [])] == [False]


def test_enrich_keeps_duplicate_assignments():
    row = assignment(1, NOW)
    enriched = enrich_with_submission_status([row, row], [submission(10, 1)])
    assert len(enriched) == 2
    assert all(item.has_submitted for item in enriched)


def test_classify_urgency_boundaries():
    assert classify_urgency(NOW, NOW) is Urgency.OVERDUE
    assert classify_urgency(NOW - timedelta(days=3), NOW) is Urgency.OVERDUE
    assert classify_urgency(NOW + MS, NOW) is Urgency.DUE_VERY_SOON
    assert classify_urgency(NOW + timedelta(days=2) - MS, NOW) is Urgency.DUE_VERY_SOON
    assert classify_urgency(NOW + timedelta(days=2), NOW) is Urgency.DUE_VERY_SOON
    assert classify_urgency(NOW + timedelta(days=2) + MS, NOW) is Urgency.DUE_SOON
    assert classify_urgency(NOW + timedelta(days=5), NOW) is Urgency.DUE_SOON
    assert classify_urgency(NOW + timedelta(days=5) + MS, NOW) is Urgency.DUE_LATER


def test_days_until_due_rounds_up_partial_days():
    assert days_until_due(NOW + timedelta(hours=1), NOW) == 1
    assert days_until_due(NOW + timedelta(days=1), NOW) == 1
    assert days_until_due(NOW + timedelta(days=1, seconds=1), NOW) == 2
    assert days_until_due(NOW - timedelta(hours=23), NOW) == 0
    assert days_until_due(NOW - timedelta(days=1, hours=1), NOW) == -1


def test_status_label_prefers_completed():
    assert status_label(NOW - timedelta(days=1), True, NOW) == COMPLETED_LABEL
    assert status_label(NOW + timedelta(days=10), False, NOW) == Urgency.DUE_LATER.value


def test_partition_active_vs_past():
    future = assignment(1, NOW + timedelta(seconds=1))
    past = assignment(2, NOW - timedelta(seconds=1))
    due_now = assignment(3, NOW)
    draft = assignment(4, NOW + timedelta(days=3), is_published=False)

    result = partition_active_vs_past([future, past, due_now, draft], NOW)

    assert result.active == [future]
    assert result.past == [past, due_now, draft]


def test_filter_by_date_range_is_inclusive():
    start = datetime(2030, 3, 1)
    end = datetime(2030, 3, 31, 23, 59, 59, 999000)
    rows = [
        assignment(1, start),
        assignment(2, end),
        assignment(3, start - MS),
        assignment(4, end + MS),
        assignment(5, datetime(2030, 3, 15)),
    ]

    assert [row.id for row in filter_by_date_range(rows, start, end)] == [1, 2, 5]


def test_latest_submission_by_assignment_uses_submitted_at_then_id():
    older = submission(1, 7, NOW - timedelta(hours=2))
    newer = submission(2, 7, NOW)
    same_time_higher_id = submission(3, 7, NOW)
    other = submission(4, 8, NOW - timedelta(days=1))

    latest = latest_submission_by_assignment([newer, older, same_time_higher_id, other])

    assert latest[7] is same_time_higher_id
    assert latest[8] is other


def test_end_to_end_example():
    assignments = [assignment(1, NOW + timedelta(days=1)), assignment(2, NOW - timedelta(days=1))]
    enriched = enrich_with_submission_status(assignments, [submission(10, 2)])

    assert [(item.id, item.has_submitted) for item in enriched] == [(1, False), (2, True)]
    assert classify_urgency(assignments[0].due_date, NOW) is Urgency.DUE_VERY_SOON
    assert classify_urgency(assignments[1].due_date, NOW) is Urgency.OVERDUE
