"""Derived assignment state: submission flags and due-date buckets.

Everything here is a pure function over rows that were already loaded.
``now`` is always passed in by the caller so the results are reproducible.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Iterable, NamedTuple

ONE_DAY = timedelta(days=1)
VERY_SOON_DAYS = 2
SOON_DAYS = 5


class Urgency(str, Enum):
    OVERDUE = "overdue"
    DUE_VERY_SOON = "due_very_soon"
    DUE_SOON = "due_soon"
    DUE_LATER = "due_later"


COMPLETED_LABEL = "completed"


@dataclass(frozen=True)
class EnrichedAssignment:
    assignment: Any
    has_submitted: bool

    @property
    def id(self) -> int:
        return self.assignment.id


class AssignmentPartition(NamedTuple):
    active: list
    past: list


def submitted_assignment_ids(submissions: Iterable[Any]) -> set[int]:
    return {submission.assignment_id for submission in submissions}


def enrich_with_submission_status(assignments: Iterable[Any], submissions: Iterable[Any]) -> list[EnrichedAssignment]:
    """Attach ``has_submitted`` to every assignment, one output row per input row.

    Submissions for assignments outside ``assignments`` are ignored.
    """
    submitted = submitted_assignment_ids(submissions)
    return [
        EnrichedAssignment(assignment=assignment, has_submitted=assignment.id in submitted)
        for assignment in assignments
    ]


def days_until_due(due_date: datetime, now: datetime) -> int:
    return math.ceil((due_date - now) / ONE_DAY)


def classify_urgency(due_date: datetime, now: datetime) -> Urgency:
    diff_days = days_until_due(due_date, now)
    if diff_days <= 0:
        return Urgency.OVERDUE
    if diff_days <= VERY_SOON_DAYS:
        return Urgency.DUE_VERY_SOON
    if diff_days <= SOON_DAYS:
        return Urgency.DUE_SOON
    return Urgency.DUE_LATER


def status_label(due_date: datetime, has_submitted: bool, now: datetime) -> str:
    if has_submitted:
        return COMPLETED_LABEL
    return classify_urgency(due_date, now).value


def is_active(assignment: Any, now: datetime) -> bool:
    return bool(assignment.is_published) and assignment.due_date > now


def partition_active_vs_past(assignments: Iterable[Any], now: datetime) -> AssignmentPartition:
    active = []
    past = []
    for assignment in assignments:
        if is_active(assignment, now):
            active.append(assignment)
        else:
            past.append(assignment)
    return AssignmentPartition(active=active, past=past)


def filter_by_date_range(assignments: Iterable[Any], start: datetime, end: datetime) -> list:
    return [assignment for assignment in assignments if start <= assignment.due_date <= end]


def latest_submission_by_assignment(submissions: Iterable[Any]) -> dict[int, Any]:
    latest: dict[int, Any] = {}
    for submission in submissions:
        current = latest.get(submission.assignment_id)
        if current is None or _submission_sort_key(submission) > _submission_sort_key(current):
            latest[submission.assignment_id] = submission
    return latest


def _submission_sort_key(submission: Any) -> tuple[datetime, int]:
    return (submission.submitted_at or datetime.min, submission.id or 0)
