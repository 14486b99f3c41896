from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

PER_SOURCE_LIMIT = 3
FEED_LIMIT = 5


@dataclass(frozen=True)
class Activity:
    id: int
    type: str
    title: str
    timestamp: datetime


def activities_from_rows(rows: Iterable, activity_type: str, timestamp_attr: str = "created_at") -> list[Activity]:
    return [
        Activity(id=row.id, type=activity_type, title=row.title, timestamp=getattr(row, timestamp_attr))
        for row in rows
    ]


def merge_recent_activities(*sources: Iterable[Activity], limit: int = FEED_LIMIT) -> list[Activity]:
    merged = [activity for source in sources for activity in source]
    merged.sort(key=lambda activity: activity.timestamp or datetime.min, reverse=True)
    return merged[:limit]
