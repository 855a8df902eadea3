"""Domain data models for work log days, tasks, and classified reports."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class WorkLogEntry:
    start_time: str = ""
    end_time: str = ""


@dataclass(slots=True, frozen=True)
class TaskRecord:
    """One task entry as logged on a single day."""

    status: str = ""
    description: str = ""
    descriptions: tuple[str, ...] = ()
    work_item_key: str = ""
    upcoming_note: str = ""
    pr_link: str = ""
    blocker_note: str = ""
    qc_goal: str = ""

    def all_descriptions(self) -> list[str]:
        """Return ``description`` followed by ``descriptions``, skipping empty entries."""
        descs: list[str] = []
        if self.description:
            descs.append(self.description)
        descs.extend(d for d in self.descriptions if d)
        return descs


@dataclass(slots=True, frozen=True)
class DailyLog:
    entries: tuple[WorkLogEntry, ...] = ()
    tasks: tuple[TaskRecord, ...] = ()


WorkLog = dict[str, DailyLog]


@dataclass(slots=True, frozen=True)
class DatedTaskRecord:
    """A task record paired with the ISO date it was logged on."""

    task: TaskRecord
    date: str

    @property
    def work_item_key(self) -> str:
        return self.task.work_item_key


class AnonymousPool(enum.Enum):
    """Tracking key shared by every task logged without a work item key."""

    TOKEN = "anonymous"


ANONYMOUS_POOL = AnonymousPool.TOKEN
TrackingKey = str | AnonymousPool


def tracking_key(work_item_key: str) -> TrackingKey:
    return work_item_key if work_item_key else ANONYMOUS_POOL


def _frozen_groups(groups: Mapping[str, list[DatedTaskRecord]]) -> Mapping[str, tuple[DatedTaskRecord, ...]]:
    return MappingProxyType({key: tuple(records) for key, records in groups.items()})


@dataclass(slots=True, frozen=True)
class ClassificationResult:
    completed: Mapping[str, tuple[DatedTaskRecord, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    next_up: Mapping[str, tuple[DatedTaskRecord, ...]] = field(default_factory=lambda: MappingProxyType({}))
    blocked: tuple[TaskRecord, ...] = ()

    @classmethod
    def build(
        cls,
        completed: Mapping[str, list[DatedTaskRecord]],
        next_up: Mapping[str, list[DatedTaskRecord]],
        blocked: list[TaskRecord],
    ) -> ClassificationResult:
        """Snapshot mutable accumulators into read-only views."""
        return cls(
            completed=_frozen_groups(completed),
            next_up=_frozen_groups(next_up),
            blocked=tuple(blocked),
        )

    def is_empty(self) -> bool:
        return not (self.completed or self.next_up or self.blocked)
