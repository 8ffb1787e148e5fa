from enum import Enum
from typing import Dict, FrozenSet, Type

from audit_manager.core.errors import InvalidTransition


class Role(str, Enum):
    ADMIN = "admin"
    TEAM = "team"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AuditStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class FolderType(str, Enum):
    MEETING_NOTES = "meeting_notes"
    WORKING_PAPERS = "working_papers"
    CONTRACTS = "contracts"
    EVIDENCE = "evidence"


TASK_TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.PENDING: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.PENDING, TaskStatus.COMPLETED}),
    TaskStatus.COMPLETED: frozenset({TaskStatus.IN_PROGRESS}),
}

AUDIT_TRANSITIONS: Dict[AuditStatus, FrozenSet[AuditStatus]] = {
    AuditStatus.DRAFT: frozenset({AuditStatus.IN_PROGRESS}),
    AuditStatus.IN_PROGRESS: frozenset({AuditStatus.DRAFT, AuditStatus.COMPLETED}),
    AuditStatus.COMPLETED: frozenset({AuditStatus.IN_PROGRESS}),
}

_TABLES = {
    TaskStatus: TASK_TRANSITIONS,
    AuditStatus: AUDIT_TRANSITIONS,
}


def parse_enum(enum_cls: Type[Enum], value) -> Enum:
    """Validate a raw store value against a closed enumeration."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidTransition(f"Unknown {enum_cls.__name__} '{value}' (expected one of: {allowed})")


def check_transition(current, target) -> None:
    """Raise InvalidTransition unless current -> target is in the status table.

    Writing the current value again is always accepted.
    """
    enum_cls = type(target)
    table = _TABLES[enum_cls]
    current = parse_enum(enum_cls, current)
    if current == target:
        return
    if target not in table[current]:
        raise InvalidTransition(
            f"Cannot change {enum_cls.__name__} from '{current.value}' to '{target.value}'"
        )
