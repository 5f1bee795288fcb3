"""Appointment and shift lifecycles.

Statuses are stored as plain strings; these enums and transition tables are
the only place that decides which values and moves are legal.
"""

from enum import Enum
from typing import Mapping, Optional, Type

from carwash.errors import InvalidTransitionError


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ShiftStatus(str, Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


APPOINTMENT_TRANSITIONS: Mapping[AppointmentStatus, frozenset] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {AppointmentStatus.CONFIRMED, AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.IN_PROGRESS: frozenset(
        {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}

SHIFT_TRANSITIONS: Mapping[ShiftStatus, frozenset] = {
    ShiftStatus.SCHEDULED: frozenset({ShiftStatus.ACTIVE, ShiftStatus.COMPLETED}),
    ShiftStatus.ACTIVE: frozenset({ShiftStatus.COMPLETED}),
    ShiftStatus.COMPLETED: frozenset(),
}

_TABLES = {
    AppointmentStatus: APPOINTMENT_TRANSITIONS,
    ShiftStatus: SHIFT_TRANSITIONS,
}


def can_transition(current: Enum, target: Enum) -> bool:
    if current == target:
        return True
    table = _TABLES[type(current)]
    return target in table[current]


def check_transition(status_type: Type[Enum], current: Optional[str], target: str) -> None:
    """Raise InvalidTransitionError unless ``current -> target`` is allowed.

    ``current`` is whatever is stored; a value outside the enum (legacy rows)
    may move to any state.
    """
    target_status = status_type(target)
    if current is None:
        return
    try:
        current_status = status_type(current)
    except ValueError:
        return
    if not can_transition(current_status, target_status):
        raise InvalidTransitionError(
            f"Cannot change status from '{current_status.value}' to '{target_status.value}'"
        )
