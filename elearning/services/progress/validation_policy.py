"""
Lesson Validation Policy

Pure decision functions: given the validation mode of a lesson and the
acting user, decide which progress status may be written, or raise.
No database access happens here; ownership facts are passed in by the
caller.

Modes:
- read: the player marks their own lesson as completed
- pro:  the course-owning instructor (or an admin) sets any status
- qcm:  status changes only through a quiz submission

Author: Learning Platform Team
Version: 1.0.0
"""

from typing import Optional, Union

from ...exceptions import InvalidPayload, ModeMismatch, Unauthorized
from ...modules.models import ValidationMode
from ...progress.models import ProgressStatus
from ...users.actor import Actor

_VALID_STATUSES = frozenset(ProgressStatus.values)


def resolve_read_status(mode: str, actor: Actor, requested_status: Optional[str] = None) -> str:
    """
    Decide the target status of a "mark as read" call.

    Args:
        mode: Validation mode of the lesson
        actor: Acting user; must be a player acting on their own record
        requested_status: Optional status sent by the client; only
            "completed" is accepted

    Returns:
        ProgressStatus.COMPLETED

    Raises:
        ModeMismatch: Lesson is not validated by reading
        Unauthorized: Actor is not a player
        InvalidPayload: Any status other than completed was requested
    """
    if mode != ValidationMode.READ:
        raise ModeMismatch(expected=ValidationMode.READ, actual=mode)
    if not actor.is_player:
        raise Unauthorized("Only players can mark a lesson as read")
    if requested_status not in (None, "", ProgressStatus.COMPLETED):
        raise InvalidPayload(
            "A read lesson can only be marked as completed",
            details={"status": requested_status},
        )
    return ProgressStatus.COMPLETED


def resolve_pro_status(
    mode: str,
    actor: Actor,
    owns_course: bool,
    status: Optional[str] = None,
    completed: Optional[Union[bool, str]] = None,
) -> str:
    """
    Decide the target status of an instructor validation.

    Resolution order: an explicit status string wins, then the boolean
    ``completed`` flag (true → completed, false → not_started), otherwise
    completed.

    Raises:
        ModeMismatch: Lesson is not validated by an instructor
        Unauthorized: Actor is neither admin nor the owning instructor
        InvalidPayload: Unknown or non-string status
    """
    if mode != ValidationMode.PRO:
        raise ModeMismatch(expected=ValidationMode.PRO, actual=mode)
    if not (actor.is_admin or (actor.is_instructor and owns_course)):
        raise Unauthorized("Only the course instructor or an admin can validate this lesson")

    if status is not None and status != "":
        if not isinstance(status, str):
            raise InvalidPayload("'status' must be a string", details={"status": status})
        if status not in _VALID_STATUSES:
            raise InvalidPayload(
                f"Unknown status '{status}'",
                details={"status": status, "allowed": sorted(_VALID_STATUSES)},
            )
        return status

    if completed is not None:
        flag = _coerce_bool(completed)
        return ProgressStatus.COMPLETED if flag else ProgressStatus.NOT_STARTED

    return ProgressStatus.COMPLETED


def check_quiz_submission(mode: str, actor: Actor) -> None:
    """
    Gate a quiz submission: only players, only on qcm lessons.

    Raises:
        ModeMismatch: Lesson is not validated by quiz
        Unauthorized: Actor is not a player
    """
    if mode != ValidationMode.QCM:
        raise ModeMismatch(expected=ValidationMode.QCM, actual=mode)
    if not actor.is_player:
        raise Unauthorized("Only players can submit a quiz")


def _coerce_bool(value: Union[bool, str, int]) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise InvalidPayload("'completed' must be a boolean", details={"completed": value})
    if isinstance(value, int):
        return value != 0
    raise InvalidPayload("'completed' must be a boolean", details={"completed": value})
