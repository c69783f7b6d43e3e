"""Domain models for behavioral modifiers.

Classes:
    ScopeKey: The acting entity assignments are tracked under
    ModifierDefinition: A catalog entry (name, instruction text, duration)
    ActiveModifierAssignment: A modifier applied to a scope until an expiry
    ActiveModifierStatus: An assignment plus its remaining time at read time
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
import math


@dataclass(frozen=True, slots=True)
class ScopeKey:
    """Identifies the actor whose assignments are read or written.

    Attributes:
        user_id: Owning user.
        agent_id: Agent acting on behalf of the user.
    """

    user_id: str
    agent_id: str

    def __post_init__(self) -> None:
        if not self.user_id or not self.agent_id:
            msg = "user_id and agent_id must be non-empty"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.user_id}/{self.agent_id}"


@dataclass(frozen=True, slots=True)
class ModifierDefinition:
    """A named behavioral directive available in the catalog.

    Attributes:
        name: Unique catalog key.
        instruction_text: The directive injected while the modifier is active.
        default_duration_minutes: How long an assignment lasts once taken.
    """

    name: str
    instruction_text: str
    default_duration_minutes: int

    def __post_init__(self) -> None:
        if self.default_duration_minutes <= 0:
            msg = f"default_duration_minutes must be positive, got {self.default_duration_minutes}"
            raise ValueError(msg)

    @property
    def duration(self) -> timedelta:
        """Return the default duration as a timedelta."""
        return timedelta(minutes=self.default_duration_minutes)


@dataclass(frozen=True, slots=True)
class ActiveModifierAssignment:
    """A modifier applied to a scope.

    The instruction text is copied from the definition when the modifier is
    taken, so it does not follow later catalog changes.

    Attributes:
        scope: The actor holding the assignment.
        name: Name of the modifier definition.
        instruction_text: Directive text captured at assignment time.
        expires_at: Absolute UTC expiry.
    """

    scope: ScopeKey
    name: str
    instruction_text: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class ActiveModifierStatus:
    """Time-dependent view of an assignment, computed per request."""

    assignment: ActiveModifierAssignment
    remaining_minutes: int

    @property
    def name(self) -> str:
        return self.assignment.name

    @property
    def instruction_text(self) -> str:
        return self.assignment.instruction_text


def remaining_minutes(expires_at: datetime, now: datetime) -> int:
    """Return whole minutes left until ``expires_at``, rounded up.

    A freshly taken 60 minute modifier reports 60 rather than 59 even though a
    fraction of a second has already elapsed. Never negative.
    """
    seconds = (expires_at - now).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / 60)
