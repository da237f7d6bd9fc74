# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from enum import Enum

from pydantic import BaseModel, Field

ROLES: tuple[str, ...] = (
    "Serious Presentation",
    "Semi-Serious Presentation",
    "New Tool / Paper Demo",
)
ROLE_COUNT: int = len(ROLES)
WINNER_PLACEHOLDER: str = "..."


class Phase(str, Enum):
    """Where a selection session is in its lifecycle."""

    IDLE = "idle"
    SELECTING = "selecting"
    REVEALED = "revealed"


class SelectionSession(BaseModel):
    """
    One run of the randomized draw.
    `candidates` is a frozen snapshot of the roster taken at start; the
    remaining fields are mutated by timer ticks and finally by the reveal.
    """

    generation: int = 0
    phase: Phase = Phase.IDLE
    candidates: tuple[str, ...] = ()
    remaining_seconds: int = Field(default=5, ge=0)
    highlighted: set[int] = Field(default_factory=set)
    winners: list[str] = Field(
        default_factory=lambda: [WINNER_PLACEHOLDER] * ROLE_COUNT
    )

    @classmethod
    def idle(cls, countdown_seconds: int = 5) -> "SelectionSession":
        return cls(remaining_seconds=countdown_seconds)

    @property
    def is_active(self) -> bool:
        return self.phase is not Phase.IDLE

    def assignments(self) -> list[dict[str, str]]:
        """Pair each role with its winner, in role order."""
        return [
            {"role": role, "name": name}
            for role, name in zip(ROLES, self.winners)
        ]
