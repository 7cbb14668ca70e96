"""Match outcome and result data classes."""

# Creature Cup
# Copyright (C) 2025  Creature Cup developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from creaturecup.constants import OUTCOME_DRAW, OUTCOME_LOSS, OUTCOME_WIN
from creaturecup.exceptions import InvalidResultException
from creaturecup.models.identifiers import CompetitorId


class Outcome(Enum):
    """Outcome of a qualification match.

    ``WIN`` and ``LOSS`` are both decisive; which side won is carried by
    the result's winner, not by the outcome.
    """

    WIN = OUTCOME_WIN
    LOSS = OUTCOME_LOSS
    DRAW = OUTCOME_DRAW

    @classmethod
    def parse(cls, value: Union["Outcome", str]) -> "Outcome":
        """Convert caller input into an Outcome.

        Raises:
            InvalidResultException: If the value names no known outcome
        """
        if isinstance(value, Outcome):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidResultException(f"Unknown match outcome: {value!r}")

    @property
    def is_decisive(self) -> bool:
        return self is not Outcome.DRAW


@dataclass(frozen=True)
class MatchResult:
    """Result of a single match.

    Attributes
    ----------
    outcome : Outcome
        Win, loss or draw.
    winner : CompetitorId or None
        The winning competitor; ``None`` exactly when the outcome is a draw.
    """

    outcome: Outcome
    winner: Optional[CompetitorId] = None

    def __post_init__(self):
        object.__setattr__(self, "outcome", Outcome.parse(self.outcome))
        if self.winner is not None:
            object.__setattr__(self, "winner", CompetitorId.of(self.winner))
        if self.outcome is Outcome.DRAW and self.winner is not None:
            raise InvalidResultException("A drawn match cannot have a winner")
        if self.outcome.is_decisive and self.winner is None:
            raise InvalidResultException(
                f"A '{self.outcome.value}' result needs a winner"
            )

    @property
    def is_draw(self) -> bool:
        return self.outcome is Outcome.DRAW

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "outcome": self.outcome.value,
            "winner": str(self.winner) if self.winner is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        winner = data.get("winner")
        return cls(
            outcome=Outcome.parse(data["outcome"]),
            winner=CompetitorId(winner) if winner is not None else None,
        )
