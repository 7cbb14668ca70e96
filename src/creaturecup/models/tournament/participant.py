"""Participant data class."""

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
from typing import Any, Dict, NamedTuple

from creaturecup.constants import DRAW_SCORE, LOSS_SCORE, WIN_SCORE
from creaturecup.exceptions import InvalidParticipantsException
from creaturecup.models.identifiers import CompetitorId


class StandingsEntry(NamedTuple):
    """One row of the standings table."""

    participant: CompetitorId
    score: int
    wins: int
    losses: int
    draws: int


@dataclass
class Participant:
    """A competitor's running record in one tournament.

    Attributes
    ----------
    competitor_id : CompetitorId
        Normalized identifier of the creature.
    wins : int
        Matches won, byes included.
    losses : int
        Matches lost.
    draws : int
        Matches drawn.
    score : int
        Derived, always ``3 * wins + draws``.
    """

    competitor_id: CompetitorId
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def __post_init__(self):
        self.competitor_id = CompetitorId.of(self.competitor_id)
        if min(self.wins, self.losses, self.draws) < 0:
            raise InvalidParticipantsException(
                f"Negative record for {self.competitor_id}: "
                f"{self.wins}-{self.losses}-{self.draws}"
            )

    @property
    def score(self) -> int:
        return (
            self.wins * WIN_SCORE + self.draws * DRAW_SCORE + self.losses * LOSS_SCORE
        )

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses + self.draws

    def add_win(self) -> None:
        self.wins += 1

    def add_loss(self) -> None:
        self.losses += 1

    def add_draw(self) -> None:
        self.draws += 1

    def standings_entry(self) -> StandingsEntry:
        return StandingsEntry(
            participant=self.competitor_id,
            score=self.score,
            wins=self.wins,
            losses=self.losses,
            draws=self.draws,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "competitor_id": str(self.competitor_id),
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            competitor_id=CompetitorId(data["competitor_id"]),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
        )
