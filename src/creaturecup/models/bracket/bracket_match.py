"""Playoff bracket match data class."""

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

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from creaturecup.exceptions import InvalidResultException
from creaturecup.models.identifiers import CompetitorId


class Ladder(Enum):
    """Part of the bracket a match belongs to."""

    WINNER = "winner"
    LOSER = "loser"
    GRAND_FINAL = "grand_final"


def _optional_id(value: Optional[str]) -> Optional[CompetitorId]:
    return CompetitorId(value) if value is not None else None


def _optional_str(value: Optional[CompetitorId]) -> Optional[str]:
    return str(value) if value is not None else None


@dataclass(frozen=True)
class BracketMatch:
    """One playoff match.

    Instances are immutable; the bracket engines produce updated copies
    through ``with_participant`` and ``with_winner``.

    Attributes
    ----------
    id : str
        Stable id derived from ladder, round and sequence, e.g. ``w2_3``.
    ladder : Ladder
        Winner ladder, loser ladder or grand final.
    round_number : int
        1-based round within the ladder.
    participant1 : CompetitorId or None
        First slot, empty until filled.
    participant2 : CompetitorId or None
        Second slot, empty until filled.
    winner : CompetitorId or None
        Set once the match has been decided.
    """

    id: str
    ladder: Ladder
    round_number: int
    participant1: Optional[CompetitorId] = None
    participant2: Optional[CompetitorId] = None
    winner: Optional[CompetitorId] = None

    def __post_init__(self):
        if self.winner is not None and self.winner not in self.participants:
            raise InvalidResultException(
                f"{self.winner} is not a participant of bracket match {self.id}"
            )

    @property
    def participants(self) -> Tuple[CompetitorId, ...]:
        return tuple(p for p in (self.participant1, self.participant2) if p is not None)

    @property
    def is_ready(self) -> bool:
        """Both slots filled and no winner yet."""
        return len(self.participants) == 2 and self.winner is None

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    @property
    def has_open_slot(self) -> bool:
        return self.participant1 is None or self.participant2 is None

    @property
    def loser(self) -> Optional[CompetitorId]:
        if self.winner is None:
            return None
        if self.winner == self.participant1:
            return self.participant2
        return self.participant1

    def with_participant(self, competitor: CompetitorId) -> "BracketMatch":
        """Return a copy with ``competitor`` placed in the first open slot."""
        if self.participant1 is None:
            return replace(self, participant1=competitor)
        if self.participant2 is None:
            return replace(self, participant2=competitor)
        raise InvalidResultException(f"Bracket match {self.id} is already full")

    def with_slot(self, slot: int, competitor: CompetitorId) -> "BracketMatch":
        """Return a copy with ``competitor`` placed in slot 1 or 2."""
        if slot == 1:
            return replace(self, participant1=competitor)
        return replace(self, participant2=competitor)

    def with_winner(self, competitor: CompetitorId) -> "BracketMatch":
        return replace(self, winner=competitor)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round_number,
            "participant1": _optional_str(self.participant1),
            "participant2": _optional_str(self.participant2),
            "winner": _optional_str(self.winner),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], ladder: Ladder) -> "BracketMatch":
        """Deserialize match from dictionary."""
        return cls(
            id=str(data["id"]),
            ladder=ladder,
            round_number=int(data["round"]),
            participant1=_optional_id(data.get("participant1")),
            participant2=_optional_id(data.get("participant2")),
            winner=_optional_id(data.get("winner")),
        )
