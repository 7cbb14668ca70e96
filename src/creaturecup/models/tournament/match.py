"""Qualification match data class."""

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
from typing import Any, Dict, FrozenSet, Optional

from creaturecup.exceptions import DuplicateResultException, InvalidResultException
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament.match_result import MatchResult, Outcome
from creaturecup.models.tournament.participant import Participant


@dataclass
class Match:
    """A single qualification pairing and, once played, its result.

    Attributes
    ----------
    participant1 : CompetitorId
        First competitor; the bye recipient for a bye.
    participant2 : CompetitorId or None
        Second competitor, or None when the match is a bye.
    round_number : int
        Round the match belongs to (0-based, as ``Tournament.current_round``).
    result : MatchResult or None
        Set once, by ``record_result``.
    """

    participant1: CompetitorId
    participant2: Optional[CompetitorId]
    round_number: int
    result: Optional[MatchResult] = None

    def __post_init__(self):
        self.participant1 = CompetitorId.of(self.participant1)
        if self.participant2 is not None:
            self.participant2 = CompetitorId.of(self.participant2)
            if self.participant1 == self.participant2:
                raise InvalidResultException(
                    f"{self.participant1} cannot be paired against itself"
                )

    @property
    def is_bye(self) -> bool:
        return self.participant2 is None

    @property
    def is_played(self) -> bool:
        return self.result is not None

    @property
    def matchup(self) -> FrozenSet[CompetitorId]:
        """Order-free key of the pairing."""
        if self.participant2 is None:
            return frozenset({self.participant1})
        return frozenset({self.participant1, self.participant2})

    @property
    def loser(self) -> Optional[CompetitorId]:
        if self.result is None or self.result.is_draw or self.is_bye:
            return None
        if self.result.winner == self.participant1:
            return self.participant2
        return self.participant1

    def record_result(
        self, result: MatchResult, participants: Dict[CompetitorId, Participant]
    ) -> None:
        """Set the result and apply it to the participants' records.

        Args:
            result: The result to record
            participants: Tournament participants by id; the two sides are updated

        Raises:
            DuplicateResultException: If a result was already recorded
            InvalidResultException: If the winner did not take part in the match
        """
        if self.result is not None:
            raise DuplicateResultException(
                f"Result already recorded for {self.describe()}"
            )
        if result.winner is not None and result.winner not in self.matchup:
            raise InvalidResultException(
                f"{result.winner} did not play in {self.describe()}"
            )
        if self.is_bye and result.outcome is not Outcome.WIN:
            raise InvalidResultException("A bye can only be recorded as a win")

        self.result = result
        if self.is_bye:
            participants[self.participant1].add_win()
        elif result.is_draw:
            participants[self.participant1].add_draw()
            participants[self.participant2].add_draw()
        else:
            participants[result.winner].add_win()
            participants[self.loser].add_loss()

    def describe(self) -> str:
        """Human readable summary, with 1-based round numbers."""
        if self.is_bye:
            return f"bye for {self.participant1} in round {self.round_number + 1}"
        return (
            f"{self.participant1} vs {self.participant2} "
            f"in round {self.round_number + 1}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "participant1": str(self.participant1),
            "participant2": (
                str(self.participant2) if self.participant2 is not None else None
            ),
            "round": self.round_number,
            "outcome": self.result.outcome.value if self.result else None,
            "winner": (
                str(self.result.winner)
                if self.result and self.result.winner is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        result = None
        if data.get("outcome") is not None:
            result = MatchResult.from_dict(data)
        participant2 = data.get("participant2")
        return cls(
            participant1=CompetitorId(data["participant1"]),
            participant2=CompetitorId(participant2) if participant2 else None,
            round_number=int(data["round"]),
            result=result,
        )
