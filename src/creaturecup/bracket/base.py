"""Shared behaviour of the playoff bracket engines."""

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

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from creaturecup.exceptions import (
    DuplicateResultException,
    InvalidParticipantsException,
    InvalidResultException,
)
from creaturecup.models.bracket import Bracket, BracketKind, BracketMatch
from creaturecup.models.identifiers import CompetitorId
from creaturecup.type_hints import CompetitorRef


def match_id(prefix: str, round_number: int, sequence: int) -> str:
    """Stable match id, e.g. ``w1_3`` for the third winner round 1 match."""
    return f"{prefix}{round_number}_{sequence}"


def coerce_seeds(participants: Sequence[CompetitorRef]) -> List[CompetitorId]:
    seeds = [CompetitorId.of(p) for p in participants or ()]
    if len(set(seeds)) != len(seeds):
        raise InvalidParticipantsException("A competitor cannot be seeded twice")
    return seeds


class BracketEngine(ABC):
    """Stateless playoff engine.

    Engines never hold a bracket between calls: every operation takes a
    Bracket and returns a new one, leaving the input untouched.
    """

    kind: BracketKind

    @abstractmethod
    def create_bracket(self, participants: Sequence[CompetitorRef]) -> Bracket:
        """Build the initial bracket from participants ordered best to worst."""

    @abstractmethod
    def _advance(
        self, bracket: Bracket, match: BracketMatch, winner: CompetitorId
    ) -> Bracket:
        """Move the winner and loser of a just-decided ``match`` onward."""

    def get_matches_ready_for_voting(self, bracket: Bracket) -> List[BracketMatch]:
        """Return the next match to decide, alone, or nothing once complete.

        Matches are scanned strictly in bracket order (winner ladder, loser
        ladder, grand final) and the first undecided match is returned. With
        the built-in routings every earlier match is decided by then, so its
        slots are both filled; callers can check ``is_ready`` all the same.
        """
        for match in bracket.iter_matches():
            if match.winner is None:
                return [match]
        return []

    def record_match_result(
        self, bracket: Bracket, match_id: str, winner: CompetitorRef
    ) -> Bracket:
        """Decide a match and advance its participants.

        Args:
            bracket: Current bracket
            match_id: Id of the match to decide
            winner: One of the match's two participants

        Returns:
            The updated bracket

        Raises:
            BracketMatchNotFoundException: If the id is unknown
            DuplicateResultException: If the match already has a winner
            InvalidResultException: If the match is not full or the winner
                did not play in it
        """
        match = bracket.get_match(match_id)
        winner = CompetitorId.of(winner)
        if match.is_decided:
            raise DuplicateResultException(
                f"Bracket match {match_id} was already won by {match.winner}"
            )
        if len(match.participants) != 2:
            raise InvalidResultException(
                f"Bracket match {match_id} is still waiting for participants"
            )
        if winner not in match.participants:
            raise InvalidResultException(
                f"{winner} is not a participant of bracket match {match_id}"
            )

        decided = match.with_winner(winner)
        bracket = bracket.replace_match(decided)
        return self._advance(bracket, decided, winner)

    def is_bracket_complete(self, bracket: Bracket) -> bool:
        return bracket.is_complete

    def get_champion(self, bracket: Bracket) -> Optional[CompetitorId]:
        return bracket.champion

    def get_placement(self, bracket: Bracket, match: BracketMatch) -> Tuple[int, int]:
        """(round, 1-based position) of ``match`` inside its ladder."""
        rounds = bracket.rounds(match.ladder)
        position = rounds[match.round_number - 1].index(match.id) + 1
        return match.round_number, position
