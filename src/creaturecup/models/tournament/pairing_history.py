"""Pairing history used to avoid rematches."""

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

from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament.match import Match
from creaturecup.type_hints import CompetitorRef


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of CompetitorId
        Frozensets of competitor pairs that have already met. Byes are
        never recorded.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)

    def add_pairing(self, first: CompetitorRef, second: CompetitorRef) -> None:
        """Record that two competitors have been paired."""
        first, second = CompetitorId.of(first), CompetitorId.of(second)
        if first != second:
            self.previous_matches.add(frozenset({first, second}))

    def have_played(self, first: CompetitorRef, second: CompetitorRef) -> bool:
        """Check if two competitors have previously played each other."""
        return (
            frozenset({CompetitorId.of(first), CompetitorId.of(second)})
            in self.previous_matches
        )

    def __len__(self) -> int:
        return len(self.previous_matches)

    @classmethod
    def from_pairs(
        cls, pairs: Optional[Iterable[Iterable[CompetitorRef]]]
    ) -> "PairingHistory":
        """Build a history from any iterable of two-member pairs.

        One-member entries (byes) are ignored.
        """
        history = cls()
        for pair in pairs or ():
            members = list(pair)
            if len(members) == 2:
                history.add_pairing(members[0], members[1])
        return history

    @classmethod
    def from_matches(
        cls, matches: Iterable[Match], before_round: Optional[int] = None
    ) -> "PairingHistory":
        """Build a history from stored matches.

        Args:
            matches: Stored qualification matches
            before_round: Only matches from earlier rounds are counted when given
        """
        history = cls()
        for match in matches:
            if match.is_bye:
                continue
            if before_round is not None and match.round_number >= before_round:
                continue
            history.add_pairing(match.participant1, match.participant2)
        return history
