"""Storage contract for tournaments, their matches and playoff brackets."""

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
from typing import Any, Dict, List, Optional

from creaturecup.exceptions import ConcurrentModificationException
from creaturecup.models.identifiers import TournamentId
from creaturecup.models.tournament import Match, Tournament
from creaturecup.type_hints import TournamentRef

BracketData = Dict[str, Any]


def check_version(
    what: str, tournament_id: TournamentId, expected: int, stored: Optional[int]
) -> None:
    """Reject a write based on a version other than the stored one.

    Raises:
        ConcurrentModificationException: If the versions differ
    """
    stored = 0 if stored is None else stored
    if expected != stored:
        raise ConcurrentModificationException(
            f"{what} of tournament {tournament_id} was modified concurrently "
            f"(saving version {expected}, stored version {stored})"
        )


class TournamentRepository(ABC):
    """Persistence used by the tournament manager.

    Tournaments carry a version counter. ``save`` accepts a tournament only
    when its version matches the stored one (0 for a new tournament) and
    then bumps it, so two writers that loaded the same version cannot both
    succeed. Bracket data is versioned the same way through its
    ``"version"`` key.
    """

    @abstractmethod
    def save(self, tournament: Tournament) -> None:
        """Insert or update a tournament and its participants.

        On success ``tournament.version`` is incremented in place.

        Raises:
            ConcurrentModificationException: If the stored version differs
        """

    @abstractmethod
    def find_by_id(self, tournament_id: TournamentRef) -> Optional[Tournament]:
        pass

    @abstractmethod
    def find_by_user_email(self, email: str) -> List[Tournament]:
        """Tournaments owned by ``email``, oldest first."""

    @abstractmethod
    def find_all(self) -> List[Tournament]:
        pass

    @abstractmethod
    def exists(self, tournament_id: TournamentRef) -> bool:
        pass

    @abstractmethod
    def delete(self, tournament_id: TournamentRef) -> None:
        """Remove a tournament with its matches and bracket."""

    @abstractmethod
    def save_match(self, tournament_id: TournamentRef, match: Match) -> None:
        """Append a played qualification match."""

    @abstractmethod
    def load_matches(self, tournament_id: TournamentRef) -> List[Match]:
        """Stored matches in the order they were saved."""

    @abstractmethod
    def load_bracket_data(self, tournament_id: TournamentRef) -> Optional[BracketData]:
        pass

    @abstractmethod
    def save_bracket_data(self, tournament_id: TournamentRef, data: BracketData) -> int:
        """Store the whole bracket structure.

        Returns:
            The new stored version

        Raises:
            ConcurrentModificationException: If ``data["version"]`` is stale
        """
