"""In-memory repository, used by tests and simulations."""

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

import copy
from typing import Any, Dict, List, Optional

from creaturecup.models.identifiers import TournamentId
from creaturecup.models.tournament import Match, Tournament
from creaturecup.persistence.repository import (
    BracketData,
    TournamentRepository,
    check_version,
)
from creaturecup.type_hints import TournamentRef


class InMemoryTournamentRepository(TournamentRepository):
    """Keeps serialized snapshots in dictionaries.

    Objects handed out are rebuilt from the snapshots, so callers never
    share state with the store or with each other.
    """

    def __init__(self):
        self._tournaments: Dict[str, Dict[str, Any]] = {}
        self._matches: Dict[str, List[Dict[str, Any]]] = {}
        self._brackets: Dict[str, BracketData] = {}

    def save(self, tournament: Tournament) -> None:
        key = str(tournament.id)
        stored = self._tournaments.get(key)
        check_version(
            "Tournament",
            tournament.id,
            tournament.version,
            stored["version"] if stored else None,
        )
        tournament.version += 1
        self._tournaments[key] = tournament.to_dict()

    def find_by_id(self, tournament_id: TournamentRef) -> Optional[Tournament]:
        data = self._tournaments.get(str(TournamentId.of(tournament_id)))
        return Tournament.from_dict(data) if data else None

    def find_by_user_email(self, email: str) -> List[Tournament]:
        return [t for t in self.find_all() if t.owner == email]

    def find_all(self) -> List[Tournament]:
        tournaments = [Tournament.from_dict(d) for d in self._tournaments.values()]
        return sorted(tournaments, key=lambda t: t.created_at)

    def exists(self, tournament_id: TournamentRef) -> bool:
        return str(TournamentId.of(tournament_id)) in self._tournaments

    def delete(self, tournament_id: TournamentRef) -> None:
        key = str(TournamentId.of(tournament_id))
        self._tournaments.pop(key, None)
        self._matches.pop(key, None)
        self._brackets.pop(key, None)

    def save_match(self, tournament_id: TournamentRef, match: Match) -> None:
        key = str(TournamentId.of(tournament_id))
        self._matches.setdefault(key, []).append(match.to_dict())

    def load_matches(self, tournament_id: TournamentRef) -> List[Match]:
        key = str(TournamentId.of(tournament_id))
        return [Match.from_dict(m) for m in self._matches.get(key, [])]

    def load_bracket_data(self, tournament_id: TournamentRef) -> Optional[BracketData]:
        data = self._brackets.get(str(TournamentId.of(tournament_id)))
        return copy.deepcopy(data) if data is not None else None

    def save_bracket_data(self, tournament_id: TournamentRef, data: BracketData) -> int:
        tournament_id = TournamentId.of(tournament_id)
        stored = self._brackets.get(str(tournament_id))
        check_version(
            "Bracket",
            tournament_id,
            data.get("version", 0),
            stored.get("version", 0) if stored else None,
        )
        new_version = data.get("version", 0) + 1
        self._brackets[str(tournament_id)] = dict(
            copy.deepcopy(data), version=new_version
        )
        return new_version
