"""Playoff bracket management for tournaments.

The engines are stateless, so every operation here loads the whole stored
bracket, hands it to the engine and saves the whole result back.
"""

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

from dataclasses import replace
from typing import Optional

from creaturecup.bracket import create_engine
from creaturecup.constants import DOUBLE_ELIMINATION_SIZE, PLAYOFF_DOUBLE_ELIMINATION
from creaturecup.exceptions import (
    BracketNotInitializedException,
    InsufficientQualifiersException,
    TournamentNotCompleteException,
)
from creaturecup.models.bracket import Bracket, BracketMatch
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament import Tournament
from creaturecup.persistence import TournamentRepository
from creaturecup.seeding import create_playoff_bracket
from creaturecup.type_hints import CompetitorRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


class BracketManager:
    """Loads, advances and stores the playoff bracket of a tournament."""

    def __init__(self, repository: TournamentRepository):
        self.repository = repository

    def load(self, tournament_id: TournamentId) -> Optional[Bracket]:
        """The stored bracket, or None before the playoff starts."""
        data = self.repository.load_bracket_data(tournament_id)
        if data is None:
            return None
        return Bracket.from_dict(data)

    def require(self, tournament_id: TournamentId) -> Bracket:
        """The stored bracket.

        Raises:
            BracketNotInitializedException: If the playoff has not started
        """
        bracket = self.load(tournament_id)
        if bracket is None:
            raise BracketNotInitializedException(
                f"Tournament {tournament_id} has no playoff bracket yet"
            )
        return bracket

    def save(self, tournament_id: TournamentId, bracket: Bracket) -> Bracket:
        """Store ``bracket`` and return it at its new version."""
        version = self.repository.save_bracket_data(tournament_id, bracket.to_dict())
        return replace(bracket, version=version)

    def initialize(self, tournament: Tournament) -> Bracket:
        """Seed the playoff from final standings; a no-op if it already exists.

        The playoff kind and size come from the tournament's format, falling
        back to a 16-entrant double elimination when the format has none.

        Raises:
            TournamentNotCompleteException: If qualification is still running
            InsufficientQualifiersException: If there are too few participants
        """
        existing = self.load(tournament.id)
        if existing is not None:
            logger.debug(f"Bracket of {tournament.id} already initialized")
            return existing
        if not tournament.is_complete:
            raise TournamentNotCompleteException(
                f"Tournament {tournament.id} is still in round "
                f"{tournament.current_round + 1} of {tournament.total_rounds}"
            )

        if tournament.format.has_playoff:
            playoff = tournament.format.playoff
            size = tournament.format.playoff_cutoff
        else:
            playoff = PLAYOFF_DOUBLE_ELIMINATION
            size = DOUBLE_ELIMINATION_SIZE
        if len(tournament.participants) < size:
            raise InsufficientQualifiersException(
                f"A {playoff} playoff needs {size} qualifiers, tournament "
                f"{tournament.id} has {len(tournament.participants)}"
            )

        standings = {p.competitor_id: p.score for p in tournament.participants}
        bracket = create_playoff_bracket(
            tournament.participants, standings, size, playoff
        )
        bracket = self.save(tournament.id, bracket)
        logger.info(f"Initialized {playoff} bracket of {size} for {tournament.id}")
        return bracket

    def record_result(
        self, tournament_id: TournamentId, match_id: str, winner: CompetitorRef
    ) -> Bracket:
        bracket = self.require(tournament_id)
        engine = create_engine(bracket.kind)
        bracket = engine.record_match_result(bracket, match_id, winner)
        logger.debug(
            f"Bracket match {match_id} of {tournament_id} won by "
            f"{CompetitorId.of(winner)}"
        )
        return self.save(tournament_id, bracket)

    def next_match(self, tournament_id: TournamentId) -> Optional[BracketMatch]:
        bracket = self.load(tournament_id)
        if bracket is None:
            return None
        ready = create_engine(bracket.kind).get_matches_ready_for_voting(bracket)
        return ready[0] if ready else None

    def is_complete(self, tournament_id: TournamentId) -> bool:
        bracket = self.load(tournament_id)
        if bracket is None:
            return False
        return create_engine(bracket.kind).is_bracket_complete(bracket)

    def champion(self, tournament_id: TournamentId) -> Optional[CompetitorId]:
        bracket = self.load(tournament_id)
        if bracket is None:
            return None
        return create_engine(bracket.kind).get_champion(bracket)
