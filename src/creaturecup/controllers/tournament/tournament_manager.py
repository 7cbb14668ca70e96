"""Main TournamentManager class - orchestrates all tournament operations.

This is the primary interface for callers such as route handlers. It
coordinates the specialized managers against a TournamentRepository and
holds no tournament state between calls.
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

from typing import List, Optional, Sequence, Union

from creaturecup.controllers.tournament.bracket_manager import BracketManager
from creaturecup.controllers.tournament.result_recorder import ResultRecorder
from creaturecup.controllers.tournament.round_manager import RoundManager
from creaturecup.exceptions import (
    InvalidInputException,
    InvalidParticipantsException,
    TournamentNotCompleteException,
    TournamentNotFoundException,
)
from creaturecup.models.bracket import Bracket, BracketMatch
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament import (
    Match,
    Outcome,
    Participant,
    StandingsEntry,
    Tournament,
    TournamentFormat,
)
from creaturecup.pairing import calculate_total_rounds
from creaturecup.persistence import TournamentRepository
from creaturecup.type_hints import CompetitorRef, RoundPairings, TournamentRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


class TournamentManager:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized managers:
    - RoundManager: expected pairings, round completion and progression
    - ResultRecorder: result validation and participant record updates
    - BracketManager: playoff bracket load, advance and store

    Each public method reads the tournament from the repository, computes,
    and writes back. Invalid input is rejected before anything is written.
    """

    def __init__(
        self,
        repository: TournamentRepository,
        tournament_format: Optional[TournamentFormat] = None,
    ) -> None:
        """Initialize the manager.

        Args
        ----
        repository: Storage for tournaments, matches and brackets
        tournament_format: Format given to new tournaments unless overridden
        """
        self.repository = repository
        self.default_format = tournament_format or TournamentFormat()

        self.round_manager = RoundManager()
        self.result_recorder = ResultRecorder()
        self.bracket_manager = BracketManager(repository)

    # ========== Tournament Lifecycle ==========

    def create_tournament(
        self,
        participants: Sequence[CompetitorRef],
        owner: str,
        tournament_format: Optional[TournamentFormat] = None,
    ) -> Tournament:
        """Create and store a tournament at round 0.

        Args:
            participants: Competitor ids, in registration order
            owner: E-mail of the creating user
            tournament_format: Overrides the manager's default format

        Returns:
            The stored tournament

        Raises:
            InvalidParticipantsException: If the list is empty or has duplicates
            InvalidIdentifierException: If a competitor id is malformed
        """
        if not participants:
            raise InvalidParticipantsException(
                "Cannot create a tournament without participants"
            )
        if not owner or not owner.strip():
            raise InvalidInputException("A tournament needs an owner")
        competitors = [CompetitorId.of(p) for p in participants]
        if len(set(competitors)) != len(competitors):
            raise InvalidParticipantsException(
                "Each competitor can only enter a tournament once"
            )

        tournament = Tournament(
            id=TournamentId.generate(),
            owner=owner.strip(),
            participants=[Participant(c) for c in competitors],
            total_rounds=calculate_total_rounds(len(competitors)),
            format=tournament_format or self.default_format,
        )
        self.repository.save(tournament)
        logger.info(
            f"Created tournament {tournament.id} for {tournament.owner}: "
            f"{len(competitors)} participants, {tournament.total_rounds} rounds"
        )
        return tournament

    def get_tournament(self, tournament_id: TournamentRef) -> Tournament:
        """
        Raises:
            TournamentNotFoundException: If no such tournament is stored
        """
        tournament = self.repository.find_by_id(TournamentId.of(tournament_id))
        if tournament is None:
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        return tournament

    def get_user_tournaments(self, owner: str) -> List[Tournament]:
        return self.repository.find_by_user_email(owner)

    def delete_tournament(self, tournament_id: TournamentRef) -> None:
        """
        Raises:
            TournamentNotFoundException: If no such tournament is stored
        """
        tournament_id = TournamentId.of(tournament_id)
        if not self.repository.exists(tournament_id):
            raise TournamentNotFoundException(
                f"Cannot delete tournament {tournament_id}: not found"
            )
        self.repository.delete(tournament_id)
        logger.info(f"Deleted tournament {tournament_id}")

    # ========== Qualification Rounds ==========

    def get_current_round_pairings(self, tournament_id: TournamentRef) -> RoundPairings:
        """Expected pairings of the current round; empty once complete."""
        tournament = self.get_tournament(tournament_id)
        if tournament.is_complete:
            return []
        matches = self.repository.load_matches(tournament.id)
        return self.round_manager.get_round_pairings(tournament, matches)

    def record_match_result(
        self,
        tournament_id: TournamentRef,
        participant1: CompetitorRef,
        participant2: CompetitorRef,
        outcome: Union[Outcome, str],
        winner: Optional[CompetitorRef] = None,
    ) -> Match:
        """Record a qualification result in the current round.

        Raises:
            TournamentNotFoundException: If no such tournament is stored
            TournamentCompleteException: If qualification is over
            InvalidInputException: If a participant, the outcome or the winner
                is invalid, or the result duplicates one already recorded
            ConcurrentModificationException: If the tournament changed meanwhile
        """
        tournament = self.get_tournament(tournament_id)
        matches = self.repository.load_matches(tournament.id)
        match = self.result_recorder.record_match_result(
            tournament, matches, participant1, participant2, outcome, winner
        )
        self.repository.save(tournament)
        self.repository.save_match(tournament.id, match)
        return match

    def record_bye(
        self, tournament_id: TournamentRef, participant: CompetitorRef
    ) -> Match:
        """Credit a bye (a win) to ``participant`` in the current round."""
        tournament = self.get_tournament(tournament_id)
        matches = self.repository.load_matches(tournament.id)
        match = self.result_recorder.record_bye(tournament, matches, participant)
        self.repository.save(tournament)
        self.repository.save_match(tournament.id, match)
        return match

    def is_current_round_complete(self, tournament_id: TournamentRef) -> bool:
        tournament = self.get_tournament(tournament_id)
        if tournament.is_complete:
            return True
        matches = self.repository.load_matches(tournament.id)
        return self.round_manager.is_round_complete(tournament, matches)

    def advance_to_next_round(self, tournament_id: TournamentRef) -> Tournament:
        """Finish the current round and start the next one.

        When this completes qualification and the format has a playoff with
        enough qualifiers, the bracket is initialized as well.

        Raises:
            TournamentCompleteException: If the tournament is already complete
            RoundIncompleteException: If the current round has unplayed pairings
        """
        tournament = self.get_tournament(tournament_id)
        matches = self.repository.load_matches(tournament.id)
        self.round_manager.advance(tournament, matches)
        self.repository.save(tournament)

        if tournament.is_complete:
            logger.info(f"Qualification of {tournament.id} complete")
            playoff_format = tournament.format
            if not playoff_format.has_playoff:
                logger.info(f"Tournament {tournament.id} has no playoff")
            elif len(tournament.participants) < playoff_format.playoff_cutoff:
                logger.warning(
                    f"Skipping {playoff_format.playoff} playoff of {tournament.id}: "
                    f"{len(tournament.participants)} participants, "
                    f"{playoff_format.playoff_cutoff} needed"
                )
            else:
                self.bracket_manager.initialize(tournament)
        return tournament

    # ========== Standings ==========

    def get_current_standings(
        self, tournament_id: TournamentRef
    ) -> List[StandingsEntry]:
        """Standings rows in participant registration order."""
        tournament = self.get_tournament(tournament_id)
        return [p.standings_entry() for p in tournament.participants]

    def get_final_standings(self, tournament_id: TournamentRef) -> List[StandingsEntry]:
        """
        Raises:
            TournamentNotCompleteException: If qualification is still running
        """
        tournament = self.get_tournament(tournament_id)
        if not tournament.is_complete:
            raise TournamentNotCompleteException(
                f"Tournament {tournament.id} has no final standings before round "
                f"{tournament.total_rounds} is finished"
            )
        return [p.standings_entry() for p in tournament.participants]

    # ========== Playoff Bracket ==========

    def initialize_bracket(self, tournament_id: TournamentRef) -> Bracket:
        """Seed the playoff bracket; returns the existing one if already seeded.

        Raises:
            TournamentNotCompleteException: If qualification is still running
            InsufficientQualifiersException: If the playoff cannot be filled
        """
        return self.bracket_manager.initialize(self.get_tournament(tournament_id))

    def get_bracket(self, tournament_id: TournamentRef) -> Optional[Bracket]:
        tournament = self.get_tournament(tournament_id)
        return self.bracket_manager.load(tournament.id)

    def record_bracket_match_result(
        self, tournament_id: TournamentRef, match_id: str, winner: CompetitorRef
    ) -> Bracket:
        """Decide a bracket match and store the advanced bracket.

        Raises:
            BracketNotInitializedException: If the playoff has not started
            InvalidInputException: If the match id or winner is invalid
        """
        tournament = self.get_tournament(tournament_id)
        bracket = self.bracket_manager.record_result(tournament.id, match_id, winner)
        if bracket.is_complete:
            logger.info(f"Tournament {tournament.id} won by {bracket.champion}")
        return bracket

    def get_next_bracket_match(
        self, tournament_id: TournamentRef
    ) -> Optional[BracketMatch]:
        """The next playable bracket match, if any."""
        tournament = self.get_tournament(tournament_id)
        return self.bracket_manager.next_match(tournament.id)

    def is_bracket_complete(self, tournament_id: TournamentRef) -> bool:
        tournament = self.get_tournament(tournament_id)
        return self.bracket_manager.is_complete(tournament.id)

    def get_bracket_champion(
        self, tournament_id: TournamentRef
    ) -> Optional[CompetitorId]:
        tournament = self.get_tournament(tournament_id)
        return self.bracket_manager.champion(tournament.id)
