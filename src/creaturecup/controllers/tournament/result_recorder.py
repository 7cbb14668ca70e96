"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error checking.
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

from typing import List, Optional, Union

from creaturecup.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    ParticipantNotFoundException,
    TournamentCompleteException,
)
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import Match, MatchResult, Outcome, Tournament
from creaturecup.type_hints import CompetitorRef, Matchup
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating results before anything is written
    - Updating participant records
    - Handling bye results
    - Preventing the same result being recorded twice within a round

    Every check runs before the tournament is touched, so a rejected result
    leaves the tournament unchanged.
    """

    def record_match_result(
        self,
        tournament: Tournament,
        matches: List[Match],
        participant1: CompetitorRef,
        participant2: CompetitorRef,
        outcome: Union[Outcome, str],
        winner: Optional[CompetitorRef] = None,
    ) -> Match:
        """Record a two-sided result in the tournament's current round.

        Args:
            tournament: The tournament; its participants are updated in place
            matches: Every stored match of the tournament
            participant1: First competitor
            participant2: Second competitor
            outcome: "win", "loss" or "draw"
            winner: The winning competitor, None for a draw

        Returns:
            The recorded match, ready to be stored

        Raises:
            TournamentCompleteException: If qualification is already over
            ParticipantNotFoundException: If a competitor is not in the tournament
            InvalidResultException: If the outcome or winner is invalid
            DuplicateResultException: If the same pair already has a result
                this round
        """
        self._require_open(tournament)
        first = self._require_participant(tournament, participant1)
        second = self._require_participant(tournament, participant2)
        if first == second:
            raise InvalidResultException(f"{first} cannot play against itself")

        outcome = Outcome.parse(outcome)
        winner_id = CompetitorId.of(winner) if winner is not None else None
        if winner_id is not None and winner_id not in (first, second):
            raise InvalidResultException(
                f"Winner {winner_id} is neither {first} nor {second}"
            )
        result = MatchResult(outcome=outcome, winner=winner_id)

        self._require_new_matchup(tournament, matches, frozenset((first, second)))

        match = Match(first, second, tournament.current_round)
        match.record_result(result, tournament.participants_by_id)
        logger.debug(
            f"Recorded {match.describe()}: {outcome.value}"
            + (f", won by {winner_id}" if winner_id else "")
        )
        return match

    def record_bye(
        self,
        tournament: Tournament,
        matches: List[Match],
        participant: CompetitorRef,
    ) -> Match:
        """Credit a bye (a win) in the current round.

        Returns:
            The one-sided bye match, ready to be stored

        Raises:
            TournamentCompleteException: If qualification is already over
            ParticipantNotFoundException: If the competitor is not in the tournament
            DuplicateResultException: If the competitor already has a bye
                this round
        """
        self._require_open(tournament)
        competitor = self._require_participant(tournament, participant)
        self._require_new_matchup(tournament, matches, frozenset((competitor,)))

        match = Match(competitor, None, tournament.current_round)
        match.record_result(
            MatchResult(outcome=Outcome.WIN, winner=competitor),
            tournament.participants_by_id,
        )
        logger.debug(f"Recorded {match.describe()}")
        return match

    def _require_open(self, tournament: Tournament) -> None:
        if tournament.is_complete:
            raise TournamentCompleteException(
                f"Tournament {tournament.id} finished qualification; "
                "no more results can be recorded"
            )

    def _require_participant(
        self, tournament: Tournament, competitor: CompetitorRef
    ) -> CompetitorId:
        competitor_id = CompetitorId.of(competitor)
        if not tournament.has_participant(competitor_id):
            raise ParticipantNotFoundException(
                f"{competitor_id} is not a participant of tournament {tournament.id}"
            )
        return competitor_id

    def _require_new_matchup(
        self, tournament: Tournament, matches: List[Match], matchup: Matchup
    ) -> None:
        """Reject a pair (or a bye) already stored for the current round.

        A competitor may still appear in other results of the round.
        """
        for match in matches:
            if (
                match.round_number == tournament.current_round
                and match.matchup == matchup
            ):
                raise DuplicateResultException(
                    f"Result for {match.describe()} is already recorded"
                )
