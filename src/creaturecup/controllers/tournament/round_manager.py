"""Round management for tournaments.

This module handles pairing generation for the current Swiss round, round
completion checks and round progression.
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

from typing import List

from creaturecup.exceptions import RoundIncompleteException, TournamentCompleteException
from creaturecup.models.tournament import Match, PairingHistory, Tournament
from creaturecup.pairing import calculate_standings, generate_pairings
from creaturecup.type_hints import Matchup, Matchups, RoundPairings, Standings
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Derives round state of a tournament from its stored matches.

    This class is responsible for:
    - Generating the expected pairings of the current round
    - Deciding whether every expected pairing has been played
    - Moving the tournament to its next round

    Pairings are computed from matches of earlier rounds only, so the
    expected pairings of a round do not shift while its results come in.
    """

    def round_standings(
        self, tournament: Tournament, matches: List[Match]
    ) -> Standings:
        """Scores at the start of the current round."""
        return calculate_standings(
            tournament.participant_ids, matches, before_round=tournament.current_round
        )

    def get_round_pairings(
        self, tournament: Tournament, matches: List[Match]
    ) -> RoundPairings:
        """Generate the pairings of the tournament's current round.

        Args:
            tournament: The tournament
            matches: Every stored match of the tournament

        Returns:
            The round's pairings, or an empty list once the tournament is complete
        """
        if tournament.is_complete:
            return []
        history = PairingHistory.from_matches(
            matches, before_round=tournament.current_round
        )
        pairings = generate_pairings(
            tournament.participant_ids,
            history,
            self.round_standings(tournament, matches),
        )
        logger.debug(
            f"Round {tournament.current_round + 1} of {tournament.id}: "
            f"{len(pairings)} pairings, {len(history)} earlier matchups"
        )
        return pairings

    def played_matchups(self, tournament: Tournament, matches: List[Match]) -> Matchups:
        """Order-free keys of the two-sided matches stored for the current round."""
        return {
            match.matchup
            for match in matches
            if match.round_number == tournament.current_round and not match.is_bye
        }

    def missing_pairings(
        self, tournament: Tournament, matches: List[Match]
    ) -> List[Matchup]:
        """Expected two-sided pairings of the current round with no stored match."""
        played = self.played_matchups(tournament, matches)
        return [
            frozenset(pairing)
            for pairing in self.get_round_pairings(tournament, matches)
            if len(pairing) == 2 and frozenset(pairing) not in played
        ]

    def is_round_complete(self, tournament: Tournament, matches: List[Match]) -> bool:
        """Check that every expected pairing of the current round was played.

        Byes need no stored match; an empty pairing list is complete.
        """
        if tournament.is_complete:
            return True
        return not self.missing_pairings(tournament, matches)

    def advance(self, tournament: Tournament, matches: List[Match]) -> None:
        """Move ``tournament`` to its next round in place.

        Raises:
            TournamentCompleteException: If the tournament is already complete
            RoundIncompleteException: If the current round has unplayed pairings
        """
        if tournament.is_complete:
            raise TournamentCompleteException(
                f"Tournament {tournament.id} is already complete"
            )
        missing = self.missing_pairings(tournament, matches)
        if missing:
            raise RoundIncompleteException(
                f"Round {tournament.current_round + 1} of {tournament.id} still has "
                f"{len(missing)} unplayed pairing(s)"
            )
        tournament.advance_round()
        logger.info(
            f"Tournament {tournament.id} advanced to round "
            f"{tournament.current_round}/{tournament.total_rounds}"
        )
