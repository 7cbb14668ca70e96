"""Drive a whole tournament, Swiss rounds through playoff, with a strategy."""

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
from typing import List, Optional, Sequence

from creaturecup.constants import OUTCOME_DRAW, OUTCOME_WIN
from creaturecup.controllers.tournament import TournamentManager
from creaturecup.exceptions import TournamentStateException
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament import StandingsEntry, TournamentFormat
from creaturecup.simulation.strategies import TournamentStrategy
from creaturecup.type_hints import CompetitorRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class SimulationReport:
    """Outcome of a simulated tournament.

    Attributes
    ----------
    tournament_id : TournamentId
        Id of the stored tournament.
    rounds_played : int
        Swiss rounds played.
    byes : int
        Byes credited across all rounds.
    standings : list of StandingsEntry
        Final qualification standings, best first.
    bracket_matches : int
        Playoff matches decided.
    champion : CompetitorId or None
        Playoff winner, or None when no playoff was held.
    """

    tournament_id: TournamentId
    rounds_played: int = 0
    byes: int = 0
    standings: List[StandingsEntry] = field(default_factory=list)
    bracket_matches: int = 0
    champion: Optional[CompetitorId] = None


class TournamentSimulator:
    """Plays out tournaments through a TournamentManager."""

    def __init__(self, manager: TournamentManager, strategy: TournamentStrategy):
        self.manager = manager
        self.strategy = strategy

    def run(
        self,
        participants: Sequence[CompetitorRef],
        owner: str,
        tournament_format: Optional[TournamentFormat] = None,
    ) -> SimulationReport:
        """Create a tournament and play it to the end.

        Raises:
            TournamentStateException: If the playoff stops offering matches
                before it has a champion
        """
        tournament = self.manager.create_tournament(
            participants, owner, tournament_format
        )
        report = SimulationReport(tournament_id=tournament.id)

        while not tournament.is_complete:
            report.byes += self.play_round(tournament.id)
            tournament = self.manager.advance_to_next_round(tournament.id)
            report.rounds_played += 1

        report.standings = sorted(
            self.manager.get_final_standings(tournament.id),
            key=lambda entry: (-entry.score, entry.participant.value),
        )
        if self.manager.get_bracket(tournament.id) is not None:
            report.bracket_matches = self.play_bracket(tournament.id)
            report.champion = self.manager.get_bracket_champion(tournament.id)
        logger.info(
            f"Simulation of {tournament.id} finished after {report.rounds_played} "
            f"rounds; champion: {report.champion or 'none'}"
        )
        return report

    def play_round(self, tournament_id: TournamentId) -> int:
        """Record every pairing of the current round; returns the byes given."""
        byes = 0
        for pairing in self.manager.get_current_round_pairings(tournament_id):
            if len(pairing) == 1:
                self.manager.record_bye(tournament_id, pairing[0])
                byes += 1
                continue
            first, second = pairing
            if self.strategy.is_draw(first, second):
                self.manager.record_match_result(
                    tournament_id, first, second, OUTCOME_DRAW
                )
            else:
                winner = self.strategy.choose_winner(first, second)
                self.manager.record_match_result(
                    tournament_id, first, second, OUTCOME_WIN, winner
                )
        return byes

    def play_bracket(self, tournament_id: TournamentId) -> int:
        """Decide bracket matches until there is a champion; returns the count."""
        played = 0
        while not self.manager.is_bracket_complete(tournament_id):
            match = self.manager.get_next_bracket_match(tournament_id)
            if match is None or not match.is_ready:
                raise TournamentStateException(
                    f"Bracket of {tournament_id} has no playable match "
                    "but no champion either"
                )
            winner = self.strategy.choose_winner(match.participant1, match.participant2)
            self.manager.record_bracket_match_result(tournament_id, match.id, winner)
            played += 1
        return played
