"""Let a person at the terminal vote on every match."""

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

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from creaturecup.models.identifiers import CompetitorId
from creaturecup.simulation.strategies import TournamentStrategy

DRAW_ANSWERS = ("draw", "tie")


class PromptStrategy(TournamentStrategy):
    """Asks the user for each result, with tab completion of the two names.

    Answers are ``1``, ``2``, or a competitor name. When draws are allowed,
    ``draw`` records a draw for qualification matches.
    """

    def __init__(
        self, allow_draws: bool = True, session: Optional[PromptSession] = None
    ):
        self.allow_draws = allow_draws
        self.session = session or PromptSession(history=InMemoryHistory())
        # Answer given to is_draw, reused by the choose_winner call after it
        self._decided: Optional[CompetitorId] = None

    def _ask(
        self, participant1: CompetitorId, participant2: CompetitorId, allow_draw: bool
    ) -> Optional[CompetitorId]:
        words = [str(participant1), str(participant2)]
        if allow_draw:
            words.extend(DRAW_ANSWERS)
        completer = WordCompleter(words, ignore_case=True)
        question = f"{participant1} (1) vs {participant2} (2)"
        if allow_draw:
            question += " or draw"
        while True:
            answer = self.session.prompt(f"{question}? ", completer=completer)
            answer = answer.strip().lower()
            if answer in ("1", str(participant1)):
                return participant1
            if answer in ("2", str(participant2)):
                return participant2
            if allow_draw and answer in DRAW_ANSWERS:
                return None
            print(f"Please answer 1, 2{', or draw' if allow_draw else ''}.")

    def is_draw(self, participant1: CompetitorId, participant2: CompetitorId) -> bool:
        if not self.allow_draws:
            return False
        self._decided = self._ask(participant1, participant2, allow_draw=True)
        return self._decided is None

    def choose_winner(
        self, participant1: CompetitorId, participant2: CompetitorId
    ) -> CompetitorId:
        decided = self._decided
        self._decided = None
        if decided in (participant1, participant2):
            return decided
        return self._ask(participant1, participant2, allow_draw=False)
