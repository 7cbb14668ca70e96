"""Winner-choosing strategies for simulated tournaments."""

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

import random
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional

from creaturecup.exceptions import InvalidInputException
from creaturecup.models.identifiers import CompetitorId


class TournamentStrategy(ABC):
    """Decides matches on behalf of voters."""

    @abstractmethod
    def choose_winner(
        self, participant1: CompetitorId, participant2: CompetitorId
    ) -> CompetitorId:
        """Return whichever of the two participants wins."""

    def is_draw(self, participant1: CompetitorId, participant2: CompetitorId) -> bool:
        """Whether a qualification match ends in a draw. Playoffs never draw."""
        return False


class PrefersLowerLexicalStrategy(TournamentStrategy):
    """The alphabetically first competitor always wins."""

    def choose_winner(
        self, participant1: CompetitorId, participant2: CompetitorId
    ) -> CompetitorId:
        if participant1.value <= participant2.value:
            return participant1
        return participant2


class PrefersHigherStatStrategy(TournamentStrategy):
    """The competitor with the higher stat (e.g. base HP) wins.

    Equal stats fall back to the alphabetically first competitor.
    """

    def __init__(self, stat_lookup: Callable[[CompetitorId], int]):
        self.stat_lookup = stat_lookup
        self._tie_break = PrefersLowerLexicalStrategy()

    @classmethod
    def from_mapping(
        cls, stats: Mapping[str, int], default: int = 0
    ) -> "PrefersHigherStatStrategy":
        """Build the strategy from a competitor name -> stat mapping."""
        normalized = {
            CompetitorId.of(name): int(value) for name, value in stats.items()
        }
        return cls(lambda competitor: normalized.get(competitor, default))

    def choose_winner(
        self, participant1: CompetitorId, participant2: CompetitorId
    ) -> CompetitorId:
        stat1 = self.stat_lookup(participant1)
        stat2 = self.stat_lookup(participant2)
        if stat1 > stat2:
            return participant1
        if stat2 > stat1:
            return participant2
        return self._tie_break.choose_winner(participant1, participant2)


class RandomStrategy(TournamentStrategy):
    """Coin-flip results, reproducible with a seed."""

    def __init__(self, seed: Optional[int] = None, draw_rate: float = 0.0):
        if not 0.0 <= draw_rate <= 1.0:
            raise InvalidInputException(
                f"Draw rate must be between 0 and 1, got {draw_rate}"
            )
        self.random = random.Random(seed) if seed is not None else random.Random()
        self.draw_rate = draw_rate

    def choose_winner(
        self, participant1: CompetitorId, participant2: CompetitorId
    ) -> CompetitorId:
        return self.random.choice((participant1, participant2))

    def is_draw(self, participant1: CompetitorId, participant2: CompetitorId) -> bool:
        return self.draw_rate > 0 and self.random.random() < self.draw_rate
