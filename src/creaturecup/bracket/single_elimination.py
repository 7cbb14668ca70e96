"""Single-elimination playoff for any power-of-two field."""

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

from typing import List, Sequence

from creaturecup.bracket.base import BracketEngine, coerce_seeds, match_id
from creaturecup.constants import WINNER_MATCH_PREFIX
from creaturecup.exceptions import InvalidParticipantsException
from creaturecup.models.bracket import Bracket, BracketKind, BracketMatch, Ladder
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament.tournament_config import is_power_of_two
from creaturecup.type_hints import CompetitorRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


def standard_seed_order(size: int) -> List[int]:
    """1-based seeds in bracket order, so that pairs are adjacent.

    Seeds 1 and 2 can only meet in the final, 1-4 only in the semifinals,
    and so on. For 8: ``[1, 8, 4, 5, 2, 7, 3, 6]``.
    """
    if size == 1:
        return [1]
    return [
        seed
        for top in standard_seed_order(size // 2)
        for seed in (top, size + 1 - top)
    ]


class SingleEliminationBracketEngine(BracketEngine):
    """Builds and advances single-elimination brackets.

    Every round is created up front. The winner of the k-th match of a round
    moves to match ``ceil(k / 2)`` of the next round, in slot 1 for odd k and
    slot 2 for even k.
    """

    kind = BracketKind.SINGLE_ELIMINATION

    def create_bracket(self, participants: Sequence[CompetitorRef]) -> Bracket:
        """
        Raises:
            InvalidParticipantsException: If the field is not a power of two
                of at least 2
        """
        seeds = coerce_seeds(participants)
        size = len(seeds)
        if size < 2 or not is_power_of_two(size):
            raise InvalidParticipantsException(
                f"Single elimination needs a power-of-two field of at least 2, "
                f"got {size}"
            )

        order = standard_seed_order(size)
        matches = {}
        rounds = []
        match_count = size // 2
        round_number = 1
        while match_count >= 1:
            round_ids = []
            for sequence in range(1, match_count + 1):
                mid = match_id(WINNER_MATCH_PREFIX, round_number, sequence)
                first = second = None
                if round_number == 1:
                    first = seeds[order[2 * sequence - 2] - 1]
                    second = seeds[order[2 * sequence - 1] - 1]
                matches[mid] = BracketMatch(
                    id=mid,
                    ladder=Ladder.WINNER,
                    round_number=round_number,
                    participant1=first,
                    participant2=second,
                )
                round_ids.append(mid)
            rounds.append(tuple(round_ids))
            match_count //= 2
            round_number += 1

        logger.info(
            f"Created single-elimination bracket of {size} "
            f"({len(rounds)} rounds), top seed {seeds[0]}"
        )
        return Bracket(kind=self.kind, matches=matches, winner_rounds=tuple(rounds))

    def _advance(
        self, bracket: Bracket, match: BracketMatch, winner: CompetitorId
    ) -> Bracket:
        round_number, position = self.get_placement(bracket, match)
        if round_number == len(bracket.winner_rounds):
            logger.info(f"Playoff champion: {winner}")
            return bracket

        next_id = bracket.winner_rounds[round_number][(position - 1) // 2]
        next_match = bracket.get_match(next_id)
        slot = 1 if position % 2 == 1 else 2
        return bracket.replace_match(next_match.with_slot(slot, winner))
