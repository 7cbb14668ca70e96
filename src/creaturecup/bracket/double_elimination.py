"""Double-elimination playoff over a fixed field of 16.

Winner ladder rounds 1-4, loser ladder rounds 1-5 and a grand final. Losers
of winner rounds 1-4 drop into the loser round of the same number, so a
competitor leaves the playoff only after a second loss. Field sizes per
loser round: 8, 8, 6, 4, 2.
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

from typing import Sequence

from creaturecup.bracket.base import BracketEngine, coerce_seeds, match_id
from creaturecup.constants import (
    DOUBLE_ELIMINATION_SIZE,
    GRAND_FINAL_ID,
    LOSER_LADDER_ROUNDS,
    LOSER_MATCH_PREFIX,
    WINNER_LADDER_ROUNDS,
    WINNER_MATCH_PREFIX,
)
from creaturecup.exceptions import InvalidParticipantsException
from creaturecup.models.bracket import Bracket, BracketKind, BracketMatch, Ladder
from creaturecup.models.identifiers import CompetitorId
from creaturecup.type_hints import CompetitorRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)

_PREFIXES = {Ladder.WINNER: WINNER_MATCH_PREFIX, Ladder.LOSER: LOSER_MATCH_PREFIX}


class DoubleEliminationBracketEngine(BracketEngine):
    """Builds and advances 16-entrant double-elimination brackets."""

    kind = BracketKind.DOUBLE_ELIMINATION

    def create_bracket(self, participants: Sequence[CompetitorRef]) -> Bracket:
        """Seed winner round 1 as 1 vs 16, 2 vs 15, ... 8 vs 9.

        Args:
            participants: Exactly 16 competitors, best seed first

        Raises:
            InvalidParticipantsException: If there are not exactly 16 distinct
                competitors
        """
        seeds = coerce_seeds(participants)
        if len(seeds) != DOUBLE_ELIMINATION_SIZE:
            raise InvalidParticipantsException(
                f"Double elimination needs exactly {DOUBLE_ELIMINATION_SIZE} "
                f"participants, got {len(seeds)}"
            )

        matches = {}
        first_round = []
        for i in range(DOUBLE_ELIMINATION_SIZE // 2):
            mid = match_id(WINNER_MATCH_PREFIX, 1, i + 1)
            matches[mid] = BracketMatch(
                id=mid,
                ladder=Ladder.WINNER,
                round_number=1,
                participant1=seeds[i],
                participant2=seeds[DOUBLE_ELIMINATION_SIZE - 1 - i],
            )
            first_round.append(mid)
        matches[GRAND_FINAL_ID] = BracketMatch(
            id=GRAND_FINAL_ID, ladder=Ladder.GRAND_FINAL, round_number=1
        )

        logger.info(f"Created double-elimination bracket, top seed {seeds[0]}")
        return Bracket(
            kind=self.kind,
            matches=matches,
            winner_rounds=(tuple(first_round),) + ((),) * (WINNER_LADDER_ROUNDS - 1),
            loser_rounds=((),) * LOSER_LADDER_ROUNDS,
            grand_final_id=GRAND_FINAL_ID,
        )

    def _advance(
        self, bracket: Bracket, match: BracketMatch, winner: CompetitorId
    ) -> Bracket:
        loser = match.loser
        round_number = match.round_number

        if match.ladder is Ladder.WINNER:
            if round_number < WINNER_LADDER_ROUNDS:
                bracket = self._place(bracket, Ladder.WINNER, round_number + 1, winner)
            else:
                bracket = self._place_in_grand_final(bracket, 1, winner)
            return self._place(bracket, Ladder.LOSER, round_number, loser)

        if match.ladder is Ladder.LOSER:
            logger.debug(f"{loser} eliminated in loser round {round_number}")
            if round_number < LOSER_LADDER_ROUNDS:
                return self._place(bracket, Ladder.LOSER, round_number + 1, winner)
            return self._place_in_grand_final(bracket, 2, winner)

        logger.info(f"Playoff champion: {winner}")
        return bracket

    def _place(
        self,
        bracket: Bracket,
        ladder: Ladder,
        round_number: int,
        competitor: CompetitorId,
    ) -> Bracket:
        """Put ``competitor`` in the first open slot of a round, or a new match."""
        for existing in bracket.round_matches(ladder, round_number):
            if existing.has_open_slot and not existing.is_decided:
                return bracket.replace_match(existing.with_participant(competitor))

        sequence = len(bracket.round_matches(ladder, round_number)) + 1
        new_match = BracketMatch(
            id=match_id(_PREFIXES[ladder], round_number, sequence),
            ladder=ladder,
            round_number=round_number,
            participant1=competitor,
        )
        return bracket.add_match(new_match)

    def _place_in_grand_final(
        self, bracket: Bracket, slot: int, competitor: CompetitorId
    ) -> Bracket:
        grand_final = bracket.get_match(bracket.grand_final_id)
        return bracket.replace_match(grand_final.with_slot(slot, competitor))
