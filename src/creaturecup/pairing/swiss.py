"""Swiss System Pairing Implementation.

Greedy score-group pairing: competitors are taken in standings order and each
one is matched with the closest-scoring competitor it has not met yet.
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

import math
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from creaturecup.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    MAX_SWISS_ROUNDS,
    MIN_SWISS_ROUNDS,
    WIN_SCORE,
)
from creaturecup.exceptions import InvalidInputException, InvalidParticipantsException
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import Match, Outcome, PairingHistory
from creaturecup.type_hints import (
    CompetitorRef,
    RankedEntry,
    RoundPairings,
    Standings,
)
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)

PreviousMatchups = Union[PairingHistory, Iterable[Iterable[CompetitorRef]], None]

_OUTCOME_SCORES = {
    Outcome.WIN: WIN_SCORE,
    Outcome.LOSS: LOSS_SCORE,
    Outcome.DRAW: DRAW_SCORE,
}


def _coerce_participants(participants: Sequence[CompetitorRef]) -> List[CompetitorId]:
    pool = [CompetitorId.of(p) for p in participants or ()]
    if not pool:
        raise InvalidParticipantsException("Cannot pair an empty participant list")
    if len(set(pool)) != len(pool):
        raise InvalidParticipantsException(
            "Participant list contains the same competitor more than once"
        )
    return pool


def _coerce_standings(standings: Optional[Mapping[CompetitorRef, int]]) -> Standings:
    return {CompetitorId.of(k): v for k, v in (standings or {}).items()}


def _closest_opponent(
    current: CompetitorId,
    candidates: Sequence[CompetitorId],
    scores: Standings,
    history: Optional[PairingHistory] = None,
) -> Optional[CompetitorId]:
    """Pick the candidate with the smallest score difference.

    Candidates ``current`` has already met are skipped when a history is
    given. Ties go to the earliest candidate in ``candidates``.
    """
    best = None
    best_diff = None
    current_score = scores.get(current, 0)
    for candidate in candidates:
        if history is not None and history.have_played(current, candidate):
            continue
        diff = abs(current_score - scores.get(candidate, 0))
        if best_diff is None or diff < best_diff:
            best = candidate
            best_diff = diff
    return best


def generate_pairings(
    participants: Sequence[CompetitorRef],
    previous_matchups: PreviousMatchups = None,
    standings: Optional[Mapping[CompetitorRef, int]] = None,
) -> RoundPairings:
    """Generate the pairings of one Swiss round.

    Args:
        participants: Competitors to pair
        previous_matchups: Pairs that already met, as a PairingHistory or any
            iterable of two-member pairs; order inside a pair is irrelevant
        standings: Current score per competitor. When given, competitors are
            paired in standings order (score descending, then id ascending);
            otherwise in the order given

    Returns:
        List of pairings, each a tuple of two competitors or a single
        competitor receiving the bye. At most one bye is produced.

    Raises:
        InvalidParticipantsException: If ``participants`` is empty or repeats
            a competitor
    """
    pool = _coerce_participants(participants)
    if len(pool) == 1:
        return [(pool[0],)]

    scores = _coerce_standings(standings)
    if standings:
        pool = sorted(pool, key=lambda cid: (-scores.get(cid, 0), cid.value))

    if isinstance(previous_matchups, PairingHistory):
        history = previous_matchups
    else:
        history = PairingHistory.from_pairs(previous_matchups)

    pairings: RoundPairings = []
    paired = set()
    bye_given = False

    for index, current in enumerate(pool):
        if current in paired:
            continue
        candidates = [c for c in pool[index + 1 :] if c not in paired]
        opponent = _closest_opponent(current, candidates, scores, history)

        if opponent is None:
            # Everyone left has met current: bye only while the count is odd
            if not candidates or (len(candidates) % 2 == 0 and not bye_given):
                pairings.append((current,))
                paired.add(current)
                bye_given = True
                continue
            opponent = _closest_opponent(current, candidates, scores)
            logger.debug(f"Rematch forced: {current} vs {opponent}")

        pairings.append((current, opponent))
        paired.update((current, opponent))

    return pairings


def calculate_total_rounds(participant_count: int) -> int:
    """Number of Swiss rounds for a field of ``participant_count``.

    ``ceil(log2(n))`` clamped to 3..8; a single participant needs no rounds.

    Raises:
        InvalidInputException: If the count is not positive
    """
    if isinstance(participant_count, bool) or not isinstance(participant_count, int):
        raise InvalidInputException(
            f"Participant count must be an integer, got {participant_count!r}"
        )
    if participant_count <= 0:
        raise InvalidInputException(
            f"Participant count must be positive, got {participant_count}"
        )
    if participant_count == 1:
        return 0
    rounds = math.ceil(math.log2(participant_count))
    return max(MIN_SWISS_ROUNDS, min(MAX_SWISS_ROUNDS, rounds))


def sort_standings_by_tie_breaker(
    standings: Mapping[CompetitorRef, int], participants: Iterable[CompetitorRef]
) -> List[RankedEntry]:
    """Order standings by score descending, then competitor id ascending.

    Only competitors present in both ``standings`` and ``participants`` are
    returned. Ids are unique, so the order is total.
    """
    members = {CompetitorId.of(p) for p in participants}
    entries = [
        (competitor, score)
        for competitor, score in _coerce_standings(standings).items()
        if competitor in members
    ]
    return sorted(entries, key=lambda entry: (-entry[1], entry[0].value))


def get_score_for_result(outcome: Union[Outcome, str]) -> int:
    """Points for an outcome: win 3, loss 0, draw 1.

    Raises:
        InvalidResultException: If the outcome is unknown
    """
    return _OUTCOME_SCORES[Outcome.parse(outcome)]


def calculate_standings(
    participants: Iterable[CompetitorRef],
    matches: Iterable[Match],
    before_round: Optional[int] = None,
) -> Standings:
    """Rebuild scores from match history.

    Args:
        participants: Competitors to report; each starts at 0
        matches: Stored qualification matches; unplayed ones are ignored
        before_round: When given, only matches from earlier rounds count

    Returns:
        Score per competitor
    """
    standings: Standings = {CompetitorId.of(p): 0 for p in participants}
    for match in matches:
        if match.result is None:
            continue
        if before_round is not None and match.round_number >= before_round:
            continue
        if match.result.is_draw:
            awarded = [
                (match.participant1, DRAW_SCORE),
                (match.participant2, DRAW_SCORE),
            ]
        else:
            awarded = [(match.result.winner, WIN_SCORE)]
        for competitor, points in awarded:
            if competitor in standings:
                standings[competitor] += points
    return standings
