"""Seeding helpers: from Swiss standings to a seeded playoff bracket."""

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

from typing import Iterable, List, Mapping, Union

from creaturecup.bracket import create_engine
from creaturecup.constants import DOUBLE_ELIMINATION_SIZE, PLAYOFF_DOUBLE_ELIMINATION
from creaturecup.exceptions import InvalidParticipantsException
from creaturecup.models.bracket import Bracket, BracketKind
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import Participant
from creaturecup.type_hints import CompetitorRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


def seed_top_n(
    participants: Iterable[Participant],
    standings: Mapping[CompetitorRef, int],
    top_n: int,
) -> List[Participant]:
    """Pick the best ``top_n`` entries of ``standings`` as seeds.

    Standings are ordered by score descending, then competitor id ascending.
    A seed missing from ``participants`` gets a fresh placeholder
    Participant with an empty record.

    Args:
        participants: Known participants
        standings: Score per competitor
        top_n: Number of seeds wanted

    Returns:
        Up to ``top_n`` participants, best seed first
    """
    if top_n < 1:
        raise InvalidParticipantsException(f"Cannot seed a top {top_n}")
    pool = {p.competitor_id: p for p in participants}
    ranked = sorted(
        ((CompetitorId.of(k), v) for k, v in standings.items()),
        key=lambda entry: (-entry[1], entry[0].value),
    )
    seeds = []
    for competitor, _ in ranked[:top_n]:
        participant = pool.get(competitor)
        if participant is None:
            logger.debug(f"Creating placeholder participant for seed {competitor}")
            participant = Participant(competitor)
        seeds.append(participant)
    return seeds


def create_playoff_bracket(
    participants: Iterable[Participant],
    standings: Mapping[CompetitorRef, int],
    top_n: int = DOUBLE_ELIMINATION_SIZE,
    playoff: Union[BracketKind, str] = PLAYOFF_DOUBLE_ELIMINATION,
) -> Bracket:
    """Seed the top ``top_n`` and build a single- or double-elimination bracket.

    Raises:
        InvalidParticipantsException: If standings hold fewer than ``top_n``
            entries, or the field size does not suit the playoff
    """
    seeds = seed_top_n(participants, standings, top_n)
    if len(seeds) < top_n:
        raise InvalidParticipantsException(
            f"Need {top_n} seeds for the playoff, standings only hold {len(seeds)}"
        )
    engine = create_engine(playoff)
    return engine.create_bracket([seed.competitor_id for seed in seeds])
