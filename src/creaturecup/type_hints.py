"""Type hints used in Creature Cup."""

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

from typing import Dict, FrozenSet, List, Set, Tuple, Union

from creaturecup.models.identifiers import CompetitorId, TournamentId

# Anything accepted where a competitor is expected
CompetitorRef = Union[CompetitorId, str]
TournamentRef = Union[TournamentId, str]

# One pairing: two competitors, or a single one receiving the bye
Pairing = Tuple[CompetitorId, ...]
# All pairings for one round
RoundPairings = List[Pairing]
# Order-free key of a played pairing
Matchup = FrozenSet[CompetitorId]
Matchups = Set[Matchup]
# Competitor id -> score
Standings = Dict[CompetitorId, int]
# Ordered standings entry: (competitor, score)
RankedEntry = Tuple[CompetitorId, int]
