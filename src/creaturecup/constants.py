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

# Match outcome scores
WIN_SCORE = 3
DRAW_SCORE = 1
LOSS_SCORE = 0

# Outcome strings (for storage and the CLI)
OUTCOME_WIN = "win"
OUTCOME_LOSS = "loss"
OUTCOME_DRAW = "draw"

# Swiss round count bounds
MIN_SWISS_ROUNDS = 3
MAX_SWISS_ROUNDS = 8

# Identifier rules
COMPETITOR_ID_PATTERN = r"^[a-z0-9_-]+$"
COMPETITOR_ID_MAX_LENGTH = 50
TOURNAMENT_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
TOURNAMENT_ID_MIN_LENGTH = 3
TOURNAMENT_ID_MAX_LENGTH = 100
TOURNAMENT_ID_PREFIX = "tournament"

# Playoff formats
FORMAT_SWISS = "swiss-tournament"
PLAYOFF_SINGLE_ELIMINATION = "single-elimination"
PLAYOFF_DOUBLE_ELIMINATION = "double-elimination"
PLAYOFF_FORMATS = (PLAYOFF_SINGLE_ELIMINATION, PLAYOFF_DOUBLE_ELIMINATION)

# Double elimination is defined for a fixed field
DOUBLE_ELIMINATION_SIZE = 16
WINNER_LADDER_ROUNDS = 4
LOSER_LADDER_ROUNDS = 5

# Bracket match id prefixes
WINNER_MATCH_PREFIX = "w"
LOSER_MATCH_PREFIX = "l"
GRAND_FINAL_ID = "gf_1"

# Default tournament format (see creature-cup.yaml)
DEFAULT_PLAYOFF = PLAYOFF_DOUBLE_ELIMINATION
DEFAULT_PLAYOFF_CUTOFF = DOUBLE_ELIMINATION_SIZE
DEFAULT_FORMAT_KEY = "creature-cup"
