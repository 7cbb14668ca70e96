"""Playoff bracket engines."""

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

from typing import Union

from creaturecup.bracket.base import BracketEngine
from creaturecup.bracket.double_elimination import DoubleEliminationBracketEngine
from creaturecup.bracket.single_elimination import (
    SingleEliminationBracketEngine,
    standard_seed_order,
)
from creaturecup.exceptions import InvalidConfigurationException
from creaturecup.models.bracket import BracketKind

_ENGINES = {
    BracketKind.DOUBLE_ELIMINATION: DoubleEliminationBracketEngine,
    BracketKind.SINGLE_ELIMINATION: SingleEliminationBracketEngine,
}


def create_engine(kind: Union[BracketKind, str]) -> BracketEngine:
    """Return the engine for a bracket kind or playoff name."""
    try:
        return _ENGINES[BracketKind(kind)]()
    except ValueError:
        raise InvalidConfigurationException(f"Unknown playoff kind '{kind}'") from None


__all__ = [
    "BracketEngine",
    "DoubleEliminationBracketEngine",
    "SingleEliminationBracketEngine",
    "create_engine",
    "standard_seed_order",
]
