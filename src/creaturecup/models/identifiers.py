"""Identifier value objects for competitors and tournaments."""

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

import re
import secrets
import time
from dataclasses import dataclass
from typing import Union

from creaturecup.constants import (
    COMPETITOR_ID_MAX_LENGTH,
    COMPETITOR_ID_PATTERN,
    TOURNAMENT_ID_MAX_LENGTH,
    TOURNAMENT_ID_MIN_LENGTH,
    TOURNAMENT_ID_PATTERN,
    TOURNAMENT_ID_PREFIX,
)
from creaturecup.exceptions import InvalidIdentifierException

_COMPETITOR_RE = re.compile(COMPETITOR_ID_PATTERN)
_TOURNAMENT_RE = re.compile(TOURNAMENT_ID_PATTERN)


@dataclass(frozen=True, order=True)
class CompetitorId:
    """Normalized identifier of a creature taking part in a tournament.

    Input is stripped and lower-cased, so ``" Pikachu "`` and ``"pikachu"``
    name the same competitor. Equality, hashing and ordering all use the
    normalized value, which is also the canonical string form.

    Attributes
    ----------
    value : str
        The normalized identifier.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidIdentifierException(
                f"Competitor id must be a string, got {type(self.value).__name__}"
            )
        normalized = self.value.strip().lower()
        if not normalized:
            raise InvalidIdentifierException("Competitor id cannot be empty")
        if len(normalized) > COMPETITOR_ID_MAX_LENGTH:
            raise InvalidIdentifierException(
                f"Competitor id '{normalized}' is longer than "
                f"{COMPETITOR_ID_MAX_LENGTH} characters"
            )
        if not _COMPETITOR_RE.match(normalized):
            raise InvalidIdentifierException(
                f"Competitor id '{normalized}' may only contain letters, digits, "
                "hyphens and underscores"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, value: Union["CompetitorId", str]) -> "CompetitorId":
        """Coerce a string or an existing id into a CompetitorId."""
        if isinstance(value, CompetitorId):
            return value
        return cls(value)


@dataclass(frozen=True)
class TournamentId:
    """Identifier of a stored tournament.

    Attributes
    ----------
    value : str
        Between 3 and 100 characters of letters, digits, hyphens or underscores.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidIdentifierException(
                f"Tournament id must be a string, got {type(self.value).__name__}"
            )
        value = self.value.strip()
        if not TOURNAMENT_ID_MIN_LENGTH <= len(value) <= TOURNAMENT_ID_MAX_LENGTH:
            raise InvalidIdentifierException(
                f"Tournament id must be between {TOURNAMENT_ID_MIN_LENGTH} and "
                f"{TOURNAMENT_ID_MAX_LENGTH} characters"
            )
        if not _TOURNAMENT_RE.match(value):
            raise InvalidIdentifierException(
                f"Tournament id '{value}' contains invalid characters"
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "TournamentId":
        """Create a fresh id of the form ``tournament-<unix time>-<8 hex>``."""
        return cls(f"{TOURNAMENT_ID_PREFIX}-{int(time.time())}-{secrets.token_hex(4)}")

    @classmethod
    def of(cls, value: Union["TournamentId", str]) -> "TournamentId":
        """Coerce a string or an existing id into a TournamentId."""
        if isinstance(value, TournamentId):
            return value
        return cls(value)
