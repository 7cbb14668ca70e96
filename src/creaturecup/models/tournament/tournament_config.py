"""TournamentFormat data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from creaturecup.constants import (
    DEFAULT_PLAYOFF,
    DEFAULT_PLAYOFF_CUTOFF,
    DOUBLE_ELIMINATION_SIZE,
    FORMAT_SWISS,
    PLAYOFF_DOUBLE_ELIMINATION,
    PLAYOFF_FORMATS,
)
from creaturecup.exceptions import InvalidConfigurationException


def is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


@dataclass(frozen=True)
class TournamentFormat:
    """How a tournament is run.

    Attributes
    ----------
    format : str
        Qualification format. Only "swiss-tournament" is supported.
    playoff : str or None
        "single-elimination", "double-elimination", or None for a
        qualification-only tournament.
    playoff_cutoff : int
        Number of top qualifiers seeded into the playoff. A power of two,
        and exactly 16 for double elimination.
    """

    format: str = FORMAT_SWISS
    playoff: Optional[str] = DEFAULT_PLAYOFF
    playoff_cutoff: int = DEFAULT_PLAYOFF_CUTOFF

    def __post_init__(self):
        if self.format != FORMAT_SWISS:
            raise InvalidConfigurationException(
                f"Unsupported tournament format '{self.format}'"
            )
        if self.playoff is None:
            return
        if self.playoff not in PLAYOFF_FORMATS:
            raise InvalidConfigurationException(
                f"Unsupported playoff '{self.playoff}', "
                f"expected one of {', '.join(PLAYOFF_FORMATS)}"
            )
        if (
            isinstance(self.playoff_cutoff, bool)
            or not isinstance(self.playoff_cutoff, int)
            or self.playoff_cutoff < 2
            or not is_power_of_two(self.playoff_cutoff)
        ):
            raise InvalidConfigurationException(
                f"playoff-cutoff must be a power of two of at least 2, "
                f"got {self.playoff_cutoff!r}"
            )
        if (
            self.playoff == PLAYOFF_DOUBLE_ELIMINATION
            and self.playoff_cutoff != DOUBLE_ELIMINATION_SIZE
        ):
            raise InvalidConfigurationException(
                f"Double elimination needs exactly {DOUBLE_ELIMINATION_SIZE} "
                f"qualifiers, got {self.playoff_cutoff}"
            )

    @property
    def has_playoff(self) -> bool:
        return self.playoff is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize format to dictionary, using the YAML key names."""
        data: Dict[str, Any] = {"format": self.format}
        if self.playoff is not None:
            data["playoff"] = self.playoff
            data["playoff-cutoff"] = self.playoff_cutoff
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentFormat":
        """Deserialize format from dictionary, using the YAML key names."""
        playoff = data.get("playoff")
        return cls(
            format=data.get("format", FORMAT_SWISS),
            playoff=playoff,
            playoff_cutoff=data.get("playoff-cutoff", DEFAULT_PLAYOFF_CUTOFF),
        )
