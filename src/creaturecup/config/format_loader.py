"""Load tournament formats from YAML configuration files.

A configuration file maps setup names to formats::

    creature-cup:
      format: swiss-tournament
      playoff: double-elimination
      playoff-cutoff: 16
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

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from creaturecup.constants import DEFAULT_FORMAT_KEY
from creaturecup.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from creaturecup.models.tournament import TournamentFormat
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingConfigurationException(
            f"Cannot read tournament config {path}: {exc}"
        ) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigurationException(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise InvalidConfigurationException(
            f"{path}: top-level document must be a mapping"
        )
    return data


def parse_tournament_format(config: Mapping[str, Any]) -> TournamentFormat:
    """Validate one setup mapping and build its TournamentFormat.

    Raises:
        MissingConfigurationException: If a playoff is set without a cutoff
        InvalidConfigurationException: If a value is unsupported
    """
    data: Dict[str, Any] = dict(config)
    if data.get("playoff") is not None and "playoff-cutoff" not in data:
        raise MissingConfigurationException(
            "playoff-cutoff is required when a playoff is defined"
        )
    if data.get("playoff-reset"):
        logger.warning("Grand final reset is not supported; 'playoff-reset' ignored")
    cutoff = data.get("playoff-cutoff")
    if cutoff is not None and not isinstance(cutoff, int):
        try:
            data["playoff-cutoff"] = int(cutoff)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationException(
                f"playoff-cutoff must be an integer, got {cutoff!r}"
            ) from exc
    return TournamentFormat.from_dict(data)


def load_tournament_format(
    path: Union[str, Path], key: str = DEFAULT_FORMAT_KEY
) -> TournamentFormat:
    """Load the tournament setup named ``key`` from a YAML file.

    Args:
        path: YAML configuration file
        key: Top-level key of the setup

    Returns:
        The validated TournamentFormat

    Raises:
        MissingConfigurationException: If the file or the key is missing
        InvalidConfigurationException: If the content is invalid
    """
    path = Path(path)
    data = _read_yaml(path)
    config = data.get(key)
    if not isinstance(config, Mapping):
        raise MissingConfigurationException(
            f"Tournament config '{key}' not found in {path}"
        )
    tournament_format = parse_tournament_format(config)
    logger.debug(f"Loaded tournament format '{key}' from {path}: {tournament_format}")
    return tournament_format
