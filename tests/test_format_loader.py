import logging
from pathlib import Path

import pytest

from creaturecup.config import load_tournament_format, parse_tournament_format
from creaturecup.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from creaturecup.models.tournament import TournamentFormat

SHIPPED_CONFIG = Path(__file__).resolve().parent.parent / "creature-cup.yaml"


def _write(tmp_path, text):
    path = tmp_path / "formats.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_shipped_config_loads():
    assert load_tournament_format(SHIPPED_CONFIG) == TournamentFormat()
    knockout = load_tournament_format(SHIPPED_CONFIG, "quick-knockout")
    assert knockout.playoff == "single-elimination"
    assert knockout.playoff_cutoff == 8
    assert not load_tournament_format(SHIPPED_CONFIG, "swiss-only").has_playoff


def test_cutoff_given_as_string_is_coerced(tmp_path):
    path = _write(
        tmp_path,
        "cup:\n"
        "  format: swiss-tournament\n"
        "  playoff: single-elimination\n"
        "  playoff-cutoff: '4'\n",
    )
    assert load_tournament_format(path, "cup").playoff_cutoff == 4


def test_playoff_without_cutoff_is_missing_config():
    with pytest.raises(MissingConfigurationException):
        parse_tournament_format({"playoff": "double-elimination"})


@pytest.mark.parametrize(
    "config",
    [
        {"format": "round-robin"},
        {"playoff": "single-elimination", "playoff-cutoff": "many"},
        {"playoff": "single-elimination", "playoff-cutoff": 12},
        {"playoff": "double-elimination", "playoff-cutoff": 32},
    ],
)
def test_invalid_values(config):
    with pytest.raises(InvalidConfigurationException):
        parse_tournament_format(config)


def test_playoff_reset_is_ignored_with_warning(caplog):
    config = {
        "playoff": "double-elimination",
        "playoff-cutoff": 16,
        "playoff-reset": True,
    }
    with caplog.at_level(logging.WARNING, logger="creaturecup"):
        tournament_format = parse_tournament_format(config)
    assert tournament_format == TournamentFormat()
    assert "playoff-reset" in caplog.text


def test_missing_file_and_key(tmp_path):
    with pytest.raises(MissingConfigurationException):
        load_tournament_format(tmp_path / "absent.yaml")
    path = _write(tmp_path, "other:\n  format: swiss-tournament\n")
    with pytest.raises(MissingConfigurationException):
        load_tournament_format(path, "creature-cup")


@pytest.mark.parametrize("text", ["just a string\n", "cup: [unclosed\n"])
def test_unreadable_documents(tmp_path, text):
    with pytest.raises(InvalidConfigurationException):
        load_tournament_format(_write(tmp_path, text), "cup")
