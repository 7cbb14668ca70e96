"""Command-line interface for simulated tournaments.

This module provides CLI functionality for running a whole Creature Cup
tournament, qualification and playoff, from the terminal.
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

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from creaturecup.constants import DEFAULT_FORMAT_KEY
from creaturecup.config import load_tournament_format
from creaturecup.controllers.tournament import TournamentManager
from creaturecup.exceptions import (
    CreatureCupException,
    InvalidConfigurationException,
    InvalidInputException,
)
from creaturecup.models.tournament import TournamentFormat
from creaturecup.persistence import (
    InMemoryTournamentRepository,
    SqliteTournamentRepository,
    TournamentRepository,
)
from creaturecup.simulation.runner import SimulationReport, TournamentSimulator
from creaturecup.simulation.strategies import (
    PrefersHigherStatStrategy,
    PrefersLowerLexicalStrategy,
    RandomStrategy,
    TournamentStrategy,
)
from creaturecup.utils import configure_logging, setup_logger

logger = setup_logger(__name__)

STRATEGIES = ("lexical", "stat", "random", "interactive")


def read_participants_file(path: Path) -> List[str]:
    """One competitor per line; blank lines and ``#`` comments are skipped."""
    names = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            names.append(line)
    return names


def read_stats_file(path: Path) -> dict:
    """Read a YAML mapping of competitor name to stat value."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidConfigurationException(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"{path}: stats file must map competitor names to numbers"
        )
    return data


def collect_participants(args: argparse.Namespace) -> List[str]:
    names = list(args.participants)
    if args.participants_file:
        names.extend(read_participants_file(Path(args.participants_file)))
    if args.generate:
        names.extend(f"creature-{i:03d}" for i in range(1, args.generate + 1))
    if not names:
        raise InvalidInputException(
            "No participants given; list them, use --participants-file or --generate"
        )
    return names


def build_strategy(args: argparse.Namespace) -> TournamentStrategy:
    if args.strategy == "lexical":
        return PrefersLowerLexicalStrategy()
    if args.strategy == "stat":
        if not args.stats:
            raise InvalidInputException("The 'stat' strategy needs --stats FILE")
        return PrefersHigherStatStrategy.from_mapping(read_stats_file(Path(args.stats)))
    if args.strategy == "interactive":
        from creaturecup.simulation.interactive import PromptStrategy

        return PromptStrategy(allow_draws=args.draw_rate > 0)
    return RandomStrategy(seed=args.seed, draw_rate=args.draw_rate)


def build_repository(args: argparse.Namespace) -> TournamentRepository:
    if args.database:
        return SqliteTournamentRepository(args.database)
    return InMemoryTournamentRepository()


def build_format(args: argparse.Namespace) -> TournamentFormat:
    if args.config:
        return load_tournament_format(args.config, args.format_key)
    return TournamentFormat()


def print_report(report: SimulationReport) -> None:
    print(f"\nTournament {report.tournament_id}")
    print(f"Swiss rounds played: {report.rounds_played} (byes: {report.byes})")
    print(f"\n{'#':>3}  {'Competitor':<30} {'Pts':>4} {'W':>3} {'L':>3} {'D':>3}")
    for rank, entry in enumerate(report.standings, start=1):
        print(
            f"{rank:>3}  {str(entry.participant):<30} {entry.score:>4} "
            f"{entry.wins:>3} {entry.losses:>3} {entry.draws:>3}"
        )
    if report.champion is not None:
        print(f"\nPlayoff matches: {report.bracket_matches}")
        print(f"Champion: {report.champion}")
    else:
        print("\nNo playoff was held.")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="creaturecup",
        description="Run a Creature Cup tournament: Swiss qualification and playoff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 20 generated creatures, seeded coin flips
  python -m creaturecup.simulation --generate 20 --seed 7

  # Named creatures, alphabetically first always wins
  python -m creaturecup.simulation pikachu eevee snorlax --strategy lexical

  # Higher base HP wins, format from a config file
  python -m creaturecup.simulation --participants-file pokemon.txt \\
      --strategy stat --stats hp.yaml --config creature-cup.yaml

  # Vote on every match yourself, keep the result in SQLite
  python -m creaturecup.simulation --generate 16 --strategy interactive \\
      --database cup.db
        """,
    )

    parser.add_argument("participants", nargs="*", help="Competitor ids")
    parser.add_argument(
        "--participants-file", help="File with one competitor id per line"
    )
    parser.add_argument(
        "--generate",
        type=int,
        default=0,
        metavar="N",
        help="Add N generated competitors (creature-001, ...)",
    )
    parser.add_argument(
        "--owner",
        default="simulator@localhost",
        help="E-mail recorded as tournament owner (default: simulator@localhost)",
    )

    # Format
    parser.add_argument("--config", help="YAML file with tournament setups")
    parser.add_argument(
        "--format-key",
        default=DEFAULT_FORMAT_KEY,
        help=f"Setup to use from --config (default: {DEFAULT_FORMAT_KEY})",
    )

    # Results
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="random",
        help="How match winners are chosen (default: random)",
    )
    parser.add_argument("--stats", help="YAML mapping of competitor to stat value")
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument(
        "--draw-rate",
        type=float,
        default=0.0,
        help="Share of qualification matches drawn, 0..1 (default: 0)",
    )

    # Storage and output
    parser.add_argument("--database", help="SQLite file to store the tournament in")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser


def run_simulation(args: argparse.Namespace) -> int:
    participants = collect_participants(args)
    strategy = build_strategy(args)
    repository = build_repository(args)
    try:
        manager = TournamentManager(repository, build_format(args))
        report = TournamentSimulator(manager, strategy).run(participants, args.owner)
    finally:
        if isinstance(repository, SqliteTournamentRepository):
            repository.close()
    print_report(report)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return run_simulation(args)
    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")
        return 130
    except CreatureCupException as e:
        logger.error(f"Simulation failed: {e}")
        return 2
    except Exception as e:
        logger.error("Simulation failed: %s", e, exc_info=True)
        return 1
