"""SQLite storage for tournaments.

One connection per repository, backed by a single SQLite file (or
``:memory:`` for tests). Brackets are stored whole, as JSON, on the
tournament row.
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

import json
import sqlite3
from typing import List, Optional

from dateutil.parser import isoparse

from creaturecup.exceptions import CreatureCupException, StorageException
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament import (
    Match,
    Participant,
    Tournament,
    TournamentFormat,
)
from creaturecup.persistence.repository import (
    BracketData,
    TournamentRepository,
    check_version,
)
from creaturecup.type_hints import TournamentRef
from creaturecup.utils import setup_logger

logger = setup_logger(__name__)


class SqliteTournamentRepository(TournamentRepository):
    """Tournament repository on top of :mod:`sqlite3`."""

    def __init__(self, path: str = "creaturecup.db"):
        self._conn = sqlite3.connect(path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS tournaments (
                id TEXT PRIMARY KEY,
                owner_email TEXT NOT NULL,
                current_round INTEGER NOT NULL DEFAULT 0,
                total_rounds INTEGER NOT NULL,
                format TEXT NOT NULL,
                created_at TEXT NOT NULL,
                version INTEGER NOT NULL DEFAULT 1,
                bracket_data TEXT
            );

            CREATE TABLE IF NOT EXISTS tournament_participants (
                tournament_id TEXT NOT NULL
                    REFERENCES tournaments(id) ON DELETE CASCADE,
                competitor_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                wins INTEGER NOT NULL DEFAULT 0,
                losses INTEGER NOT NULL DEFAULT 0,
                draws INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (tournament_id, competitor_id)
            );

            CREATE TABLE IF NOT EXISTS matches (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                tournament_id TEXT NOT NULL
                    REFERENCES tournaments(id) ON DELETE CASCADE,
                round INTEGER NOT NULL,
                participant1 TEXT NOT NULL,
                participant2 TEXT,
                outcome TEXT NOT NULL,
                winner TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_tournaments_owner
                ON tournaments(owner_email);
            CREATE INDEX IF NOT EXISTS idx_matches_tournament
                ON matches(tournament_id, round);
            """
        )

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Tournaments
    # ------------------------------------------------------------------

    def save(self, tournament: Tournament) -> None:
        key = str(tournament.id)
        row = self._conn.execute(
            "SELECT version FROM tournaments WHERE id = ?", (key,)
        ).fetchone()
        check_version(
            "Tournament",
            tournament.id,
            tournament.version,
            row["version"] if row else None,
        )
        new_version = tournament.version + 1
        with self._conn:
            if row is None:
                self._conn.execute(
                    "INSERT INTO tournaments (id, owner_email, current_round, "
                    "total_rounds, format, created_at, version) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        key,
                        tournament.owner,
                        tournament.current_round,
                        tournament.total_rounds,
                        json.dumps(tournament.format.to_dict()),
                        tournament.created_at.isoformat(),
                        new_version,
                    ),
                )
            else:
                self._conn.execute(
                    "UPDATE tournaments SET owner_email = ?, current_round = ?, "
                    "total_rounds = ?, format = ?, version = ? WHERE id = ?",
                    (
                        tournament.owner,
                        tournament.current_round,
                        tournament.total_rounds,
                        json.dumps(tournament.format.to_dict()),
                        new_version,
                        key,
                    ),
                )
            self._conn.executemany(
                "INSERT INTO tournament_participants "
                "(tournament_id, competitor_id, position, wins, losses, draws) "
                "VALUES (?, ?, ?, ?, ?, ?) "
                "ON CONFLICT (tournament_id, competitor_id) DO UPDATE SET "
                "position = excluded.position, wins = excluded.wins, "
                "losses = excluded.losses, draws = excluded.draws",
                [
                    (key, str(p.competitor_id), position, p.wins, p.losses, p.draws)
                    for position, p in enumerate(tournament.participants)
                ],
            )
        tournament.version = new_version

    def find_by_id(self, tournament_id: TournamentRef) -> Optional[Tournament]:
        row = self._conn.execute(
            "SELECT * FROM tournaments WHERE id = ?",
            (str(TournamentId.of(tournament_id)),),
        ).fetchone()
        return self._hydrate(row) if row else None

    def find_by_user_email(self, email: str) -> List[Tournament]:
        rows = self._conn.execute(
            "SELECT * FROM tournaments WHERE owner_email = ? ORDER BY created_at",
            (email,),
        ).fetchall()
        return [self._hydrate(row) for row in rows]

    def find_all(self) -> List[Tournament]:
        rows = self._conn.execute(
            "SELECT * FROM tournaments ORDER BY created_at"
        ).fetchall()
        return [self._hydrate(row) for row in rows]

    def exists(self, tournament_id: TournamentRef) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM tournaments WHERE id = ?",
            (str(TournamentId.of(tournament_id)),),
        ).fetchone()
        return row is not None

    def delete(self, tournament_id: TournamentRef) -> None:
        with self._conn:
            self._conn.execute(
                "DELETE FROM tournaments WHERE id = ?",
                (str(TournamentId.of(tournament_id)),),
            )

    def _hydrate(self, row: sqlite3.Row) -> Tournament:
        try:
            participants = [
                Participant(
                    competitor_id=CompetitorId(p["competitor_id"]),
                    wins=p["wins"],
                    losses=p["losses"],
                    draws=p["draws"],
                )
                for p in self._conn.execute(
                    "SELECT * FROM tournament_participants "
                    "WHERE tournament_id = ? ORDER BY position",
                    (row["id"],),
                )
            ]
            return Tournament(
                id=TournamentId(row["id"]),
                owner=row["owner_email"],
                participants=participants,
                total_rounds=row["total_rounds"],
                current_round=row["current_round"],
                format=TournamentFormat.from_dict(json.loads(row["format"])),
                created_at=isoparse(row["created_at"]),
                version=row["version"],
            )
        except (ValueError, CreatureCupException) as e:
            raise StorageException(
                f"Stored tournament {row['id']} is unreadable: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    def save_match(self, tournament_id: TournamentRef, match: Match) -> None:
        data = match.to_dict()
        with self._conn:
            self._conn.execute(
                "INSERT INTO matches "
                "(tournament_id, round, participant1, participant2, outcome, winner) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    str(TournamentId.of(tournament_id)),
                    data["round"],
                    data["participant1"],
                    data["participant2"],
                    data["outcome"],
                    data["winner"],
                ),
            )

    def load_matches(self, tournament_id: TournamentRef) -> List[Match]:
        rows = self._conn.execute(
            "SELECT round, participant1, participant2, outcome, winner "
            "FROM matches WHERE tournament_id = ? ORDER BY id",
            (str(TournamentId.of(tournament_id)),),
        ).fetchall()
        try:
            return [Match.from_dict(dict(row)) for row in rows]
        except (KeyError, ValueError, CreatureCupException) as e:
            raise StorageException(f"Stored matches are unreadable: {e}") from e

    # ------------------------------------------------------------------
    # Bracket
    # ------------------------------------------------------------------

    def load_bracket_data(self, tournament_id: TournamentRef) -> Optional[BracketData]:
        row = self._conn.execute(
            "SELECT bracket_data FROM tournaments WHERE id = ?",
            (str(TournamentId.of(tournament_id)),),
        ).fetchone()
        if row is None or row["bracket_data"] is None:
            return None
        try:
            return json.loads(row["bracket_data"])
        except ValueError as e:
            raise StorageException(f"Stored bracket is not valid JSON: {e}") from e

    def save_bracket_data(self, tournament_id: TournamentRef, data: BracketData) -> int:
        tournament_id = TournamentId.of(tournament_id)
        stored = self.load_bracket_data(tournament_id)
        check_version(
            "Bracket",
            tournament_id,
            data.get("version", 0),
            stored.get("version", 0) if stored else None,
        )
        new_version = data.get("version", 0) + 1
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE tournaments SET bracket_data = ? WHERE id = ?",
                (json.dumps(dict(data, version=new_version)), str(tournament_id)),
            )
        if cursor.rowcount == 0:
            raise StorageException(
                f"Cannot store a bracket for unknown tournament {tournament_id}"
            )
        logger.debug(f"Stored bracket of {tournament_id} at version {new_version}")
        return new_version
