"""Tournament data class."""

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

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

from creaturecup.exceptions import (
    InvalidParticipantsException,
    TournamentCompleteException,
    TournamentStateException,
)
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament.participant import Participant
from creaturecup.models.tournament.tournament_config import TournamentFormat
from creaturecup.type_hints import CompetitorRef


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Tournament:
    """A Swiss qualification followed by an optional playoff.

    Attributes
    ----------
    id : TournamentId
        Stored identifier.
    owner : str
        E-mail address of the user who created the tournament.
    participants : list of Participant
        Participants in registration order; standings are reported in it.
    total_rounds : int
        Number of Swiss rounds, fixed at creation.
    current_round : int
        Rounds already completed, from 0 up to ``total_rounds``.
    format : TournamentFormat
        Playoff settings applied once qualification ends.
    created_at : datetime
        Creation time, timezone aware.
    version : int
        Bumped by the repository on every save; used to reject stale writes.
    """

    id: TournamentId
    owner: str
    participants: List[Participant]
    total_rounds: int
    current_round: int = 0
    format: TournamentFormat = field(default_factory=TournamentFormat)
    created_at: datetime = field(default_factory=utc_now)
    version: int = 0

    def __post_init__(self):
        self.id = TournamentId.of(self.id)
        if not self.participants:
            raise InvalidParticipantsException(
                "A tournament needs at least one participant"
            )
        if not 0 <= self.current_round <= self.total_rounds:
            raise TournamentStateException(
                f"Round {self.current_round} is outside 0..{self.total_rounds}"
            )

    @property
    def is_complete(self) -> bool:
        return self.current_round >= self.total_rounds

    @property
    def participant_ids(self) -> List[CompetitorId]:
        return [p.competitor_id for p in self.participants]

    @property
    def participants_by_id(self) -> Dict[CompetitorId, Participant]:
        return {p.competitor_id: p for p in self.participants}

    def get_participant(self, competitor: CompetitorRef) -> Optional[Participant]:
        competitor_id = CompetitorId.of(competitor)
        for participant in self.participants:
            if participant.competitor_id == competitor_id:
                return participant
        return None

    def has_participant(self, competitor: CompetitorRef) -> bool:
        return self.get_participant(competitor) is not None

    def advance_round(self) -> None:
        """Move to the next round.

        Raises:
            TournamentCompleteException: If every round has been played
        """
        if self.is_complete:
            raise TournamentCompleteException(
                f"Tournament {self.id} already finished its {self.total_rounds} rounds"
            )
        self.current_round += 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": str(self.id),
            "owner": self.owner,
            "participants": [p.to_dict() for p in self.participants],
            "total_rounds": self.total_rounds,
            "current_round": self.current_round,
            "format": self.format.to_dict(),
            "created_at": self.created_at.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=TournamentId(data["id"]),
            owner=data["owner"],
            participants=[Participant.from_dict(p) for p in data["participants"]],
            total_rounds=data["total_rounds"],
            current_round=data.get("current_round", 0),
            format=(
                TournamentFormat.from_dict(data["format"])
                if "format" in data
                else TournamentFormat()
            ),
            created_at=isoparse(created_at) if created_at else utc_now(),
            version=data.get("version", 0),
        )
