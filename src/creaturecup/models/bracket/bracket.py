"""Immutable playoff bracket."""

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

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from creaturecup.exceptions import (
    BracketMatchNotFoundException,
    CreatureCupException,
    StorageException,
)
from creaturecup.models.bracket.bracket_match import BracketMatch, Ladder
from creaturecup.models.identifiers import CompetitorId

RoundIds = Tuple[Tuple[str, ...], ...]


class BracketKind(Enum):
    DOUBLE_ELIMINATION = "double-elimination"
    SINGLE_ELIMINATION = "single-elimination"


@dataclass(frozen=True)
class Bracket:
    """A playoff bracket as an id -> match map plus per-round id lists.

    Rounds hold match ids in creation order; the matches themselves live
    only in ``matches``, so replacing a match never touches the round lists.
    Every engine operation returns a new Bracket.

    Attributes
    ----------
    kind : BracketKind
        Double or single elimination.
    matches : mapping of str to BracketMatch
        Read-only view of every match by id.
    winner_rounds : tuple of tuple of str
        Match ids of winner ladder rounds 1..n.
    loser_rounds : tuple of tuple of str
        Match ids of loser ladder rounds 1..n; empty for single elimination.
    grand_final_id : str or None
        Id of the grand final; None for single elimination.
    version : int
        Storage version the bracket was loaded at.
    """

    kind: BracketKind
    matches: Mapping[str, BracketMatch]
    winner_rounds: RoundIds
    loser_rounds: RoundIds = ()
    grand_final_id: Optional[str] = None
    version: int = 0

    def __post_init__(self):
        if not isinstance(self.matches, MappingProxyType):
            object.__setattr__(self, "matches", MappingProxyType(dict(self.matches)))

    # ========== Lookup ==========

    def get_match(self, match_id: str) -> BracketMatch:
        """Find a match by id.

        Raises:
            BracketMatchNotFoundException: If no match has this id
        """
        try:
            return self.matches[match_id]
        except KeyError:
            raise BracketMatchNotFoundException(
                f"No bracket match with id '{match_id}'"
            ) from None

    def rounds(self, ladder: Ladder) -> RoundIds:
        if ladder is Ladder.WINNER:
            return self.winner_rounds
        if ladder is Ladder.LOSER:
            return self.loser_rounds
        return ((self.grand_final_id,),) if self.grand_final_id else ()

    def round_matches(self, ladder: Ladder, round_number: int) -> List[BracketMatch]:
        """Matches of one ladder round (1-based) in creation order."""
        rounds = self.rounds(ladder)
        if not 1 <= round_number <= len(rounds):
            return []
        return [self.matches[match_id] for match_id in rounds[round_number - 1]]

    def iter_matches(self) -> Iterator[BracketMatch]:
        """Every match in scan order: winner ladder, loser ladder, grand final."""
        for ladder in (Ladder.WINNER, Ladder.LOSER, Ladder.GRAND_FINAL):
            for round_ids in self.rounds(ladder):
                for match_id in round_ids:
                    yield self.matches[match_id]

    @property
    def final_match(self) -> Optional[BracketMatch]:
        """The match whose winner is the champion."""
        if self.grand_final_id is not None:
            return self.matches.get(self.grand_final_id)
        if self.winner_rounds and len(self.winner_rounds[-1]) == 1:
            return self.matches[self.winner_rounds[-1][0]]
        return None

    @property
    def is_complete(self) -> bool:
        final = self.final_match
        return final is not None and final.winner is not None

    @property
    def champion(self) -> Optional[CompetitorId]:
        final = self.final_match
        return final.winner if final is not None else None

    # ========== Updates ==========

    def replace_match(self, match: BracketMatch) -> "Bracket":
        """Return a bracket with an existing match swapped for ``match``."""
        self.get_match(match.id)
        matches = dict(self.matches)
        matches[match.id] = match
        return replace(self, matches=matches)

    def add_match(self, match: BracketMatch) -> "Bracket":
        """Return a bracket with ``match`` appended to its ladder round."""
        matches = dict(self.matches)
        matches[match.id] = match
        rounds = [list(r) for r in self.rounds(match.ladder)]
        while len(rounds) < match.round_number:
            rounds.append([])
        rounds[match.round_number - 1].append(match.id)
        frozen = tuple(tuple(r) for r in rounds)
        if match.ladder is Ladder.WINNER:
            return replace(self, matches=matches, winner_rounds=frozen)
        if match.ladder is Ladder.LOSER:
            return replace(self, matches=matches, loser_rounds=frozen)
        return replace(self, matches=matches, grand_final_id=match.id)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bracket to its storage structure."""

        def ladder_dict(rounds: RoundIds) -> Dict[str, List[Dict[str, Any]]]:
            return {
                f"round{number}": [self.matches[mid].to_dict() for mid in round_ids]
                for number, round_ids in enumerate(rounds, start=1)
            }

        return {
            "kind": self.kind.value,
            "version": self.version,
            "winner_bracket": ladder_dict(self.winner_rounds),
            "loser_bracket": ladder_dict(self.loser_rounds),
            "grand_finals": (
                [self.matches[self.grand_final_id].to_dict()]
                if self.grand_final_id
                else []
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bracket":
        """Rebuild a bracket from its storage structure.

        Raises:
            StorageException: If the structure is not a readable bracket
        """
        try:
            matches: Dict[str, BracketMatch] = {}

            def read_ladder(section: Dict[str, Any], ladder: Ladder) -> RoundIds:
                rounds = []
                for number in range(1, len(section) + 1):
                    round_ids = []
                    for raw in section[f"round{number}"]:
                        match = BracketMatch.from_dict(raw, ladder)
                        matches[match.id] = match
                        round_ids.append(match.id)
                    rounds.append(tuple(round_ids))
                return tuple(rounds)

            winner_rounds = read_ladder(data["winner_bracket"], Ladder.WINNER)
            loser_rounds = read_ladder(data.get("loser_bracket") or {}, Ladder.LOSER)
            grand_final_id = None
            for raw in data.get("grand_finals") or []:
                match = BracketMatch.from_dict(raw, Ladder.GRAND_FINAL)
                matches[match.id] = match
                grand_final_id = match.id
            return cls(
                kind=BracketKind(
                    data.get("kind", BracketKind.DOUBLE_ELIMINATION.value)
                ),
                matches=matches,
                winner_rounds=winner_rounds,
                loser_rounds=loser_rounds,
                grand_final_id=grand_final_id,
                version=int(data.get("version", 0)),
            )
        except (KeyError, TypeError, ValueError, CreatureCupException) as e:
            raise StorageException(f"Stored bracket data is unreadable: {e}") from e
