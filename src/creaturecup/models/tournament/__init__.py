from creaturecup.models.tournament.match import Match
from creaturecup.models.tournament.match_result import MatchResult, Outcome
from creaturecup.models.tournament.pairing_history import PairingHistory
from creaturecup.models.tournament.participant import Participant, StandingsEntry
from creaturecup.models.tournament.tournament import Tournament
from creaturecup.models.tournament.tournament_config import TournamentFormat

__all__ = [
    "Match",
    "MatchResult",
    "Outcome",
    "PairingHistory",
    "Participant",
    "StandingsEntry",
    "Tournament",
    "TournamentFormat",
]
