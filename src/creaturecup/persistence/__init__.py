from creaturecup.persistence.memory import InMemoryTournamentRepository
from creaturecup.persistence.repository import BracketData, TournamentRepository
from creaturecup.persistence.sqlite import SqliteTournamentRepository

__all__ = [
    "BracketData",
    "InMemoryTournamentRepository",
    "SqliteTournamentRepository",
    "TournamentRepository",
]
