from creaturecup.controllers.tournament.bracket_manager import BracketManager
from creaturecup.controllers.tournament.result_recorder import ResultRecorder
from creaturecup.controllers.tournament.round_manager import RoundManager
from creaturecup.controllers.tournament.tournament_manager import TournamentManager

__all__ = ["BracketManager", "ResultRecorder", "RoundManager", "TournamentManager"]
