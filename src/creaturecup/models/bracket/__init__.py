from creaturecup.models.bracket.bracket import Bracket, BracketKind
from creaturecup.models.bracket.bracket_match import BracketMatch, Ladder

__all__ = ["Bracket", "BracketKind", "BracketMatch", "Ladder"]
