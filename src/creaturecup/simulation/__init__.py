from creaturecup.simulation.runner import SimulationReport, TournamentSimulator
from creaturecup.simulation.strategies import (
    PrefersHigherStatStrategy,
    PrefersLowerLexicalStrategy,
    RandomStrategy,
    TournamentStrategy,
)

__all__ = [
    "PrefersHigherStatStrategy",
    "PrefersLowerLexicalStrategy",
    "RandomStrategy",
    "SimulationReport",
    "TournamentSimulator",
    "TournamentStrategy",
]
