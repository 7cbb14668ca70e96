from creaturecup.pairing.swiss import (
    calculate_standings,
    calculate_total_rounds,
    generate_pairings,
    get_score_for_result,
    sort_standings_by_tie_breaker,
)

__all__ = [
    "calculate_standings",
    "calculate_total_rounds",
    "generate_pairings",
    "get_score_for_result",
    "sort_standings_by_tie_breaker",
]
