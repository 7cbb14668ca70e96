from creaturecup.config.format_loader import (
    load_tournament_format,
    parse_tournament_format,
)

__all__ = ["load_tournament_format", "parse_tournament_format"]
