"""Input adapters that turn tournament sheets into player records."""

from .players import (
    DEFAULT_PLAYERS_MAPPING,
    ImportReport,
    ImportValidationError,
    PlayerImportRow,
    import_players,
    load_player_csv,
    load_records_from_csv,
    parse_player_csv,
    rows_to_records,
)

__all__ = [
    "DEFAULT_PLAYERS_MAPPING",
    "ImportReport",
    "ImportValidationError",
    "PlayerImportRow",
    "import_players",
    "load_player_csv",
    "load_records_from_csv",
    "parse_player_csv",
    "rows_to_records",
]
