"""Row sources for match/map statistics."""

from repositories.csv_source import load_maps_csv, load_matches_csv
from repositories.rankings import load_ranking_entries
from repositories.sql_source import create_source_tables, fetch_map_records, fetch_match_records

__all__ = [
    "create_source_tables",
    "fetch_map_records",
    "fetch_match_records",
    "load_maps_csv",
    "load_matches_csv",
    "load_ranking_entries",
]
