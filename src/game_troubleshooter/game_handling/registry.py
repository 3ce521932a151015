"""
Game registry: catalog loading and lookups.

The GameRegistry wraps a validated, read-only Catalog and provides:
- list_games(): every catalog game, in catalog order
- list_issues(): the advice categories of one game
- resolve_issue(): case-insensitive match of an issue query to its advice
- crash_fix_actions(): the cleanup sequence of one game, if it has one

Game names are matched exactly (case-sensitive). Issue names are matched
case-insensitively. The reserved "crash fix" category is split out of the
advice categories when the catalog is loaded.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from game_troubleshooter.utils.data_model import Action, Catalog, GameEntry
from game_troubleshooter.utils.errors import CatalogError, GameNotFound, IssueNotFound
from game_troubleshooter.utils.monitoring import get_logger

logger = get_logger(__name__)

CRASH_FIX_CATEGORY = "crash fix"
DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.json"


def _parse_game(game: str, game_data: Any) -> GameEntry:
    """Split one on-disk game object into advice categories and crash-fix actions."""
    if not isinstance(game_data, dict):
        raise CatalogError(f"Invalid entry for game '{game}': expected object, got {type(game_data).__name__}")

    advice = {}
    crash_fix = None
    for category, values in game_data.items():
        # Ignoring case, so "crash fix" can never be reached as an issue query
        if category.lower() == CRASH_FIX_CATEGORY:
            crash_fix = values
        else:
            advice[category] = values

    try:
        return GameEntry(advice=advice, crash_fix=crash_fix)
    except ValidationError as e:
        raise CatalogError(f"Catalog validation failed for game '{game}': {e}") from e


def parse_catalog(catalog_data: Any) -> Catalog:
    """
    Build a Catalog from the decoded catalog JSON.

    Raises:
        CatalogError: If the structure or any entry is invalid
    """
    if not isinstance(catalog_data, dict):
        raise CatalogError("Catalog must be a JSON object mapping game names to entries")

    games = {game: _parse_game(game, game_data) for game, game_data in catalog_data.items()}
    for game, entry in games.items():
        logger.debug(
            f"Registered game: {game} ({len(entry.advice)} issue(s), "
            f"crash fix: {'yes' if entry.crash_fix else 'no'})"
        )
    return Catalog(games=games)


def load_catalog(catalog_path: Path = DEFAULT_CATALOG_PATH) -> Catalog:
    """
    Load and validate a catalog JSON file.

    Args:
        catalog_path: Path to the catalog file (default: the shipped catalog)

    Returns:
        Validated Catalog

    Raises:
        CatalogError: If the file is missing, is not valid JSON or fails validation
    """
    catalog_path = Path(catalog_path)
    if not catalog_path.exists():
        raise CatalogError(f"Catalog file not found: {catalog_path}")

    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            catalog_data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in catalog file {catalog_path}: {e}") from e

    catalog = parse_catalog(catalog_data)
    logger.info(f"Loaded {len(catalog.games)} game(s) from {catalog_path.name}: {list(catalog.games.keys())}")
    return catalog


class GameRegistry:
    """Read-only lookups over a Catalog."""

    def __init__(self, catalog: Catalog):
        self._games: Mapping[str, GameEntry] = MappingProxyType(dict(catalog.games))

    @classmethod
    def from_file(cls, catalog_path: Optional[Path] = None) -> "GameRegistry":
        """Load a catalog file (default: the shipped catalog) and wrap it."""
        return cls(load_catalog(catalog_path or DEFAULT_CATALOG_PATH))

    def _entry(self, game: str) -> GameEntry:
        if game not in self._games:
            raise GameNotFound(game)
        return self._games[game]

    def list_games(self) -> List[str]:
        """Get list of catalog game names."""
        return list(self._games.keys())

    def is_registered(self, game: str) -> bool:
        """Check if game is in the catalog (exact name)."""
        return game in self._games

    def list_issues(self, game: str) -> List[str]:
        """
        Get the issue categories of a game.

        Args:
            game: Exact game name (e.g., 'Cold War')

        Returns:
            Advice category names in catalog order, never the crash-fix category

        Raises:
            GameNotFound: If game is not in the catalog
        """
        return list(self._entry(game).advice.keys())

    def resolve_issue(self, game: str, issue_query: str) -> Tuple[str, List[str]]:
        """
        Match an issue query against a game's advice categories.

        The first category equal to the query ignoring case wins.

        Args:
            game: Exact game name
            issue_query: Issue as typed by the user (e.g., 'Connection')

        Returns:
            Tuple of (category name as stored, advice steps)

        Raises:
            GameNotFound: If game is not in the catalog
            IssueNotFound: If no category matches; carries the available categories
        """
        entry = self._entry(game)
        query = issue_query.lower()
        for category, steps in entry.advice.items():
            if category.lower() == query:
                return category, list(steps)
        raise IssueNotFound(game, issue_query, list(entry.advice.keys()))

    def crash_fix_actions(self, game: str) -> Optional[List[Action]]:
        """Get the cleanup sequence of a game, or None if it has none or is unknown."""
        entry = self._games.get(game)
        if entry is None or not entry.crash_fix:
            return None
        return list(entry.crash_fix)

    def __len__(self) -> int:
        return len(self._games)

    def __repr__(self) -> str:
        return f"GameRegistry(games={self.list_games()!r})"
