"""Exception hierarchy shared by the catalog, settings and command layers."""

from typing import List


class TroubleshooterError(Exception):
    """Base class for all errors raised by the troubleshooter."""


class CatalogError(TroubleshooterError):
    """The catalog file is missing, unreadable or invalid."""


class ConfigError(TroubleshooterError):
    """The configuration file is unreadable or invalid."""


class GameNotFound(TroubleshooterError):
    """No catalog entry matches the requested game name exactly."""

    def __init__(self, game: str):
        self.game = game
        super().__init__(f"Game '{game}' not found.")


class IssueNotFound(TroubleshooterError):
    """
    The game exists but none of its issue categories matches the query.

    Attributes:
        game: Game that was searched
        issue: Query as typed by the user
        available: Issue categories the game does offer, in catalog order
    """

    def __init__(self, game: str, issue: str, available: List[str]):
        self.game = game
        self.issue = issue
        self.available = list(available)
        super().__init__(f"Issue '{issue}' not found for {game}.")


class UsageError(TroubleshooterError):
    """A command was typed with missing or malformed arguments."""

    def __init__(self, usage: str):
        self.usage = usage
        super().__init__(f"Usage: {usage}")
