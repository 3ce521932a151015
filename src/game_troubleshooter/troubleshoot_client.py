"""
Interactive game troubleshooter.

Reads one command per line, looks games and issues up in the catalog and
runs crash-fix cleanups. Commands:

    help
    list games
    list issues <game>
    troubleshoot <game> <issue...>
    fix crashes <game>
    exit
"""

import sys
from typing import Callable, Dict, List, Optional

from game_troubleshooter.game_handling import ActionExecutor, GameRegistry, fix_crashes
from game_troubleshooter.utils.errors import (
    ConfigError, CatalogError, GameNotFound, IssueNotFound, UsageError
)
from game_troubleshooter.utils.monitoring import get_logger, setup_logging
from game_troubleshooter.utils.settings import find_config_path, load_config

logger = get_logger(__name__)

DEFAULT_PROMPT = ">> "
GOODBYE = "Goodbye!"

HELP_LINES = [
    "Available commands:",
    "  help                              Show this command reference",
    "  list games                        List supported games",
    "  list issues <game>                List known issues for a game",
    "  troubleshoot <game> <issue>       Show troubleshooting steps for an issue",
    "  fix crashes <game>                Close the game and clear its caches",
    "  exit                              Quit the troubleshooter",
]

LIST_USAGE = "list games | list issues <game>"
LIST_ISSUES_USAGE = "list issues <game>"
TROUBLESHOOT_USAGE = "troubleshoot <game> <issue>"
FIX_USAGE = "fix crashes <game>"


class TroubleshootClient:
    """
    Command dispatcher for the interactive prompt.

    The only state kept between lines is whether the loop is still running.

    Attributes:
        registry: Catalog lookups
        write: Receives one line of user-facing output at a time
        executor: Performs crash-fix actions
        prompt: Prompt passed to the line reader
    """

    def __init__(
        self,
        registry: GameRegistry,
        write: Callable[[str], None] = print,
        executor: Optional[ActionExecutor] = None,
        prompt: str = DEFAULT_PROMPT
    ):
        self.registry = registry
        self.write = write
        self.executor = executor or ActionExecutor()
        self.prompt = prompt
        self.running = True
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            'help': self._help,
            'list': self._list,
            'troubleshoot': self._troubleshoot,
            'fix': self._fix,
        }

    # -------------------------------------------------------------------------
    # Command handlers
    # -------------------------------------------------------------------------

    def _help(self, args: List[str]) -> None:
        for line in HELP_LINES:
            self.write(line)

    def _list(self, args: List[str]) -> None:
        if not args:
            raise UsageError(LIST_USAGE)

        subcommand = args[0].lower()
        if subcommand == 'games':
            self.write("Supported games:")
            for game in self.registry.list_games():
                self.write(f"  - {game}")
        elif subcommand == 'issues':
            if len(args) < 2:
                raise UsageError(LIST_ISSUES_USAGE)
            game = " ".join(args[1:])
            issues = self.registry.list_issues(game)
            self.write(f"Known issues for {game}:")
            for issue in issues:
                self.write(f"  - {issue}")
        else:
            raise UsageError(LIST_USAGE)

    def _split_game(self, args: List[str]) -> int:
        """Number of leading tokens naming the game; at least one token is left for the issue."""
        for count in range(len(args) - 1, 1, -1):
            if self.registry.is_registered(" ".join(args[:count])):
                return count
        return 1

    def _troubleshoot(self, args: List[str]) -> None:
        if len(args) < 2:
            raise UsageError(TROUBLESHOOT_USAGE)

        count = self._split_game(args)
        game = " ".join(args[:count])
        issue_query = " ".join(args[count:])

        category, steps = self.registry.resolve_issue(game, issue_query)
        self.write(f"Troubleshooting {game} - {category}:")
        for index, step in enumerate(steps, 1):
            self.write(f"  {index}. {step}")

    def _fix(self, args: List[str]) -> None:
        if len(args) < 2 or args[0].lower() != 'crashes':
            raise UsageError(FIX_USAGE)

        game = " ".join(args[1:])
        fix_crashes(game, self.registry, self.write, self.executor)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def handle_line(self, line: str) -> bool:
        """
        Execute one input line.

        Returns:
            False once the user asked to exit, True otherwise
        """
        tokens = line.split()
        if not tokens:
            return self.running

        command, args = tokens[0].lower(), tokens[1:]
        logger.debug(f"Command: {command} {args}")

        if command == 'exit':
            self.running = False
            return self.running

        handler = self._commands.get(command)
        if handler is None:
            self.write(f"Unknown command: '{tokens[0]}'. Type 'help' for a list of commands.")
            return self.running

        try:
            handler(args)
        except UsageError as e:
            self.write(str(e))
        except GameNotFound as e:
            self.write(f"{e} Type 'list games' to see supported games.")
        except IssueNotFound as e:
            self.write(str(e))
            self.write(f"Available issues: {', '.join(e.available)}")

        return self.running

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Read and execute lines until 'exit' or end of input, then say goodbye."""
        logger.info("Troubleshooter started")
        while self.running:
            try:
                line = read_line(self.prompt)
            except EOFError:
                logger.info("End of input")
                break
            self.handle_line(line)
        self.running = False
        self.write(GOODBYE)
        logger.info("Troubleshooter stopped")


def main() -> int:
    """Entry point of the game-troubleshooter console script."""
    try:
        config = load_config(find_config_path())
    except ConfigError as e:
        logger.error(str(e))
        return 1

    setup_logging(log_level=config.log_level, log_file=config.log_file, console=config.console_log)

    try:
        registry = GameRegistry.from_file(config.catalog_path)
    except CatalogError as e:
        logger.error(str(e))
        return 1

    client = TroubleshootClient(
        registry,
        write=print,
        executor=ActionExecutor(process_timeout=config.process_timeout),
        prompt=config.prompt
    )
    print("Game Troubleshooter. Type 'help' for a list of commands.")

    try:
        client.run(input)
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
        print()
        print(GOODBYE)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
