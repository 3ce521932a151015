"""
Crash-fix runner: best-effort cleanup for a selected game.

This module provides the fix_crashes() function that:
1. Picks the game's crash-fix sequence, or the generic one for games without it
2. Announces and logs each action before running it
3. Runs the actions strictly in order, one at a time
4. Records a failing action and moves on to the next one

Failures are never retried and never raised to the caller.
"""

from typing import Callable, List, Optional

from game_troubleshooter.game_handling.registry import GameRegistry
from game_troubleshooter.utils.data_model import (
    Action, ActionResult, DeleteTempFiles, LogMessage, StopProcess
)
from game_troubleshooter.utils.monitoring import get_logger
from game_troubleshooter.utils.process import (
    DEFAULT_TERMINATE_TIMEOUT, delete_files, resolve_directory, terminate_process
)

logger = get_logger(__name__)

GENERIC_PROCESS_NAME = "game.exe"

GENERIC_CRASH_FIX: List[Action] = [
    LogMessage(text="Closing game..."),
    StopProcess(process_name=GENERIC_PROCESS_NAME),
    LogMessage(text="Clearing temp files..."),
    DeleteTempFiles(directory="${TEMP}"),
]


class ActionExecutor:
    """
    Performs crash-fix actions on this machine.

    execute() returns False when an action had no effect (e.g., no matching
    process was running) and raises when it fails outright.
    """

    def __init__(self, process_timeout: float = DEFAULT_TERMINATE_TIMEOUT):
        self.process_timeout = process_timeout

    def execute(self, action: Action) -> bool:
        if isinstance(action, LogMessage):
            logger.info(action.text)
            return True
        if isinstance(action, StopProcess):
            return terminate_process(action.process_name, timeout=self.process_timeout)
        if isinstance(action, DeleteTempFiles):
            delete_files(resolve_directory(action.directory), action.pattern)
            return True
        raise TypeError(f"Unsupported action: {action!r}")


def fix_crashes(
    game: str,
    registry: GameRegistry,
    write: Callable[[str], None],
    executor: Optional[ActionExecutor] = None
) -> List[ActionResult]:
    """
    Run the crash-fix sequence for a game.

    Args:
        game: Exact game name; unknown games get the generic sequence
        registry: Catalog lookups
        write: Receives one line of user-facing output at a time
        executor: Performs the actions (default: ActionExecutor())

    Returns:
        One ActionResult per action, in execution order
    """
    executor = executor or ActionExecutor()

    actions = registry.crash_fix_actions(game)
    if actions is None:
        logger.info(f"No crash fix defined for '{game}', using the generic sequence")
        actions = list(GENERIC_CRASH_FIX)

    logger.info(f"Running {len(actions)} crash-fix action(s) for '{game}'")

    results = []
    for index, action in enumerate(actions, 1):
        write(f"[{index}/{len(actions)}] {action.describe()}")
        logger.info(f"Action {index}/{len(actions)}: {action.describe()}")
        try:
            ok = bool(executor.execute(action))
        except Exception as e:
            # Best-effort cleanup: the remaining actions still run
            logger.error(f"Action {index}/{len(actions)} failed: {e}")
            ok = False
        results.append(ActionResult(action=action, ok=ok))

    failed = sum(1 for result in results if not result.ok)
    logger.info(f"Crash fix for '{game}' finished ({failed} action(s) without effect)")
    write(f"Crash fix complete for {game}. Try launching the game again.")
    return results
