"""
Process and file utilities used by the crash-fix actions.

This module provides:
- terminate_process(): Find and kill processes by name
- resolve_directory(): Expand environment references in a cache/temp directory
- delete_files(): Remove files matching a pattern inside a directory
"""

import os
import tempfile
from pathlib import Path
from string import Template
from typing import Dict, Optional

import psutil

from game_troubleshooter.utils.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_TERMINATE_TIMEOUT = 5


def _matching_processes(process_name: str) -> list:
    process_name_lower = process_name.lower()
    found_processes = []

    for proc in psutil.process_iter(['pid', 'name']):
        try:
            name = proc.info['name']
            if name and name.lower() == process_name_lower:
                found_processes.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue

    return found_processes


def terminate_process(process_name: str, timeout: float = DEFAULT_TERMINATE_TIMEOUT) -> bool:
    """
    Find and terminate all processes matching the given name.

    Each process gets `timeout` seconds to exit after terminate() before it is killed.

    Args:
        process_name: Name of the process to terminate (e.g., 'cod.exe')
        timeout: Seconds to wait for a graceful exit

    Returns:
        bool: True if every matching process was terminated, False if none was
        found or at least one could not be stopped
    """
    logger.info(f"Terminating processes: {process_name}")

    found_processes = _matching_processes(process_name)

    if not found_processes:
        logger.warning(f"No running processes found for {process_name}")
        return False

    success = True
    for proc in found_processes:
        try:
            logger.info(f"Terminating PID {proc.pid}...")
            proc.terminate()
            proc.wait(timeout=timeout)
            logger.info(f"Process {proc.pid} terminated")
        except psutil.TimeoutExpired:
            logger.warning(f"Process {proc.pid} didn't terminate gracefully, force killing...")
            try:
                proc.kill()
                logger.info(f"Process {proc.pid} killed")
            except psutil.Error as e:
                logger.error(f"Error killing process {proc.pid}: {e}")
                success = False
        except psutil.NoSuchProcess:
            logger.info(f"Process {proc.pid} already exited")
        except psutil.AccessDenied:
            logger.error(f"Access denied for PID {proc.pid}. Try running as administrator.")
            success = False

    return success


def resolve_directory(directory: str, environ: Optional[Dict[str, str]] = None) -> Path:
    """
    Expand '~' and $VAR / ${VAR} references in a directory string.

    Variables set to an empty string count as unset. TEMP falls back to the
    platform temp directory when it is unset, so catalog entries can refer to
    ${TEMP} on every platform. The result must be an absolute path; a catalog
    directory is never resolved against the working directory.

    Raises:
        ValueError: If a referenced variable is not set, or the result is empty
                    or not absolute
    """
    env = {key: value for key, value in (os.environ if environ is None else environ).items() if value}
    env.setdefault('TEMP', tempfile.gettempdir())

    try:
        expanded = Template(directory).substitute(env)
    except KeyError as e:
        raise ValueError(f"Environment variable {e} is not set for directory: {directory}") from e
    except ValueError as e:
        raise ValueError(f"Invalid directory template {directory!r}: {e}") from e

    if not expanded.strip():
        raise ValueError(f"Directory {directory!r} resolved to an empty path")

    path = Path(expanded).expanduser()
    if not path.is_absolute():
        raise ValueError(f"Directory {directory!r} resolved to a relative path: {path}")
    return path


def delete_files(directory: Path, pattern: str = "*") -> int:
    """
    Delete the files matching `pattern` directly inside `directory`.

    Subdirectories are left alone. A file that cannot be removed is logged
    and skipped, the rest are still deleted.

    Args:
        directory: Directory to clear
        pattern: Glob pattern relative to `directory`

    Returns:
        Number of files deleted

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If directory is not a directory
    """
    directory = Path(directory)

    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {directory}")

    deleted = 0
    for path in directory.glob(pattern):
        if not path.is_file():
            continue
        try:
            path.unlink()
            deleted += 1
        except OSError as e:
            logger.warning(f"Could not delete {path}: {e}")

    logger.info(f"Deleted {deleted} file(s) from {directory}")
    return deleted
