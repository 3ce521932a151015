"""Interactive troubleshooting helper for a fixed catalog of games."""

__version__ = "1.0.0"
