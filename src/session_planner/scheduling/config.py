"""Configuration constants for session planning functionality."""

import os

# Work-unit sizing
DEFAULT_ESTIMATED_HOURS = 1.0  # hours, used when an estimate is missing or invalid
HOURS_TOLERANCE = 1e-9  # leftover hours below this after filling a session count as none

# Priority ranking (higher rank is scheduled first)
PRIORITY_RANKS = {
    "high": 3,
    "medium": 2,
    "low": 1,
}
UNKNOWN_PRIORITY_RANK = 0

# Titles
SUBTASK_TITLE_SEPARATOR = " - "  # "{parent} - {subtask}"

# Summary / clipboard export
SUMMARY_SEPARATOR = ", "
NEXT_PREFIX = "Next: "
NO_TASKS_ASSIGNED = "No tasks assigned"

# Session completion
COMPLETED_TASKS_NOTE_PREFIX = "Completed tasks: "
NOTES_PARAGRAPH_SEPARATOR = "\n\n"

# Calendar convention for "today"
DEFAULT_TIMEZONE = os.environ.get("SESSION_PLANNER_TIMEZONE", "UTC")

# MCP Server Configuration
DEFAULT_MCP_HOST = "localhost"
DEFAULT_MCP_PORT = 3000
DEFAULT_MCP_SERVER_NAME = "session-planner"
