"""MCP Server for session planning using FastMCP."""

import logging
from datetime import date
from typing import Any

from fastmcp import FastMCP

from .classifier import classify_sessions as partition_sessions
from .config import (
    DEFAULT_MCP_HOST,
    DEFAULT_MCP_PORT,
    DEFAULT_MCP_SERVER_NAME,
)
from .exceptions import SchedulingError
from .planner import SessionPlan, SessionPlanner
from .snapshot import (
    assignment_to_dict,
    completion_to_dict,
    session_from_dict,
    session_to_dict,
    task_from_dict,
)

logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(DEFAULT_MCP_SERVER_NAME)

# Global planner (replaced in tests)
_planner: SessionPlanner = SessionPlanner()

TOOL_NAMES = [
    "classify_sessions",
    "plan_sessions",
    "summarize_session",
    "complete_session",
]


def get_planner() -> SessionPlanner:
    """Get the global planner instance."""
    return _planner


def set_planner(planner: SessionPlanner) -> None:
    """Set the global planner instance (for testing)."""
    global _planner
    _planner = planner


def _parse_today(today: str | None) -> date | None:
    if not today:
        return None
    try:
        return date.fromisoformat(today)
    except ValueError as e:
        raise SchedulingError(f"Invalid date format: {today}") from e


def _build_plan(
    tasks: list[dict[str, Any]], sessions: list[dict[str, Any]], today: str | None
) -> SessionPlan:
    return get_planner().plan(
        [task_from_dict(record) for record in tasks],
        [session_from_dict(record) for record in sessions],
        today=_parse_today(today),
    )


def _classify_sessions_impl(
    sessions: list[dict[str, Any]], today: str | None = None
) -> dict[str, Any]:
    """Implementation of classify_sessions tool."""
    try:
        planning_date = _parse_today(today) or get_planner().today()
        classified = partition_sessions(
            [session_from_dict(record) for record in sessions], planning_date
        )
        return {
            "success": True,
            "today": planning_date.isoformat(),
            "upcoming": [session_to_dict(session) for session in classified.upcoming],
            "past": [session_to_dict(session) for session in classified.past],
        }

    except SchedulingError as e:
        logger.warning(f"Rejected sessions: {e}")
        return {"success": False, "error": str(e)}


def _plan_sessions_impl(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    today: str | None = None,
) -> dict[str, Any]:
    """Implementation of plan_sessions tool."""
    try:
        plan = _build_plan(tasks, sessions, today)
        return {
            "success": True,
            "today": plan.today.isoformat(),
            "sessions": [assignment_to_dict(assignment) for assignment in plan.assignments],
        }

    except SchedulingError as e:
        logger.warning(f"Error planning sessions: {e}")
        return {"success": False, "error": str(e)}


def _summarize_session_impl(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    index: int,
    today: str | None = None,
) -> dict[str, Any]:
    """Implementation of summarize_session tool."""
    try:
        if isinstance(index, bool) or not isinstance(index, int):
            raise SchedulingError(f"Invalid session index: {index!r}")
        plan = _build_plan(tasks, sessions, today)
        return {"success": True, "summary": plan.summary(index)}

    except SchedulingError as e:
        logger.warning(f"Error summarizing session: {e}")
        return {"success": False, "error": str(e)}


def _complete_session_impl(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    session_id: str,
    today: str | None = None,
) -> dict[str, Any]:
    """Implementation of complete_session tool."""
    try:
        plan = _build_plan(tasks, sessions, today)
        completion = plan.complete(session_id)
        return {"success": True, **completion_to_dict(completion)}

    except SchedulingError as e:
        logger.warning(f"Error completing session {session_id}: {e}")
        return {"success": False, "error": str(e)}


# FastMCP decorated wrappers (for actual MCP server)
@mcp.tool()
async def classify_sessions(
    sessions: list[dict[str, Any]], today: str | None = None
) -> dict[str, Any]:
    """
    Split sessions into upcoming (earliest first) and past (latest first).

    Args:
        sessions: Session records (id, scheduled_date, scheduled_hours, status)
        today: Calendar date in ISO format (defaults to today)

    Returns:
        Dictionary with upcoming and past session lists
    """
    return _classify_sessions_impl(sessions=sessions, today=today)


@mcp.tool()
async def plan_sessions(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    today: str | None = None,
) -> dict[str, Any]:
    """
    Distribute incomplete tasks across upcoming sessions.

    Args:
        tasks: Task records (id, title, priority, status, estimated_hours,
            created_at, subtasks)
        sessions: Session records
        today: Calendar date in ISO format (defaults to today)

    Returns:
        Dictionary with each upcoming session and its assigned tasks
    """
    return _plan_sessions_impl(tasks=tasks, sessions=sessions, today=today)


@mcp.tool()
async def summarize_session(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    index: int,
    today: str | None = None,
) -> dict[str, Any]:
    """
    Summarize an upcoming session's work and what follows it.

    Args:
        tasks: Task records
        sessions: Session records
        index: Position of the session among upcoming sessions
        today: Calendar date in ISO format (defaults to today)

    Returns:
        Dictionary with the summary text
    """
    return _summarize_session_impl(
        tasks=tasks, sessions=sessions, index=index, today=today
    )


@mcp.tool()
async def complete_session(
    tasks: list[dict[str, Any]],
    sessions: list[dict[str, Any]],
    session_id: str,
    today: str | None = None,
) -> dict[str, Any]:
    """
    Describe the updates that mark an upcoming session and its tasks as done.

    Args:
        tasks: Task records
        sessions: Session records
        session_id: Upcoming session to complete
        today: Calendar date in ISO format (defaults to today)

    Returns:
        Dictionary with task ids to complete, session-task links and new notes
    """
    return _complete_session_impl(
        tasks=tasks, sessions=sessions, session_id=session_id, today=today
    )


# Compatibility wrapper for tests
class MCPServer:
    """
    Compatibility wrapper for testing.

    The actual MCP server uses FastMCP with function decorators.
    This class provides a compatible interface for existing tests.
    """

    def __init__(
        self,
        planner: SessionPlanner | None = None,
        server_name: str = DEFAULT_MCP_SERVER_NAME,
        host: str = DEFAULT_MCP_HOST,
        port: int = DEFAULT_MCP_PORT,
    ) -> None:
        """Initialize MCP Server wrapper."""
        self._planner = planner or SessionPlanner()
        self._server_name = server_name
        self._host = host
        self._port = port
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the server."""
        set_planner(self._planner)
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the server."""
        self._initialized = False

    def get_available_tools(self) -> list[str]:
        """Get list of available tools."""
        return list(TOOL_NAMES)

    async def handle_classify_sessions(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle classify_sessions request."""
        if "sessions" not in params:
            return {"success": False, "error": "Missing required field: sessions"}
        return _classify_sessions_impl(
            sessions=params["sessions"], today=params.get("today")
        )

    async def handle_plan_sessions(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle plan_sessions request."""
        if "sessions" not in params:
            return {"success": False, "error": "Missing required field: sessions"}
        return _plan_sessions_impl(
            tasks=params.get("tasks", []),
            sessions=params["sessions"],
            today=params.get("today"),
        )

    async def handle_summarize_session(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle summarize_session request."""
        if "index" not in params:
            return {"success": False, "error": "Missing required field: index"}
        return _summarize_session_impl(
            tasks=params.get("tasks", []),
            sessions=params.get("sessions", []),
            index=params["index"],
            today=params.get("today"),
        )

    async def handle_complete_session(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle complete_session request."""
        if "session_id" not in params:
            return {"success": False, "error": "Missing required field: session_id"}
        return _complete_session_impl(
            tasks=params.get("tasks", []),
            sessions=params.get("sessions", []),
            session_id=params["session_id"],
            today=params.get("today"),
        )


def cli_entry() -> None:
    """CLI entry point for the MCP server."""
    import sys

    # Check for transport argument
    transport_type = "stdio"
    if len(sys.argv) > 1 and sys.argv[1] in ("stdio", "sse", "http"):
        transport_type = "sse" if sys.argv[1] == "http" else sys.argv[1]

    logging.basicConfig(level=logging.INFO)
    logger.info(
        f"MCP Server starting with {len(TOOL_NAMES)} tools (transport={transport_type})"
    )

    # FastMCP's run() manages its own event loop
    if transport_type == "stdio":
        mcp.run(transport="stdio")
    else:
        logger.info(f"Server will listen on http://{DEFAULT_MCP_HOST}:{DEFAULT_MCP_PORT}")
        mcp.run(transport="sse", host=DEFAULT_MCP_HOST, port=DEFAULT_MCP_PORT)


if __name__ == "__main__":
    cli_entry()
