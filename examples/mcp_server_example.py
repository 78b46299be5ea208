"""Example demonstrating MCP Server usage."""

import asyncio
import logging

from session_planner.scheduling.mcp_server import MCPServer
from session_planner.scheduling.planner import SessionPlanner

logging.basicConfig(level=logging.INFO)

TASKS = [
    {
        "id": "report",
        "title": "Quarterly report",
        "priority": "high",
        "status": "todo",
        "created_at": "2025-11-01T09:00:00Z",
        "subtasks": [
            {"id": "outline", "title": "Outline", "priority": "high", "estimated_hours": 1},
            {"id": "draft", "title": "Draft", "priority": "medium", "estimated_hours": 3},
        ],
    },
    {
        "id": "inbox",
        "title": "Inbox zero",
        "priority": "low",
        "status": "in_progress",
        "created_at": "2025-10-28T16:30:00Z",
    },
]

SESSIONS = [
    {"id": "mon", "scheduled_date": "2025-11-03", "scheduled_hours": 2, "status": "scheduled"},
    {"id": "tue", "scheduled_date": "2025-11-04", "scheduled_hours": 0, "status": "scheduled"},
    {"id": "wed", "scheduled_date": "2025-11-05", "scheduled_hours": 2.5, "status": "scheduled"},
    {"id": "fri", "scheduled_date": "2025-10-31", "scheduled_hours": 2, "status": "completed"},
]


async def main() -> None:
    """Demonstrate MCP Server functionality."""
    mcp_server = MCPServer(planner=SessionPlanner())
    await mcp_server.initialize()

    print("Available MCP tools:", mcp_server.get_available_tools())
    print()

    params = {"tasks": TASKS, "sessions": SESSIONS, "today": "2025-11-03"}

    # Example 1: Classify sessions
    print("=== Classifying sessions ===")
    result = await mcp_server.handle_classify_sessions(params)
    print(f"Upcoming: {[s['id'] for s in result['upcoming']]}")
    print(f"Past: {[s['id'] for s in result['past']]}")
    print()

    # Example 2: Plan sessions
    print("=== Planning sessions ===")
    result = await mcp_server.handle_plan_sessions(params)
    for planned in result["sessions"]:
        titles = [task["title"] for task in planned["assigned_tasks"]]
        print(f"{planned['session']['scheduled_date']}: {titles}")
    print()

    # Example 3: Clipboard summary of the first session
    print("=== Summarizing first session ===")
    result = await mcp_server.handle_summarize_session({**params, "index": 0})
    print(f"Summary: {result['summary']}")
    print()

    # Example 4: Complete the first session
    print("=== Completing first session ===")
    result = await mcp_server.handle_complete_session({**params, "session_id": "mon"})
    print(f"Completion: {result}")
    print()

    await mcp_server.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
