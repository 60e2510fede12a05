"""
Taskboard MCP - in-memory project and task tracking.

Projects own ordered task lists; everything lives in process memory.
- ProjectStore holds the state and hands out copies
- build_server() exposes the store as MCP tools
"""

from .server import build_server, main
from .store import ProjectStore

__all__ = ["ProjectStore", "build_server", "main"]
