"""
Taskboard MCP Server - in-memory projects and tasks.

State lives only in process memory and is gone on exit.

Tools:
- list_projects: Get every project with its tasks
- get_project: Get one project by ID
- create_project: Create a project, optionally with initial tasks
- replace_project: Overwrite a project's title and tasks
- delete_project: Remove a project and all of its tasks
- create_task: Add a task to a project
- replace_task: Overwrite a task's title and status
- delete_task: Remove a task from its project
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import ServerConfig, load_config
from .models import InvalidInputError, NotFound, parse_tasks
from .store import ProjectStore

logger = logging.getLogger(__name__)

INSTRUCTIONS = """Project and task tracking held in memory.

Projects own an ordered list of tasks. Task IDs are only unique within
their project, so task tools always take both project_id and task_id.
Nothing survives a server restart."""


def _project_not_found(project_id: int) -> str:
    return f"Project {project_id} not found"


def _task_not_found(project_id: int, task_id: int) -> str:
    return f"Task {task_id} not found in project {project_id}"


def _not_found_message(missing: NotFound, project_id: int, task_id: int) -> str:
    if missing is NotFound.PROJECT:
        return _project_not_found(project_id)
    return _task_not_found(project_id, task_id)


class ProjectTools:
    """Request handlers bound to one ProjectStore.

    Each public method is registered as an MCP tool by ``build_server``.
    """

    def __init__(self, store: ProjectStore) -> None:
        self.store = store

    # ============================================
    # Project Tools
    # ============================================

    def list_projects(self) -> dict[str, Any]:
        """
        List all projects in creation order.

        Returns:
            Every project with its tasks, plus the count
        """
        projects = [project.to_dict() for project in self.store.list_projects()]
        return {
            "projects": projects,
            "count": len(projects),
        }

    def get_project(self, project_id: int) -> dict[str, Any]:
        """
        Get one project with all of its tasks.

        Args:
            project_id: Project ID

        Returns:
            The project, or an error if it does not exist
        """
        project = self.store.find_project(project_id)
        if project is None:
            return {"found": False, "error": _project_not_found(project_id)}
        return {
            "found": True,
            "project": project.to_dict(),
        }

    def create_project(
        self,
        title: str,
        tasks: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Create a new project.

        Args:
            title: Project title
            tasks: Optional initial tasks, each {"title", "status"} and
                optionally "id"; tasks without an id get a fresh one

        Returns:
            Created project including its assigned ID
        """
        try:
            initial = parse_tasks(tasks)
        except InvalidInputError as e:
            return {"created": False, "error": f"Invalid input: {e}"}

        project = self.store.create_project(title, initial)
        logger.info("Created project id=%s", project.id)
        return {
            "created": True,
            "project": project.to_dict(),
        }

    def replace_project(
        self,
        project_id: int,
        title: str,
        tasks: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Overwrite a project's title and task list. The project ID is kept.

        Task IDs are taken as supplied; tasks without an id get a fresh one.

        Args:
            project_id: Project ID
            title: New title
            tasks: New task list (omitted means empty)

        Returns:
            Updated project
        """
        if self.store.find_project(project_id) is None:
            return {"updated": False, "error": _project_not_found(project_id)}

        try:
            new_tasks = parse_tasks(tasks)
        except InvalidInputError as e:
            return {"updated": False, "error": f"Invalid input: {e}"}

        project = self.store.replace_project(project_id, title, new_tasks)
        if project is None:
            return {"updated": False, "error": _project_not_found(project_id)}
        return {
            "updated": True,
            "project": project.to_dict(),
        }

    def delete_project(self, project_id: int) -> dict[str, Any]:
        """
        Delete a project together with all of its tasks.

        Args:
            project_id: Project ID

        Returns:
            Deletion confirmation
        """
        if not self.store.delete_project(project_id):
            return {"deleted": False, "error": _project_not_found(project_id)}

        logger.info("Deleted project id=%s", project_id)
        return {"deleted": True, "id": project_id}

    # ============================================
    # Task Tools
    # ============================================

    def create_task(
        self,
        project_id: int,
        title: str,
        status: str = "",
    ) -> dict[str, Any]:
        """
        Add a task to the end of a project's task list.

        Args:
            project_id: Owning project ID
            title: Task title
            status: Free-text status label (e.g., "todo", "done")

        Returns:
            Created task including its assigned ID
        """
        result = self.store.create_task(project_id, title, status)
        if isinstance(result, NotFound):
            return {"created": False, "error": _project_not_found(project_id)}
        return {
            "created": True,
            "task": result.to_dict(),
        }

    def replace_task(
        self,
        project_id: int,
        task_id: int,
        title: str,
        status: str = "",
    ) -> dict[str, Any]:
        """
        Overwrite a task's title and status. The task ID is kept.

        Args:
            project_id: Owning project ID
            task_id: Task ID within the project
            title: New title
            status: New status label

        Returns:
            Updated task
        """
        result = self.store.replace_task(project_id, task_id, title, status)
        if isinstance(result, NotFound):
            return {
                "updated": False,
                "error": _not_found_message(result, project_id, task_id),
            }
        return {
            "updated": True,
            "task": result.to_dict(),
        }

    def delete_task(self, project_id: int, task_id: int) -> dict[str, Any]:
        """
        Remove a task from its project. Sibling tasks keep their IDs and order.

        Args:
            project_id: Owning project ID
            task_id: Task ID within the project

        Returns:
            Deletion confirmation
        """
        missing = self.store.delete_task(project_id, task_id)
        if missing is not None:
            return {
                "deleted": False,
                "error": _not_found_message(missing, project_id, task_id),
            }
        return {"deleted": True, "project_id": project_id, "id": task_id}


TOOL_NAMES = (
    "list_projects",
    "get_project",
    "create_project",
    "replace_project",
    "delete_project",
    "create_task",
    "replace_task",
    "delete_task",
)


def build_server(store: ProjectStore, config: ServerConfig | None = None) -> FastMCP:
    """Create a FastMCP server whose tools operate on ``store``."""
    config = config or ServerConfig()
    mcp = FastMCP(
        config.name,
        instructions=INSTRUCTIONS,
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
    tools = ProjectTools(store)
    for name in TOOL_NAMES:
        mcp.add_tool(getattr(tools, name))
    return mcp


def main() -> None:
    """Entry point for the Taskboard MCP server."""
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    server = build_server(ProjectStore(), config)
    logger.info("Starting Taskboard MCP server, transport: %s", config.transport)
    server.run(transport=config.transport)  # type: ignore[arg-type]


if __name__ == "__main__":
    main()
