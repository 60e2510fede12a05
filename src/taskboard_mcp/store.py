"""
In-memory project store.

Holds the ordered sequence of projects, each owning an ordered sequence of
tasks. Identifiers come from strictly monotonic counters (one for projects,
one per project for tasks) and are never reused after a deletion; 0 is never
handed out.

Every operation runs under one exclusive lock and entities cross the store
boundary as copies, so callers cannot mutate internal state.
"""

import logging
import threading
from collections.abc import Iterable

from .models import NotFound, Project, Task

logger = logging.getLogger(__name__)


def _copy_task(task: Task) -> Task:
    return Task(id=task.id, title=task.title, status=task.status)


def _copy_project(project: Project) -> Project:
    return Project(
        id=project.id,
        title=project.title,
        tasks=[_copy_task(task) for task in project.tasks],
    )


class ProjectStore:
    """Authoritative in-memory collection of projects."""

    def __init__(self) -> None:
        self._projects: list[Project] = []
        self._lock = threading.Lock()
        self._last_project_id = 0
        # project id -> last task id handed out in that project
        self._last_task_ids: dict[int, int] = {}

    def __len__(self) -> int:
        return self.count()

    # ---- low-level helpers (caller holds the lock) ----

    def _project_index(self, project_id: int) -> int:
        for i, project in enumerate(self._projects):
            if project.id == project_id:
                return i
        return -1

    @staticmethod
    def _task_index(project: Project, task_id: int) -> int:
        for i, task in enumerate(project.tasks):
            if task.id == task_id:
                return i
        return -1

    def _next_task_id(self, project_id: int) -> int:
        task_id = self._last_task_ids.get(project_id, 0) + 1
        self._last_task_ids[project_id] = task_id
        return task_id

    def _adopt_tasks(self, project_id: int, tasks: Iterable[Task]) -> list[Task]:
        """Copy caller-supplied tasks into a project, filling in missing ids.

        Supplied ids are kept as-is; the task counter is advanced past the
        largest of them first so fresh ids never land on one.
        """
        adopted = [_copy_task(task) for task in tasks]
        supplied = max((task.id for task in adopted), default=0)
        if supplied > self._last_task_ids.get(project_id, 0):
            self._last_task_ids[project_id] = supplied
        for task in adopted:
            if task.id == 0:
                task.id = self._next_task_id(project_id)
        return adopted

    # ---- projects ----

    def count(self) -> int:
        with self._lock:
            return len(self._projects)

    def list_projects(self) -> list[Project]:
        with self._lock:
            return [_copy_project(project) for project in self._projects]

    def find_project(self, project_id: int) -> Project | None:
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return None
            return _copy_project(self._projects[index])

    def create_project(self, title: str, tasks: Iterable[Task] | None = None) -> Project:
        with self._lock:
            self._last_project_id += 1
            project_id = self._last_project_id
            self._last_task_ids[project_id] = 0
            project = Project(
                id=project_id,
                title=title,
                tasks=self._adopt_tasks(project_id, tasks or ()),
            )
            self._projects.append(project)
            logger.debug("Project created id=%s tasks=%s", project_id, len(project.tasks))
            return _copy_project(project)

    def replace_project(
        self, project_id: int, title: str, tasks: Iterable[Task] | None = None
    ) -> Project | None:
        """Overwrite a project's title and tasks in place, keeping its id and position."""
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return None
            project = self._projects[index]
            project.title = title
            project.tasks = self._adopt_tasks(project_id, tasks or ())
            logger.debug("Project replaced id=%s tasks=%s", project_id, len(project.tasks))
            return _copy_project(project)

    def delete_project(self, project_id: int) -> bool:
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return False
            del self._projects[index]
            self._last_task_ids.pop(project_id, None)
            logger.debug("Project deleted id=%s", project_id)
            return True

    # ---- tasks ----

    def create_task(self, project_id: int, title: str, status: str) -> Task | NotFound:
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return NotFound.PROJECT
            task = Task(id=self._next_task_id(project_id), title=title, status=status)
            self._projects[index].tasks.append(task)
            logger.debug("Task created project_id=%s id=%s", project_id, task.id)
            return _copy_task(task)

    def replace_task(
        self, project_id: int, task_id: int, title: str, status: str
    ) -> Task | NotFound:
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return NotFound.PROJECT
            project = self._projects[index]
            task_index = self._task_index(project, task_id)
            if task_index == -1:
                return NotFound.TASK
            task = Task(id=task_id, title=title, status=status)
            project.tasks[task_index] = task
            logger.debug("Task replaced project_id=%s id=%s", project_id, task_id)
            return _copy_task(task)

    def delete_task(self, project_id: int, task_id: int) -> NotFound | None:
        """Remove a task. Returns None on success."""
        with self._lock:
            index = self._project_index(project_id)
            if index == -1:
                return NotFound.PROJECT
            project = self._projects[index]
            task_index = self._task_index(project, task_id)
            if task_index == -1:
                return NotFound.TASK
            del project.tasks[task_index]
            logger.debug("Task deleted project_id=%s id=%s", project_id, task_id)
            return None
