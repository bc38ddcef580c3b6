# src/noteleaf/tasks/dependency_graph.py

from __future__ import annotations

"""
Task dependency graph.

Task.depends_on only supports a point query (Task.blocks). This module builds
the full directed graph over task UUIDs on top of it:
- forward index: task -> tasks it depends on
- reverse index: task -> tasks that depend on it
- edge checks: no self-reference, no cycles (DFS reachability)
- readiness: every dependency known and finished

Edges added or removed here are written back to the dependent task's
depends_on list so the records stay the source of truth for storage.
"""

import logging
from collections.abc import Iterable

from ..errors import DependencyError
from ..models.task_models import Task

logger = logging.getLogger(__name__)


def is_finished(task: Task) -> bool:
    """Completed under either taxonomy."""
    return task.is_completed() or task.is_done()


class DependencyGraph:
    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[str, Task] = {}
        self._forward: dict[str, list[str]] = {}
        self._reverse: dict[str, set[str]] = {}
        for task in tasks:
            self.add_task(task)

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, uuid: str) -> Task | None:
        return self._tasks.get(uuid)

    # ---- building ----

    def add_task(self, task: Task) -> None:
        """
        Register a task and index its existing depends_on entries as-is.

        Loaded data is not validated here; call find_cycle() to audit it.
        """
        if not task.uuid:
            raise DependencyError("task has no uuid")
        if task.uuid in self._tasks:
            self._unindex(task.uuid)

        self._tasks[task.uuid] = task
        deps = list(dict.fromkeys(task.depends_on or ()))
        self._forward[task.uuid] = deps
        for dep in deps:
            self._reverse.setdefault(dep, set()).add(task.uuid)

    def _unindex(self, uuid: str) -> None:
        for dep in self._forward.pop(uuid, []):
            dependents = self._reverse.get(dep)
            if dependents is not None:
                dependents.discard(uuid)
                if not dependents:
                    del self._reverse[dep]

    def remove_task(self, uuid: str) -> Task | None:
        """Forget a task. Edges pointing at it from other tasks are kept (they now block)."""
        task = self._tasks.pop(uuid, None)
        if task is not None:
            self._unindex(uuid)
        return task

    # ---- edges ----

    def would_create_cycle(self, task_uuid: str, depends_on_uuid: str) -> bool:
        """True if adding task -> depends_on closes a cycle (depends_on already reaches task)."""
        if task_uuid == depends_on_uuid:
            return True

        stack = [depends_on_uuid]
        seen: set[str] = set()
        while stack:
            current = stack.pop()
            if current == task_uuid:
                return True
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self._forward.get(current, ()))
        return False

    def add_dependency(self, task_uuid: str, depends_on_uuid: str) -> None:
        """
        Make task_uuid depend on depends_on_uuid.

        Raises DependencyError for unknown tasks, self-reference, or a cycle.
        Adding an edge that already exists is a no-op.
        """
        task = self._tasks.get(task_uuid)
        if task is None:
            raise DependencyError(f"unknown task {task_uuid!r}")
        if depends_on_uuid not in self._tasks:
            raise DependencyError(f"unknown dependency {depends_on_uuid!r}")
        if task_uuid == depends_on_uuid:
            logger.warning("Rejected self-dependency task=%s", task_uuid)
            raise DependencyError(f"task {task_uuid!r} cannot depend on itself")
        if depends_on_uuid in self._forward[task_uuid]:
            return
        if self.would_create_cycle(task_uuid, depends_on_uuid):
            logger.warning("Rejected dependency task=%s depends_on=%s (cycle)", task_uuid, depends_on_uuid)
            raise DependencyError(
                f"dependency {task_uuid!r} -> {depends_on_uuid!r} would create a cycle"
            )

        self._forward[task_uuid].append(depends_on_uuid)
        self._reverse.setdefault(depends_on_uuid, set()).add(task_uuid)

        if task.depends_on is None:
            task.depends_on = []
        if depends_on_uuid not in task.depends_on:
            task.depends_on.append(depends_on_uuid)

        logger.debug("Dependency added task=%s depends_on=%s", task_uuid, depends_on_uuid)

    def remove_dependency(self, task_uuid: str, depends_on_uuid: str) -> bool:
        """Drop the edge (all duplicates in depends_on). Returns False if it did not exist."""
        deps = self._forward.get(task_uuid)
        if deps is None or depends_on_uuid not in deps:
            return False

        deps.remove(depends_on_uuid)
        dependents = self._reverse.get(depends_on_uuid)
        if dependents is not None:
            dependents.discard(task_uuid)
            if not dependents:
                del self._reverse[depends_on_uuid]

        task = self._tasks[task_uuid]
        if task.depends_on:
            remaining = [u for u in task.depends_on if u != depends_on_uuid]
            task.depends_on = remaining or None

        logger.debug("Dependency removed task=%s depends_on=%s", task_uuid, depends_on_uuid)
        return True

    # ---- queries ----

    def dependencies_of(self, uuid: str) -> list[str]:
        return list(self._forward.get(uuid, ()))

    def dependents_of(self, uuid: str) -> list[str]:
        """UUIDs of tasks that this task blocks, sorted for stable output."""
        return sorted(self._reverse.get(uuid, ()))

    def blockers(self, uuid: str) -> list[str]:
        """Dependencies of `uuid` that are unknown or not finished yet."""
        out: list[str] = []
        for dep in self._forward.get(uuid, ()):
            dep_task = self._tasks.get(dep)
            if dep_task is None or not is_finished(dep_task):
                out.append(dep)
        return out

    def is_ready(self, uuid: str) -> bool:
        if uuid not in self._tasks:
            return False
        return not self.blockers(uuid)

    def ready_tasks(self) -> list[Task]:
        """Unfinished tasks with no outstanding dependencies, in insertion order."""
        return [
            task
            for uuid, task in self._tasks.items()
            if not is_finished(task) and self.is_ready(uuid)
        ]

    def find_cycle(self) -> list[str] | None:
        """
        Return one cycle as [a, b, ..., a] if the loaded data contains any.

        Iterative DFS with white/grey/black colouring.
        """
        white, grey, black = 0, 1, 2
        color: dict[str, int] = {u: white for u in self._forward}

        for root in self._forward:
            if color[root] != white:
                continue
            path: list[str] = [root]
            iters = [iter(self._forward.get(root, ()))]
            color[root] = grey
            while iters:
                nxt = next(iters[-1], None)
                if nxt is None:
                    color[path.pop()] = black
                    iters.pop()
                    continue
                state = color.get(nxt, black)  # unknown tasks have no outgoing edges
                if state == grey:
                    start = path.index(nxt)
                    return path[start:] + [nxt]
                if state == white:
                    color[nxt] = grey
                    path.append(nxt)
                    iters.append(iter(self._forward.get(nxt, ())))
        return None
