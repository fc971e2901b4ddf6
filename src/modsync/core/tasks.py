"""
Task graph.

A minimal stand-in for a build tool's task scheduler: named tasks, an
explicit "runs after" relation, and execution of a task together with
everything it depends on, in dependency order, each task once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import networkx as nx

from .errors import TaskError

logger = logging.getLogger(__name__)

COLLECT_TASK = "collectMods"
RUN_TASK = "run"


@dataclass
class Task:
    """A named unit of work."""

    name: str
    action: Callable[[], Any]
    description: str = ""


class TaskGraph:
    """
    Directed graph of tasks; an edge points from a prerequisite to its dependent.

    Example:
        ```python
        tasks = TaskGraph()
        tasks.register("collectMods", collector.resolve_and_materialize)
        tasks.register("run", launch)
        tasks.depends_on("run", "collectMods")
        tasks.execute("run")
        ```
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    def register(self, name: str, action: Callable[[], Any], description: str = "") -> Task:
        if name in self._graph:
            raise TaskError(f"Task '{name}' is already registered")
        task = Task(name=name, action=action, description=description)
        self._graph.add_node(name, task=task)
        return task

    def get(self, name: str) -> Task:
        if name not in self._graph:
            raise TaskError(f"Unknown task '{name}'")
        return self._graph.nodes[name]["task"]

    def has(self, name: str) -> bool:
        return name in self._graph

    def depends_on(self, name: str, prerequisite: str) -> None:
        """Make ``name`` run after ``prerequisite``."""
        self.get(name)
        self.get(prerequisite)
        self._graph.add_edge(prerequisite, name)
        if not nx.is_directed_acyclic_graph(self._graph):
            self._graph.remove_edge(prerequisite, name)
            raise TaskError(f"Task '{name}' depending on '{prerequisite}' would create a cycle")

    def prerequisites(self, name: str) -> List[str]:
        self.get(name)
        return sorted(self._graph.predecessors(name))

    def execution_order(self, name: str) -> List[str]:
        """The task and everything it depends on, prerequisites first."""
        self.get(name)
        needed = nx.ancestors(self._graph, name) | {name}
        return list(nx.lexicographical_topological_sort(self._graph.subgraph(needed)))

    def execute(self, name: str) -> Dict[str, Any]:
        """
        Run ``name`` and its prerequisites.

        Returns:
            Result of every executed task, keyed by task name.
        """
        results: Dict[str, Any] = {}
        for task_name in self.execution_order(name):
            task = self.get(task_name)
            logger.info(f"> Task :{task_name}")
            results[task_name] = task.action()
        return results

    def __iter__(self):
        return (self._graph.nodes[n]["task"] for n in self._graph.nodes)
