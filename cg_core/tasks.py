"""Async task runner: one unit of remote work, resolved exactly once."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Union

import structlog

from cg_common.errors import CGError, error_to_payload
from cg_core.messages import TaskFailed, TaskMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Busy:
    pass


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Failure:
    error: str
    error_type: str = "RemoteError"


TaskOutcome = Union[Busy, Success, Failure]

Deliver = Callable[[TaskMessage], None]


@dataclass(frozen=True)
class TaskSpec:
    """What to run: ``work`` returns the tagged message for a successful run."""

    task_id: int
    label: str
    busy_message: str
    work: Callable[[], TaskMessage]


class Task:
    """Handle on a started unit of work."""

    def __init__(self, spec: TaskSpec) -> None:
        self.spec = spec
        self._outcome: TaskOutcome = Busy()
        self._lock = threading.Lock()
        self._resolved = False
        self._done = threading.Event()

    @property
    def task_id(self) -> int:
        return self.spec.task_id

    @property
    def outcome(self) -> TaskOutcome:
        with self._lock:
            return self._outcome

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)

    def resolve(self, message: TaskMessage) -> bool:
        """Record the outcome carried by ``message``; later calls are ignored."""
        with self._lock:
            if self._resolved:
                return False
            if isinstance(message, TaskFailed):
                self._outcome = Failure(message.error, message.error_type)
            else:
                self._outcome = Success(message)
            self._resolved = True
        return True

    def finish(self) -> None:
        """Wake waiters once the result has been handed to the loop."""
        self._done.set()


def execute(spec: TaskSpec) -> TaskMessage:
    """Run ``spec.work`` and turn any exception into a ``TaskFailed`` message."""
    try:
        message = spec.work()
    except CGError as exc:
        with structlog.contextvars.bound_contextvars(**error_to_payload(exc)):
            logger.warning("Task %s failed: %s", spec.label, exc)
        return TaskFailed(spec.task_id, str(exc), exc.error_type)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Task %s crashed", spec.label)
        return TaskFailed(spec.task_id, str(exc) or type(exc).__name__, type(exc).__name__)
    logger.debug("Task %s finished", spec.label)
    return message


class TaskRunner(Protocol):
    def run(self, spec: TaskSpec, deliver: Deliver) -> Task: ...

    def shutdown(self) -> None: ...


def _complete(task: Task, spec: TaskSpec, deliver: Deliver) -> None:
    with structlog.contextvars.bound_contextvars(task_id=spec.task_id, task=spec.label):
        message = execute(spec)
    try:
        if task.resolve(message):
            deliver(message)
    finally:
        task.finish()


class ThreadedTaskRunner:
    """Runs each task on its own daemon thread; the caller's loop is never blocked.

    An abandoned task keeps running until its remote call returns, but it
    holds up neither the next task nor interpreter exit.
    """

    def __init__(self) -> None:
        self._threads: list[threading.Thread] = []

    def run(self, spec: TaskSpec, deliver: Deliver) -> Task:
        task = Task(spec)
        logger.debug("Starting task %s (id=%s)", spec.label, spec.task_id)
        thread = threading.Thread(
            target=_complete,
            args=(task, spec, deliver),
            name=f"cg-task-{spec.task_id}",
            daemon=True,
        )
        self._threads = [t for t in self._threads if t.is_alive()]
        self._threads.append(thread)
        thread.start()
        return task

    def shutdown(self) -> None:
        running = [t.name for t in self._threads if t.is_alive()]
        if running:
            logger.debug("Leaving %d task thread(s) behind: %s", len(running), running)
        self._threads = []


class InlineTaskRunner:
    """Runs work synchronously on the caller's thread (headless driver, tests)."""

    def run(self, spec: TaskSpec, deliver: Deliver) -> Task:
        task = Task(spec)
        _complete(task, spec, deliver)
        return task

    def shutdown(self) -> None:
        return None