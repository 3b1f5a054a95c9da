"""Event loop glue: one state value, one inbox, one task runner."""

from __future__ import annotations

import logging
import queue
from typing import Callable

from cg_core.messages import Event, TaskMessage
from cg_core.protocols import ProviderDirectory
from cg_core.state import Transition, WizardState, initial_state
from cg_core.tasks import InlineTaskRunner, Task, TaskRunner
from cg_core.update import update

logger = logging.getLogger(__name__)


class WizardSession:
    """Owns the current ``WizardState`` and feeds it events one at a time.

    Task results are posted from whatever thread the runner uses and queued;
    ``process_pending`` folds them in on the loop thread, so keys and results
    form a single ordered stream.
    """

    def __init__(
        self,
        directory: ProviderDirectory,
        runner: TaskRunner | None = None,
        *,
        state: WizardState | None = None,
        wakeup: Callable[[], None] | None = None,
    ) -> None:
        self.directory = directory
        self.runner = runner or InlineTaskRunner()
        self.state = state or initial_state(directory.refs())
        self.current_task: Task | None = None
        self._inbox: queue.Queue[TaskMessage] = queue.Queue()
        self._wakeup = wakeup

    def set_wakeup(self, wakeup: Callable[[], None] | None) -> None:
        self._wakeup = wakeup

    @property
    def quit_requested(self) -> bool:
        return self.state.quit_requested

    def dispatch(self, event: Event) -> WizardState:
        self._apply(update(self.state, event, self.directory))
        return self.state

    def post(self, message: TaskMessage) -> None:
        """Thread-safe delivery of a task result."""
        self._inbox.put(message)
        if self._wakeup is not None:
            self._wakeup()

    def process_pending(self) -> int:
        """Fold every queued task result into the state; returns how many."""
        handled = 0
        while True:
            try:
                message = self._inbox.get_nowait()
            except queue.Empty:
                return handled
            self.dispatch(message)
            handled += 1

    def wait_idle(self, timeout: float | None = None) -> WizardState:
        """Block until the current task resolves, then drain the inbox."""
        if self.current_task is not None:
            self.current_task.wait(timeout)
        self.process_pending()
        return self.state

    def close(self) -> None:
        self.runner.shutdown()

    def _apply(self, transition: Transition) -> None:
        # Busy state is published before the task starts.
        self.state = transition.state
        if transition.task is not None:
            self.current_task = self.runner.run(transition.task, self.post)
        elif (
            self.current_task is not None
            and self.current_task.task_id != self.state.pending_task_id
        ):
            self.current_task = None
