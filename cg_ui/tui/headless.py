"""Scripted, non-interactive driver for a ``WizardSession``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from cg_common.errors import ConfigurationError, UIFlowError
from cg_core import presentation
from cg_core.messages import (
    Cancel,
    Character,
    Confirm,
    Erase,
    Event,
    NavigateDown,
    NavigateUp,
    Quit,
    ToggleMode,
)
from cg_core.session import WizardSession
from cg_core.state import WizardState
from cg_ui.tui.render import DEFAULT_TABLE_HEIGHT, render_plain

KEY_EVENTS: dict[str, type] = {
    "up": NavigateUp,
    "down": NavigateDown,
    "confirm": Confirm,
    "cancel": Cancel,
    "toggle": ToggleMode,
    "erase": Erase,
    "quit": Quit,
}


@dataclass(frozen=True)
class ScriptStep:
    action: str
    value: str


def parse_script(data: Any) -> list[ScriptStep]:
    """Validate a script loaded from YAML: a list of one-key mappings.

    Supported steps are ``pick: <row label>``, ``type: <text>`` and
    ``key: <up|down|confirm|cancel|toggle|erase|quit>``.
    """
    if not isinstance(data, list):
        raise ConfigurationError("Script must be a list of steps")
    steps: list[ScriptStep] = []
    for idx, raw in enumerate(data):
        if not isinstance(raw, Mapping) or len(raw) != 1:
            raise ConfigurationError(
                "Each script step must be a mapping with exactly one key",
                context={"step": idx},
            )
        action, value = next(iter(raw.items()))
        if action not in ("pick", "type", "key"):
            raise ConfigurationError(
                f"Unknown script action '{action}'", context={"step": idx}
            )
        if action == "key" and value not in KEY_EVENTS:
            raise ConfigurationError(f"Unknown key '{value}'", context={"step": idx})
        steps.append(ScriptStep(str(action), "" if value is None else str(value)))
    return steps


@dataclass
class HeadlessWizard:
    session: WizardSession
    width: int = 100
    table_height: int = DEFAULT_TABLE_HEIGHT
    recorded_screens: list[str] = field(default_factory=list)
    recorded_events: list[Event] = field(default_factory=list)

    @property
    def state(self) -> WizardState:
        return self.session.state

    def snapshot(self) -> str:
        return render_plain(self.state, width=self.width, table_height=self.table_height)

    def send(self, event: Event) -> WizardState:
        """Dispatch one event and wait for any task it started."""
        self.recorded_events.append(event)
        self.session.dispatch(event)
        self.session.wait_idle()
        self.recorded_screens.append(self.snapshot())
        return self.state

    def feed(self, events: Iterable[Event]) -> WizardState:
        for event in events:
            self.send(event)
            if self.state.quit_requested:
                break
        return self.state

    def pick(self, label: str) -> WizardState:
        """Move the cursor onto the row titled ``label`` and confirm it."""
        entries = presentation.choices(self.state.screen, self.state)
        labels = [entry.label for entry in entries]
        if label not in labels:
            raise UIFlowError(
                f"'{label}' is not offered on {self.state.screen.value}: {labels}"
            )
        target = labels.index(label)
        step = NavigateDown() if target > self.state.cursor else NavigateUp()
        for _ in range(abs(target - self.state.cursor)):
            self.send(step)
        return self.send(Confirm())

    def type_text(self, text: str) -> WizardState:
        """Enter manual mode if needed, type ``text`` and submit it."""
        if not self.state.manual:
            self.send(ToggleMode())
        return self.feed([*(Character(ch) for ch in text), Confirm()])

    def run_script(self, steps: Sequence[ScriptStep]) -> WizardState:
        for step in steps:
            if step.action == "pick":
                self.pick(step.value)
            elif step.action == "type":
                self.type_text(step.value)
            else:
                self.send(KEY_EVENTS[step.value]())
            if self.state.quit_requested:
                break
        return self.state
