"""Full-screen prompt_toolkit application driving a ``WizardSession``."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame
from rich.console import Console

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
from cg_ui.tui import theme
from cg_ui.tui.render import DEFAULT_TABLE_HEIGHT, capture, render

logger = logging.getLogger(__name__)

APP_TITLE = "cloudgate"
REFRESH_INTERVAL = 0.1


class WizardApp:
    """Translates key presses into wizard events and repaints after each one.

    Task results arrive on worker threads; they are handed to the prompt_toolkit
    loop with ``call_soon_threadsafe`` and folded in there, so the session only
    ever sees one event at a time.
    """

    def __init__(
        self,
        session: WizardSession,
        *,
        table_height: int = DEFAULT_TABLE_HEIGHT,
        console: Console | None = None,
    ) -> None:
        self._session = session
        self._table_height = table_height
        self._console = console or Console(force_terminal=True)
        self._started = time.monotonic()
        self._control = FormattedTextControl(self._render, focusable=True)
        self._app: Application[None] = Application(
            layout=Layout(HSplit([Frame(Window(self._control), title=APP_TITLE)])),
            key_bindings=self._bindings(),
            style=Style.from_dict(theme.prompt_toolkit_wizard_style()),
            full_screen=True,
            refresh_interval=REFRESH_INTERVAL,
        )

    @property
    def session(self) -> WizardSession:
        return self._session

    def run(self) -> None:
        try:
            self._app.run(pre_run=self._attach_loop)
        finally:
            self._session.set_wakeup(None)
            self._session.close()

    def _attach_loop(self) -> None:
        loop = asyncio.get_running_loop()
        self._session.set_wakeup(lambda: loop.call_soon_threadsafe(self._drain))

    def _drain(self) -> None:
        if self._session.process_pending():
            self._app.invalidate()

    def _render(self) -> ANSI:
        columns = self._app.output.get_size().columns
        self._console.width = max(columns - 2, 40)
        renderable = render(
            self._session.state,
            table_height=self._table_height,
            spinner_time=time.monotonic() - self._started,
        )
        return ANSI(capture(self._console, renderable))

    def _dispatch(self, event: Event) -> None:
        state = self._session.dispatch(event)
        if state.quit_requested:
            self._exit()
            return
        self._app.invalidate()

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()
        manual = Condition(lambda: self._session.state.manual)

        @kb.add("up")
        @kb.add("k", filter=~manual)
        def _(event: Any) -> None:
            self._dispatch(NavigateUp())

        @kb.add("down")
        @kb.add("j", filter=~manual)
        def _(event: Any) -> None:
            self._dispatch(NavigateDown())

        @kb.add("enter")
        def _(event: Any) -> None:
            self._dispatch(Confirm())

        @kb.add("escape", eager=True)
        @kb.add("-", filter=~manual)
        def _(event: Any) -> None:
            self._dispatch(Cancel())

        @kb.add("tab")
        def _(event: Any) -> None:
            self._dispatch(ToggleMode())

        @kb.add("backspace", filter=manual)
        def _(event: Any) -> None:
            self._dispatch(Erase())

        @kb.add("q", filter=~manual)
        @kb.add("c-c")
        def _(event: Any) -> None:
            self._dispatch(Quit())

        @kb.add("<any>", filter=manual)
        def _(event: Any) -> None:
            if event.data and event.data.isprintable():
                self._dispatch(Character(event.data))

        return kb

    def _exit(self) -> None:
        future = self._app.future
        if future is not None and not future.done():
            self._app.exit()
