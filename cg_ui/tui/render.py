"""Rich rendering of a wizard state: title, context, busy line, table or input, help."""

from __future__ import annotations

from rich import box
from rich.console import Console, Group, RenderableType
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from cg_core import presentation
from cg_core.screens import ScreenId
from cg_core.state import WizardState
from cg_ui.tui import theme

DEFAULT_TABLE_HEIGHT = 10
EMPTY_CAPTION = "No items found"


def visible_window(cursor: int, total: int, height: int) -> tuple[int, int]:
    """Slice of rows to show so that the cursor stays on screen."""
    if total <= height:
        return 0, total
    start = min(max(cursor - height // 2, 0), total - height)
    return start, start + height


def _cell(value: str, header: str) -> Text:
    if header == "Status":
        return Text(value, style=theme.status_style(value))
    return Text(value)


def build_table(state: WizardState, *, table_height: int = DEFAULT_TABLE_HEIGHT) -> Table:
    screen = state.screen
    columns = presentation.columns(screen, state)
    rows = presentation.rows(screen, state)
    entries = presentation.choices(screen, state)

    table = Table(
        box=box.ROUNDED,
        border_style=theme.RICH_BORDER_STYLE,
        header_style=theme.RICH_ACCENT_BOLD,
        expand=True,
    )
    for column in columns:
        table.add_column(column.header, ratio=column.ratio, no_wrap=True, overflow="ellipsis")
    if not rows:
        table.caption = EMPTY_CAPTION
        return table

    cursor = state.cursor if entries else 0
    start, end = visible_window(cursor, len(rows), table_height)
    headers = [column.header for column in columns]
    for idx in range(start, end):
        style = None
        if entries and idx == state.cursor:
            style = theme.RICH_CURSOR_STYLE
        elif entries and entries[idx].manual:
            style = theme.RICH_SENTINEL_STYLE
        cells = [_cell(value, header) for value, header in zip(rows[idx], headers)]
        table.add_row(*cells, style=style)
    return table


def build_input(state: WizardState) -> Text:
    line = Text("> ", style=theme.RICH_ACCENT_BOLD)
    if state.buffer:
        line.append(state.buffer)
        line.append("█")
    else:
        line.append("█")
        line.append(presentation.input_placeholder(state), style=theme.RICH_PLACEHOLDER_STYLE)
    return line


def render(
    state: WizardState,
    *,
    table_height: int = DEFAULT_TABLE_HEIGHT,
    spinner_time: float = 0.0,
) -> RenderableType:
    help_line = Text(presentation.help_text(state), style=theme.RICH_HELP_STYLE)
    if state.screen is ScreenId.ERROR:
        return Group(Text.from_markup(theme.error_line(state.error or "")), Text(""), help_line)

    parts: list[RenderableType] = [
        Text(presentation.title(state), style=theme.RICH_ACCENT_BOLD),
    ]
    context = presentation.context_lines(state)
    if context:
        parts.append(Text("\n".join(context), style=theme.RICH_CONTEXT_STYLE))
    parts.append(Text(""))

    if state.busy:
        parts.append(Spinner(theme.SPINNER_NAME, text=state.busy_message).render(spinner_time))
    elif state.manual:
        parts.append(build_input(state))
    else:
        parts.append(build_table(state, table_height=table_height))

    if state.notice:
        parts.append(Text.from_markup(theme.presenter_message("warning", state.notice)))
    if state.banner:
        parts.append(Text.from_markup(theme.presenter_message("success", state.banner)))
    parts.append(help_line)
    return Group(*parts)


def capture(console: Console, renderable: RenderableType) -> str:
    with console.capture() as cap:
        console.print(renderable)
    return cap.get()


def render_plain(
    state: WizardState, *, width: int = 100, table_height: int = DEFAULT_TABLE_HEIGHT
) -> str:
    """Render without colour codes; used by the headless driver and in logs."""
    console = Console(width=width, color_system=None, force_terminal=False)
    return capture(console, render(state, table_height=table_height))
