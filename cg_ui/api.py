"""Stable UI API surface."""

from __future__ import annotations

from cg_ui.cli import app, ctx_store, main
from cg_ui.tui.headless import HeadlessWizard, ScriptStep, parse_script
from cg_ui.tui.render import render, render_plain
from cg_ui.wiring.dependencies import UIContext

__all__ = [
    "app",
    "main",
    "ctx_store",
    "HeadlessWizard",
    "ScriptStep",
    "UIContext",
    "parse_script",
    "render",
    "render_plain",
]
