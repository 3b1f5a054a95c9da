"""
Terminal front ends: the prompt_toolkit application and the headless driver.
"""

from cg_ui.tui.headless import HeadlessWizard
from cg_ui.tui.render import render, render_plain

__all__ = ["HeadlessWizard", "render", "render_plain"]
