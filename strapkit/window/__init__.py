# strapkit/window/__init__.py
"""
Desktop preview of a form.

PySide6 is only imported once a preview is actually opened, so rendering and
the tests never need Qt.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core import Form


def preview(form: "Form", width: int = 1024, height: int = 768, debug: bool = False) -> int:
    """Open `form` in a web view window and run the Qt event loop until it closes."""
    from .webwidget import run_preview

    return run_preview(form, width=width, height=height, debug=debug)
