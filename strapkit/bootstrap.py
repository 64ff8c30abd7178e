# strapkit/bootstrap.py
"""Bootstrap 3 class names and small helpers shared by the widgets."""

from typing import TYPE_CHECKING, Union

from .config import get_config

if TYPE_CHECKING:
    from .base import Control
    from .core import Form

# --- Buttons ---
BUTTON_DEFAULT = "btn-default"
BUTTON_PRIMARY = "btn-primary"
BUTTON_SUCCESS = "btn-success"
BUTTON_INFO = "btn-info"
BUTTON_WARNING = "btn-warning"
BUTTON_DANGER = "btn-danger"
BUTTON_LINK = "btn-link"

BUTTON_LARGE = "btn-lg"
BUTTON_MEDIUM = ""
BUTTON_SMALL = "btn-sm"
BUTTON_EXTRA_SMALL = "btn-xs"

# --- Navbar / layout ---
NAVBAR_DEFAULT = "navbar-default"
NAVBAR_INVERSE = "navbar-inverse"

CONTAINER = "container"
CONTAINER_FLUID = "container-fluid"

# --- Forms ---
FORM_CONTROL = "form-control"
FORM_GROUP = "form-group"
FORM_HORIZONTAL = "form-horizontal"
CONTROL_LABEL = "control-label"
HELP_BLOCK = "help-block"
HAS_ERROR = "has-error"
HAS_WARNING = "has-warning"
HAS_SUCCESS = "has-success"
HIDDEN = "hidden"
CHECKBOX_INLINE = "checkbox-inline"
RADIO_INLINE = "radio-inline"

INPUT_GROUP_LARGE = "input-group-lg"
INPUT_GROUP_MEDIUM = ""
INPUT_GROUP_SMALL = "input-group-sm"

# --- Panels / alerts ---
PANEL_GROUP = "panel-group"
PANEL_DEFAULT = "panel-default"
PANEL_PRIMARY = "panel-primary"
PANEL_SUCCESS = "panel-success"
PANEL_INFO = "panel-info"
PANEL_WARNING = "panel-warning"
PANEL_DANGER = "panel-danger"

ALERT_SUCCESS = "alert-success"
ALERT_INFO = "alert-info"
ALERT_WARNING = "alert-warning"
ALERT_DANGER = "alert-danger"
ALERT_DISMISSABLE = "alert-dismissable"

BACKGROUND_PRIMARY = "bg-primary"
BACKGROUND_SUCCESS = "bg-success"
BACKGROUND_INFO = "bg-info"
BACKGROUND_WARNING = "bg-warning"
BACKGROUND_DANGER = "bg-danger"

# --- Grid ---
EXTRA_SMALL = "xs"
SMALL = "sm"
MEDIUM = "md"
LARGE = "lg"

GRID_COLUMNS = 12


def create_column_class(device_size: str, columns: int = 0, offset: int = 0, push: int = 0) -> str:
    """
    Build grid classes for one device size, e.g. ``col-sm-4 col-sm-offset-2``.

    Zero values are left out, so ``create_column_class('md', 0, 3)`` only yields
    the offset class.
    """
    classes = []
    if columns:
        classes.append(f"col-{device_size}-{columns}")
    if offset:
        classes.append(f"col-{device_size}-offset-{offset}")
    if push:
        classes.append(f"col-{device_size}-push-{push}")
    return " ".join(classes)


def remove_column_classes(classes: str, device_size: str = "") -> str:
    """Remove every ``col-<device_size>...`` class from a class string."""
    prefix = f"col-{device_size}"
    return " ".join(c for c in (classes or "").split(" ") if c and not c.startswith(prefix))


def load_js(target: Union["Control", "Form"]) -> None:
    """Register the jQuery and Bootstrap script includes on the form that owns `target`."""
    form = getattr(target, "form", target)
    cfg = get_config()
    for key in ("assets.jquery_js", "assets.bootstrap_js"):
        url = cfg.get_nested(key)
        if url:
            form.add_javascript_file(url)


def load_css(target: Union["Control", "Form"]) -> None:
    """Register the Bootstrap stylesheet (and optional theme) on the owning form."""
    form = getattr(target, "form", target)
    cfg = get_config()
    for key in ("assets.bootstrap_css", "assets.bootstrap_theme_css"):
        url = cfg.get_nested(key)
        if url:
            form.add_css_file(url)
