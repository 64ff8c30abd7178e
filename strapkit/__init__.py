# strapkit/__init__.py

"""
strapkit: server-rendered Bootstrap 3 widgets.

Widgets render Bootstrap markup from a property bag, record which property
writes changed their markup, and let a `Form` answer client events with
either a full page or a minimal patch script.
"""

import logging
import sys
from typing import Optional, Union

# --- Host ---
from .config import Config, get_config
from .core import Form
from .reconciler import Patch, Reconciler, ReconciliationResult

# --- Errors ---
from .exceptions import CallerError, ControlNotFoundError, InvalidCastError, StrapkitError

# --- Events and actions ---
from .events import (
    ActionParams, AlertClosed, CarouselSelect, Change, Click, DialogButton,
    DropdownSelect, EventBase, ModalHidden, ModalShown, NavbarSelect, TabShown,
)
from .actions import AjaxAction, AjaxControl, JavaScriptAction, Proxy, ServerAction
from .js import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_STANDARD, ClientCommand, JsClosure

# --- Widgets ---
from .base import BootstrapControl, ClassChoice, ClassToggle, Control
from .lists import DataRepeater, HList, ListControl, ListItem, Paginator, RadioButtonList
from .widgets import (
    Alert, Button, Checkbox, HorizontalForm, Label, Modal, Panel, RadioList, TextBox,
)
from .widgets_more import (
    Accordion, Carousel, CarouselItem, Dropdown, DropdownDivider, DropdownHeader,
    DropdownItem, ListGroup, Navbar, NavbarDropdown, NavbarItem, NavbarList, Pager, Tabs,
)
from . import bootstrap

__all__ = [
    # --- Host ---
    'Form', 'Config', 'get_config', 'Reconciler', 'ReconciliationResult', 'Patch',
    'configure_logging',
    # --- Errors ---
    'StrapkitError', 'CallerError', 'InvalidCastError', 'ControlNotFoundError',
    # --- Events / actions ---
    'EventBase', 'Click', 'Change', 'CarouselSelect', 'DropdownSelect', 'NavbarSelect',
    'ModalHidden', 'ModalShown', 'AlertClosed', 'DialogButton', 'TabShown', 'ActionParams',
    'ServerAction', 'AjaxAction', 'AjaxControl', 'JavaScriptAction', 'Proxy',
    'ClientCommand', 'JsClosure', 'PRIORITY_HIGH', 'PRIORITY_STANDARD', 'PRIORITY_LOW',
    # --- Widgets ---
    'Control', 'BootstrapControl', 'ClassToggle', 'ClassChoice',
    'HList', 'ListItem', 'DataRepeater', 'Paginator', 'ListControl', 'RadioButtonList',
    'Panel', 'Button', 'Alert', 'Label', 'TextBox', 'Checkbox', 'RadioList',
    'HorizontalForm', 'Modal',
    'Navbar', 'NavbarItem', 'NavbarDropdown', 'NavbarList',
    'Dropdown', 'DropdownItem', 'DropdownHeader', 'DropdownDivider',
    'Carousel', 'CarouselItem', 'Accordion', 'ListGroup', 'Pager', 'Tabs',
    'bootstrap',
]

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Install a single stream handler on the ``strapkit`` logger.

    :param level: Logging level; defaults to ``logging.level`` from the config.
    """
    if level is None:
        level = get_config().get_nested("logging.level", "WARNING")
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("strapkit")
    for handler in list(logger.handlers):
        if getattr(handler, "_strapkit_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._strapkit_handler = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


# --- Package Version ---
__version__ = "0.1.0"
