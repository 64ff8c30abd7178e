# strapkit/events.py

from dataclasses import dataclass
from typing import Any, Optional


class EventBase:
    """
    A client-side event an action can be bound to.

    :param delay: Milliseconds the client waits before firing.
    :param condition: Optional javascript expression that must be truthy to fire.
    :param selector: Optional delegated selector inside the control.
    """
    event_name: str = ""
    js_return_param: Optional[str] = None

    def __init__(self, delay: int = 0, condition: Optional[str] = None, selector: Optional[str] = None):
        if not self.event_name:
            raise ValueError(f"{type(self).__name__} must define event_name")
        self.delay = delay
        self.condition = condition
        self.selector = selector

    def __repr__(self):
        return f"{type(self).__name__}(event_name={self.event_name!r})"


class Click(EventBase):
    event_name = "click"


class Change(EventBase):
    event_name = "change"


class CarouselSelect(EventBase):
    event_name = "bscarousselect"
    js_return_param = "ui"


class DropdownSelect(EventBase):
    event_name = "bsdropdownselect"
    js_return_param = "ui"


class NavbarSelect(EventBase):
    event_name = "bsmenubarselect"
    js_return_param = "ui"


class ModalHidden(EventBase):
    event_name = "hidden.bs.modal"


class ModalShown(EventBase):
    event_name = "shown.bs.modal"


class AlertClosed(EventBase):
    event_name = "closed.bs.alert"


class DialogButton(EventBase):
    """Fired by a modal when one of its built-in buttons is clicked; the param is the button id."""
    event_name = "bsdialogbutton"
    js_return_param = "ui"


class TabShown(EventBase):
    event_name = "shown.bs.tab"


@dataclass
class ActionParams:
    """Details handed to every server-side action handler."""
    form_id: str
    control_id: str
    event_name: str
    param: Any = None  # The action parameter (control's or proxy item's)
    event_data: Any = None  # What the client returned for the event's js_return_param
