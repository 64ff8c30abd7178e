# strapkit/actions.py
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from . import markup
from .events import ActionParams, Click, EventBase
from .js import PRIORITY_HIGH, ClientCommand, JsClosure, to_js

if TYPE_CHECKING:
    from .base import Control
    from .core import Form

logger = logging.getLogger(__name__)


class ActionBase:
    """
    Something that happens when an event fires.

    :param causes_validation: False, True (validate the whole form) or a
        control (validate only that control and its children) before running.
    """
    is_server_side = True
    is_ajax = True

    def __init__(self, causes_validation: Union[bool, "Control"] = False):
        self.causes_validation = causes_validation

    def client_script(self, target_id: str, event: EventBase) -> str:
        """The javascript body run by the client binding."""
        mode = "ajax" if self.is_ajax else "server"
        data = event.js_return_param or "null"
        return (
            f"strapkit.fire({to_js(target_id)}, {to_js(event.event_name)}, "
            f"jQuery(this).data('sk-param'), {data}, {to_js(mode)});"
        )

    def execute(self, form: "Form", target: Any, params: ActionParams) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")


class _FormMethodAction(ActionBase):
    def __init__(self, method_name: str, causes_validation: Union[bool, "Control"] = False):
        super().__init__(causes_validation)
        self.method_name = method_name

    def execute(self, form, target, params):
        handler = getattr(form, self.method_name, None)
        if not callable(handler):
            raise AttributeError(f"{type(form).__name__} has no action handler {self.method_name!r}")
        handler(params)

    def __repr__(self):
        return f"{type(self).__name__}({self.method_name!r})"


class ServerAction(_FormMethodAction):
    """Calls a form method through a full page round trip."""
    is_ajax = False


class AjaxAction(_FormMethodAction):
    """Calls a form method through an AJAX round trip."""
    is_ajax = True


class AjaxControl(ActionBase):
    """Calls a method on a specific control (or proxy owner) through AJAX."""

    def __init__(self, control: Any, method_name: str, causes_validation: Union[bool, "Control"] = False):
        super().__init__(causes_validation)
        self.control = control
        self.method_name = method_name

    def execute(self, form, target, params):
        handler = getattr(self.control, self.method_name, None)
        if not callable(handler):
            raise AttributeError(f"{type(self.control).__name__} has no action handler {self.method_name!r}")
        handler(params)

    def __repr__(self):
        return f"AjaxControl({getattr(self.control, 'control_id', self.control)!r}, {self.method_name!r})"


class JavaScriptAction(ActionBase):
    """A purely client-side action; the server never sees the event."""
    is_server_side = False

    def __init__(self, script: str):
        super().__init__(False)
        self.script = script

    def client_script(self, target_id: str, event: EventBase) -> str:
        return self.script

    def execute(self, form, target, params):
        pass


def binding_command(form_id: str, selector: str, event: EventBase, actions: List[ActionBase],
                    target_id: str) -> ClientCommand:
    """
    Build the delegated client binding for one event.

    Bindings hang off the form element, so they survive the target being
    replaced by a patch and only ever need to be sent once.
    """
    body = "".join(a.client_script(target_id, event) for a in actions if not a.is_server_side)
    server_actions = [a for a in actions if a.is_server_side]
    if server_actions:
        body += server_actions[0].client_script(target_id, event)
    if event.condition:
        body = f"if ({event.condition}) {{{body}}}"
    if event.delay:
        body = f"var self = this; setTimeout(function() {{ (function() {{{body}}}).call(self); }}, {int(event.delay)});"
    if event.event_name == "click":
        body = "event.preventDefault();" + body
    full_selector = selector if not event.selector else f"{selector} {event.selector}"
    return ClientCommand(
        method="on",
        args=[event.event_name, full_selector, JsClosure(body, ["event", "ui"])],
        selector=f"#{form_id}",
        priority=PRIORITY_HIGH,
    )


class ActionHolder:
    """Bookkeeping shared by controls and proxies: event name -> bound actions."""

    def _init_actions(self):
        self._actions: Dict[str, List[Tuple[EventBase, ActionBase]]] = {}

    def get_actions(self, event_name: str) -> List[Tuple[EventBase, ActionBase]]:
        return list(self._actions.get(event_name, []))

    def has_actions(self) -> bool:
        return any(self._actions.values())

    def _register_action(self, event: EventBase, action: ActionBase) -> bool:
        """Store the pair; returns True when this is the first action for the event."""
        bucket = self._actions.setdefault(event.event_name, [])
        bucket.append((event, action))
        return len(bucket) == 1

    def _forget_actions(self, event_name: Optional[str] = None) -> List[str]:
        if event_name is None:
            names = list(self._actions)
            self._actions.clear()
            return names
        if self._actions.pop(event_name, None) is not None:
            return [event_name]
        return []


class Proxy(ActionHolder):
    """
    Attaches click/AJAX actions to rendered elements that are not controls.

    A list group or pager draws many links but owns a single proxy; each link
    carries the proxy id and its own parameter, and a click fires the proxy's
    actions with that parameter.

    :param parent: The control that draws the proxy's links.
    """

    def __init__(self, parent: "Control", proxy_id: Optional[str] = None):
        self._init_actions()
        self.parent = parent
        self.form = parent.form
        parent._proxy_count = getattr(parent, "_proxy_count", 0) + 1
        self.proxy_id = proxy_id or f"{parent.control_id}_proxy_{parent._proxy_count}"
        self.form.register_proxy(self)

    @property
    def control_id(self) -> str:
        return self.proxy_id

    @property
    def action_parameter(self) -> Any:
        return None

    def add_action(self, event: EventBase, action: ActionBase) -> None:
        # before the first page render the form sends every proxy binding itself
        if self._register_action(event, action) and self.form.rendered:
            self.form.add_command(self._binding(event))

    def send_bindings(self) -> None:
        for pairs in self._actions.values():
            if pairs:
                self.form.add_command(self._binding(pairs[0][0]))

    def _binding(self, event: EventBase) -> ClientCommand:
        actions = [a for _, a in self._actions[event.event_name]]
        return binding_command(self.form.form_id, f'[data-sk-proxy="{self.proxy_id}"]', event, actions,
                               self.proxy_id)

    def render_as_link(self, label: str, param: Any, attributes: Optional[Dict[str, Any]] = None,
                       tag: str = "a", escape: bool = True) -> str:
        """
        Render an element that fires this proxy's actions with `param`.

        :param label: Inner text or html of the element.
        :param param: Action parameter delivered with the event.
        :param attributes: Extra attributes; ``class`` and ``id`` are honored.
        :param tag: Tag name, ``a`` by default.
        :param escape: Escape the label (pass False for ready-made html).
        """
        attrs: Dict[str, Any] = {}
        if tag == "a":
            attrs["href"] = "#"
        attrs.update(attributes or {})
        attrs["data-sk-proxy"] = self.proxy_id
        attrs["data-sk-param"] = "" if param is None else str(param)
        inner = markup.escape(label) if escape else label
        return markup.render_tag(tag, attrs, inner, no_space=True)

    def render_as_href(self, param: Any) -> str:
        return f"javascript:strapkit.fire({to_js(self.proxy_id)}, 'click', {to_js(param)}, null, 'ajax');"

    def __repr__(self):
        return f"Proxy({self.proxy_id!r})"


def click_proxy(parent: "Control", action: ActionBase) -> Proxy:
    """Shorthand for the common case: a proxy whose links run one click action."""
    proxy = Proxy(parent)
    proxy.add_action(Click(), action)
    return proxy
