# strapkit/core.py
import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from . import bootstrap as bs
from .actions import Proxy
from .base import Control
from .client import CLIENT_SCRIPT
from .config import get_config
from .events import ActionParams
from .exceptions import CallerError, ControlNotFoundError
from .js import PRIORITY_STANDARD, ClientCommand, sort_commands, to_js
from .markup import escape, render_tag
from .reconciler import NodeData, Reconciler, ReconciliationResult, build_render_map

logger = logging.getLogger(__name__)

_FORM_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class Form:
    """
    The page that owns a control tree.

    A form generates control ids, keeps the client command queue and the
    asset includes, dispatches client events to the bound actions, and either
    renders the whole page (`render`, `handle_postback`) or asks the
    `Reconciler` for a minimal update (`handle_ajax`).

    Subclasses build their controls in `form_create`::

        class HelloForm(Form):
            def form_create(self):
                self.btn = Button(self)
                self.btn.text = "Hello"
                self.btn.add_action(Click(), AjaxAction("btn_click"))

            def btn_click(self, params):
                self.btn.text = "Clicked"

        page = HelloForm.run().render()
    """

    def __init__(self, form_id: str = "form", title: Optional[str] = None):
        if not _FORM_ID_RE.match(form_id):
            raise CallerError(f"Invalid form id {form_id!r}")
        cfg = get_config()
        self.form_id = form_id
        self.title = title if title is not None else cfg.get_nested("form.title", "strapkit")
        self._id_prefix = cfg.get_nested("form.id_prefix", "c")
        self._id_counter = 0
        self._controls: Dict[str, Control] = {}
        self._children: List[Control] = []
        self._proxies: Dict[str, Proxy] = {}
        self._commands: List[ClientCommand] = []
        self._css_files: List[str] = []
        self._js_files: List[str] = []
        self.rendered = False
        self.rendered_map: Dict[str, NodeData] = {}
        self.reconciler = Reconciler()
        # the page runtime needs jQuery whatever widgets are used
        bs.load_js(self)

    @property
    def form(self) -> "Form":
        return self

    @classmethod
    def run(cls, *args, **kwargs) -> "Form":
        """Instantiate the form and let it build its controls."""
        form = cls(*args, **kwargs)
        form.form_create()
        logger.debug("Created form %s with %d controls", form.form_id, len(form._controls))
        return form

    def form_create(self) -> None:
        """Build the controls; override in subclasses."""

    def form_validate(self) -> bool:
        """Form-wide checks run after control validation; override in subclasses."""
        return True

    # --- Control registry ---
    def generate_control_id(self) -> str:
        while True:
            self._id_counter += 1
            control_id = f"{self._id_prefix}{self._id_counter}"
            if control_id not in self._controls and control_id not in self._proxies:
                return control_id

    def add_control(self, control: Control) -> None:
        if control.control_id in self._controls or control.control_id in self._proxies \
                or control.control_id == self.form_id:
            raise CallerError(f"Duplicate control id {control.control_id!r}")
        self._controls[control.control_id] = control
        if control.parent is self:
            self._children.append(control)

    def register_proxy(self, proxy: Proxy) -> None:
        if proxy.proxy_id in self._controls or proxy.proxy_id in self._proxies:
            raise CallerError(f"Duplicate control id {proxy.proxy_id!r}")
        self._proxies[proxy.proxy_id] = proxy

    def has_control(self, control_id: str) -> bool:
        return control_id in self._controls

    def get_control(self, control_id: str) -> Control:
        try:
            return self._controls[control_id]
        except KeyError:
            raise ControlNotFoundError(control_id) from None

    def get_all_controls(self) -> List[Control]:
        return list(self._controls.values())

    def get_child_controls(self) -> List[Control]:
        return list(self._children)

    def remove_control(self, control_id: str) -> None:
        """Remove a control and all of its descendants."""
        control = self.get_control(control_id)
        doomed = [control] + control.get_child_controls(recursive=True)
        doomed_ids = {c.control_id for c in doomed}
        for victim in doomed:
            self._controls.pop(victim.control_id, None)
        for proxy_id in [p.proxy_id for p in self._proxies.values() if p.parent.control_id in doomed_ids]:
            del self._proxies[proxy_id]
        if control.parent is self:
            self._children = [c for c in self._children if c.control_id != control_id]
        else:
            control.parent.remove_child_control(control_id)
        logger.debug("Removed control %s (%d total)", control_id, len(doomed))

    # --- Client commands and assets ---
    def add_command(self, command: ClientCommand) -> None:
        self._commands.append(command)

    def pop_commands(self) -> List[ClientCommand]:
        commands, self._commands = self._commands, []
        return commands

    def execute_command(self, script: str, priority: int = PRIORITY_STANDARD) -> None:
        """Queue raw javascript."""
        self.add_command(ClientCommand(script=script, priority=priority))

    def execute_js_function(self, name: str, *args, priority: int = PRIORITY_STANDARD) -> None:
        self.add_command(ClientCommand(method=name, args=list(args), priority=priority))

    def execute_selector_function(self, selector: str, method: str, *args, priority: int = PRIORITY_STANDARD) -> None:
        self.add_command(ClientCommand(method=method, args=list(args), selector=selector, priority=priority))

    def add_css_file(self, url: str) -> None:
        if url and url not in self._css_files:
            self._css_files.append(url)

    def add_javascript_file(self, url: str) -> None:
        if url and url not in self._js_files:
            self._js_files.append(url)

    @property
    def css_files(self) -> List[str]:
        return list(self._css_files)

    @property
    def javascript_files(self) -> List[str]:
        return list(self._js_files)

    # --- Validation ---
    def reset_validation_states(self) -> None:
        for control in self.get_all_controls():
            control.validation_reset()

    def validate(self, controls: Optional[List[Control]] = None) -> bool:
        """
        Validate the given controls (all top-level controls by default) and their children.

        Every control is validated even after a failure, so all errors show at once.
        """
        self.reset_validation_states()
        whole_form = controls is None
        if whole_form:
            controls = self.get_child_controls()
        valid = True
        for control in controls:
            if not control.validate_control_and_children():
                valid = False
        if whole_form and not self.form_validate():
            valid = False
        return valid

    # --- Event handling ---
    def _apply_client_state(self, event: Mapping[str, Any]) -> None:
        for control_id, properties in (event.get("modifications") or {}).items():
            control = self._controls.get(control_id)
            if control is None:
                logger.warning("Modification for unknown control %s ignored", control_id)
                continue
            for name, value in properties.items():
                control.set_client_property(name, value)
        values = event.get("values") or {}
        for control in self.get_all_controls():
            control.parse_post_data(values)

    def _dispatch(self, event: Mapping[str, Any]) -> None:
        control_id = event.get("control_id")
        if not control_id:
            return
        event_name = event.get("event") or "click"
        target: Union[Control, Proxy, None] = self._controls.get(control_id) or self._proxies.get(control_id)
        if target is None:
            raise ControlNotFoundError(control_id)
        actions = target.get_actions(event_name)
        if not actions:
            logger.warning("No action bound to %s on %s", event_name, control_id)
            return

        param = target.action_parameter
        if param is None:
            param = event.get("param")
        params = ActionParams(self.form_id, control_id, event_name, param, event.get("event_data"))

        for _, action in actions:
            if not action.is_server_side:
                continue
            causes_validation = action.causes_validation or getattr(target, "causes_validation", False)
            if causes_validation is True and not self.validate():
                logger.debug("Validation failed; skipping %r on %s", action, control_id)
                continue
            if isinstance(causes_validation, Control) and not self.validate([causes_validation]):
                logger.debug("Validation of %s failed; skipping %r", causes_validation.control_id, action)
                continue
            logger.debug("Dispatching %s on %s to %r", event_name, control_id, action)
            action.execute(self, target, params)

    def handle_postback(self, event: Mapping[str, Any]) -> str:
        """Full page round trip: apply the event and render the whole page again."""
        self._apply_client_state(event)
        self._dispatch(event)
        return self.render()

    def handle_ajax(self, event: Mapping[str, Any]) -> ReconciliationResult:
        """AJAX round trip: apply the event and return only what changed."""
        self._apply_client_state(event)
        self._dispatch(event)
        return self.reconciler.reconcile(self, self.rendered_map)

    # --- Rendering ---
    def render_head(self) -> str:
        parts = [
            render_tag("meta", {"charset": "utf-8"}, is_void=True),
            render_tag("meta", {"name": "viewport", "content": "width=device-width, initial-scale=1"}, is_void=True),
            render_tag("title", None, escape(self.title), no_space=True),
        ]
        parts.extend(render_tag("link", {"rel": "stylesheet", "href": url}, is_void=True) for url in self._css_files)
        return render_tag("head", None, "\n".join(parts))

    def render_scripts(self, commands: List[ClientCommand]) -> str:
        parts = [render_tag("script", {"src": url}) for url in self._js_files]
        setup = f"strapkit.formId = {to_js(self.form_id)};"
        body = "\n".join([setup] + [c.to_js() for c in commands])
        parts.append(render_tag("script", None, CLIENT_SCRIPT.strip()))
        parts.append(render_tag("script", None, f"jQuery(function () {{\n{body}\n}});"))
        return "\n".join(parts)

    def render(self) -> str:
        """Render the full html document."""
        for control in self.get_all_controls():
            control.rendered = False
            control._bound_events.clear()
            control.pre_render()
        body = "\n".join(control.render() for control in self._children)
        form_html = render_tag("form", {"id": self.form_id, "method": "post", "action": ""}, body)
        for proxy in self._proxies.values():
            proxy.send_bindings()
        commands = sort_commands(self.pop_commands())
        document = "<!DOCTYPE html>\n" + render_tag(
            "html", {"lang": "en"},
            self.render_head() + "\n" + render_tag("body", None, form_html + "\n" + self.render_scripts(commands)),
        )
        self.rendered_map = build_render_map(self)
        for control in self.get_all_controls():
            control.clear_modified()
        self.rendered = True
        logger.debug("Rendered form %s (%d controls drawn)", self.form_id, len(self.rendered_map))
        return document

    def event_from_json(self, payload: Union[str, bytes]) -> Dict[str, Any]:
        """Decode an event posted by the page runtime."""
        event = json.loads(payload)
        if not isinstance(event, dict):
            raise CallerError("Event payload must be a JSON object")
        return event

    def __repr__(self):
        return f"{type(self).__name__}({self.form_id!r})"
