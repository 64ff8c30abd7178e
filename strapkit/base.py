# strapkit/base.py
import logging
import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from . import bootstrap as bs
from .actions import ActionBase, ActionHolder, binding_command
from .cast import cast
from .events import EventBase
from .exceptions import CallerError
from .js import PRIORITY_STANDARD, ClientCommand
from .markup import TagStyler, escape, render_tag

if TYPE_CHECKING:
    from .core import Form

logger = logging.getLogger(__name__)

_CONTROL_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_PASCAL_RE = re.compile(r"(?<!^)(?=[A-Z])")


# --- Property -> class descriptors ---

class ClassToggle:
    """
    A boolean property mirrored as the presence of a css class.

    :param css_class: The class added while the property is True.
    :param target: ``"control"`` or ``"wrapper"``: which styler receives the class.
    :param default: Initial value; a True default puts the class on at construction.
    """

    def __init__(self, css_class: str, target: str = "control", default: bool = False):
        self.css_class = css_class
        self.target = target
        self.default = default
        self.attr = ""

    def __set_name__(self, owner, name):
        self.attr = f"_{name}"

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.__dict__.get(self.attr, self.default)

    def __set__(self, obj, value):
        value = cast(value, bool)
        obj.__dict__[self.attr] = value
        styler = obj.wrapper_styler if self.target == "wrapper" else obj.styler
        if value:
            styler.add_css_class(self.css_class)
        else:
            styler.remove_css_class(self.css_class)

    def apply_default(self, obj):
        if self.default:
            self.__set__(obj, True)


class ClassChoice:
    """
    An enum-like string property whose value is itself a css class.

    Writing a new value removes the previous class and adds the new one; an
    empty value (e.g. the medium button size) just removes the old class.
    """

    def __init__(self, default: str = "", target: str = "control"):
        self.default = default
        self.target = target
        self.attr = ""

    def __set_name__(self, owner, name):
        self.attr = f"_{name}"

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.__dict__.get(self.attr, self.default)

    def __set__(self, obj, value):
        value = cast(value, str)
        old = obj.__dict__.get(self.attr, None)
        if value == old:
            return
        styler = obj.wrapper_styler if self.target == "wrapper" else obj.styler
        if old:
            styler.remove_css_class(old)
        if value:
            styler.add_css_class(value)
        obj.__dict__[self.attr] = value

    def apply_default(self, obj):
        self.__set__(obj, self.default)


class Control(ActionHolder):
    """
    Base class of every widget.

    A control owns two `TagStyler`s: one for its own tag and one for the
    optional wrapper. Writes to the first mark the control modified (full
    redraw); writes to the second only mark the wrapper modified, which the
    reconciler turns into an attribute update.

    :param parent: The owning `Form` or `Control`.
    :param control_id: DOM id; generated by the form when omitted.
    """
    tag_name = "div"
    wrapper_tag = "div"
    default_css_class = ""
    use_wrapper_default = False
    html_entities = True

    # PascalCase names that do not follow the snake_case rule; None = accepted, ignored
    PROPERTY_ALIASES: Dict[str, Optional[str]] = {
        "CssClass": "css_class",
        "Name": "name",
        "Text": "text",
        "Visible": "visible",
        "Display": "display",
        "Enabled": "enabled",
        "UseWrapper": "use_wrapper",
        "ActionParameter": "action_parameter",
        "HtmlBefore": "html_before",
        "HtmlAfter": "html_after",
        "ValidationError": "validation_error",
        "Warning": "warning",
        "Instructions": "instructions",
        "Required": "required",
    }

    # client-recorded property name -> handler method name
    CLIENT_PROPERTIES: Dict[str, str] = {}

    def __init__(self, parent: Union["Control", "Form"], control_id: Optional[str] = None):
        self._init_actions()
        self.parent = parent
        self.form: "Form" = parent.form
        if control_id is None:
            control_id = self.form.generate_control_id()
        elif not _CONTROL_ID_RE.match(control_id):
            raise CallerError(f"Invalid control id {control_id!r}")
        self.control_id = control_id

        self._children: List["Control"] = []
        self._name = ""
        self._text = ""
        self._visible = True
        self._display = True
        self._enabled = True
        self._use_wrapper = self.use_wrapper_default
        self._validation_error = ""
        self._warning = ""
        self._instructions = ""
        self.required = False
        self.action_parameter: Any = None
        # False, True (whole form) or a control; used when an action does not say
        self.causes_validation: Any = False
        self.html_before = ""
        self.html_after = ""

        self.modified = True
        self.wrapper_modified = False
        self.rendered = False
        self.render_method = "render"
        self._bound_events: set = set()

        self.styler = TagStyler(on_change=self.mark_as_modified)
        self.wrapper_styler = TagStyler(on_change=self.mark_as_wrapper_modified)
        if self.default_css_class:
            self.styler.add_css_class(self.default_css_class)
        self._apply_descriptor_defaults()

        # the form rejects duplicate ids before the parent links the child
        self.form.add_control(self)
        if parent is not self.form:
            parent.add_child_control(self)
        logger.debug("Created %s %s", type(self).__name__, self.control_id)

    def _apply_descriptor_defaults(self):
        seen = set()
        for klass in type(self).__mro__:
            for name, value in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                if isinstance(value, (ClassToggle, ClassChoice)):
                    value.apply_default(self)

    # --- Tree ---
    def add_child_control(self, child: "Control") -> None:
        self._children.append(child)
        if self.rendered:
            # a new child is only drawn by redrawing the parent
            self.mark_as_modified()

    def remove_child_control(self, control_id: str) -> None:
        before = len(self._children)
        self._children = [c for c in self._children if c.control_id != control_id]
        if len(self._children) != before:
            self.mark_as_modified()

    def get_child_controls(self, recursive: bool = False) -> List["Control"]:
        if not recursive:
            return list(self._children)
        found = []
        for child in self._children:
            found.append(child)
            found.extend(child.get_child_controls(True))
        return found

    # --- Flags ---
    def mark_as_modified(self) -> None:
        self.modified = True

    def mark_as_wrapper_modified(self) -> None:
        self.wrapper_modified = True

    def clear_modified(self) -> None:
        self.modified = False
        self.wrapper_modified = False

    # --- State properties ---
    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value):
        value = cast(value, str)
        if value != self._name:
            self._name = value
            self.mark_as_modified()

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value):
        value = cast(value, str)
        if value != self._text:
            self._text = value
            self.mark_as_modified()

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value):
        value = cast(value, bool)
        if value != self._visible:
            self._visible = value
            self.mark_as_modified()

    @property
    def display(self) -> bool:
        return self._display

    @display.setter
    def display(self, value):
        value = cast(value, bool)
        if value == self._display:
            return
        self._display = value
        self._apply_display()

    def _apply_display(self):
        if self._use_wrapper:
            self.mark_as_wrapper_modified()
        else:
            self.mark_as_modified()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value):
        value = cast(value, bool)
        if value != self._enabled:
            self._enabled = value
            self.mark_as_modified()

    @property
    def use_wrapper(self) -> bool:
        return self._use_wrapper

    @use_wrapper.setter
    def use_wrapper(self, value):
        value = cast(value, bool)
        if value != self._use_wrapper:
            self._use_wrapper = value
            self.mark_as_modified()

    @property
    def css_class(self) -> str:
        return self.styler.css_class

    @css_class.setter
    def css_class(self, value):
        self.styler.set_css_class(cast(value, str))

    def add_css_class(self, css_class: str) -> bool:
        return self.styler.add_css_class(css_class)

    def remove_css_class(self, css_class: str) -> bool:
        return self.styler.remove_css_class(css_class)

    def has_css_class(self, css_class: str) -> bool:
        return self.styler.has_css_class(css_class)

    def add_wrapper_css_class(self, css_class: str) -> bool:
        return self.wrapper_styler.add_css_class(css_class)

    def remove_wrapper_css_class(self, css_class: str) -> bool:
        return self.wrapper_styler.remove_css_class(css_class)

    def set_html_attribute(self, name: str, value: Any) -> bool:
        return self.styler.set_html_attribute(name, value)

    def set_data_attribute(self, name: str, value: Any) -> bool:
        return self.styler.set_data_attribute(name, value)

    def set_css_style(self, name: str, value: Optional[str]) -> bool:
        return self.styler.set_css_style(name, value)

    @property
    def validation_error(self) -> str:
        return self._validation_error

    @validation_error.setter
    def validation_error(self, value):
        value = cast(value, str)
        if value != self._validation_error:
            self._validation_error = value
            self.mark_as_modified()
            self._on_validation_changed()

    @property
    def warning(self) -> str:
        return self._warning

    @warning.setter
    def warning(self, value):
        value = cast(value, str)
        if value != self._warning:
            self._warning = value
            self.mark_as_modified()
            self._on_validation_changed()

    @property
    def instructions(self) -> str:
        return self._instructions

    @instructions.setter
    def instructions(self, value):
        value = cast(value, str)
        if value != self._instructions:
            self._instructions = value
            self.mark_as_modified()

    def _on_validation_changed(self):
        pass

    # --- Generic property access ---
    @classmethod
    def _resolve_property(cls, name: str) -> Optional[str]:
        for klass in cls.__mro__:
            aliases = vars(klass).get("PROPERTY_ALIASES")
            if aliases and name in aliases:
                return aliases[name]
        attr = _PASCAL_RE.sub("_", name).lower()
        if not attr.startswith("_") and isinstance(getattr(cls, attr, None), (property, ClassToggle, ClassChoice)):
            return attr
        raise CallerError(f"{cls.__name__} has no property {name!r}")

    def set(self, name: str, value: Any) -> None:
        """
        Set a property by its PascalCase name, e.g. ``set("StyleClass", BUTTON_DANGER)``.

        :raises CallerError: Unknown property.
        """
        attr = self._resolve_property(name)
        if attr is None:
            logger.debug("Ignoring property %s on %s", name, self.control_id)
            return
        setattr(self, attr, value)

    def get(self, name: str) -> Any:
        attr = self._resolve_property(name)
        if attr is None:
            return None
        return getattr(self, attr)

    def set_client_property(self, name: str, value: Any) -> None:
        """Apply a value the client recorded since the last round trip."""
        handler_name = None
        for klass in type(self).__mro__:
            handlers = vars(klass).get("CLIENT_PROPERTIES")
            if handlers and name in handlers:
                handler_name = handlers[name]
                break
        if handler_name is None:
            logger.warning("Ignoring client modification %s=%r for %s", name, value, self.control_id)
            return
        getattr(self, handler_name)(value)

    # --- Rendering ---
    def get_outer_id(self) -> str:
        return f"{self.control_id}_ctl" if self._use_wrapper else self.control_id

    def get_jq_control_id(self) -> str:
        """The id the client widget and event bindings attach to."""
        return self.control_id

    def render_html_attributes(self, overrides: Optional[Dict[str, Any]] = None,
                               style_overrides: Optional[Dict[str, Optional[str]]] = None) -> Dict[str, Any]:
        attr_overrides: Dict[str, Any] = {}
        styles: Dict[str, Optional[str]] = {}
        if not self._enabled:
            attr_overrides["disabled"] = True
        if not self._display and not self._use_wrapper:
            styles["display"] = "none"
        attr_overrides.update(overrides or {})
        styles.update(style_overrides or {})
        return self.styler.render_html_attributes(attr_overrides, styles)

    def render_tag(self, tag: Optional[str] = None, attr_overrides: Optional[Dict[str, Any]] = None,
                   style_overrides: Optional[Dict[str, Optional[str]]] = None, inner: Optional[str] = None,
                   is_void: bool = False) -> str:
        """Render the control's own tag with its id and styler attributes."""
        attributes = {"id": self.control_id}
        attributes.update(self.render_html_attributes(attr_overrides, style_overrides))
        return render_tag(tag or self.tag_name, attributes, inner, is_void)

    def get_wrapper_attributes(self) -> Dict[str, Any]:
        styles = {} if self._display else {"display": "none"}
        attributes = {"id": self.get_outer_id()}
        attributes.update(self.wrapper_styler.render_html_attributes(None, styles))
        return attributes

    def get_inner_html(self) -> str:
        return escape(self._text) if self.html_entities else self._text

    def render_children(self) -> str:
        return "\n".join(child.render() for child in self._children)

    def pre_render(self) -> None:
        """Called on every control before a page or patch render; data binding happens here."""

    def get_control_html(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement get_control_html()")

    def render(self) -> str:
        """Draw the control, wrapped when `use_wrapper` is set."""
        self.render_method = "render"
        if not self._visible:
            return self._render_output(None)
        html = self.html_before + self.get_control_html() + self.html_after
        return self._render_output(html)

    def redraw(self) -> str:
        """Draw again through whichever render method drew the control last."""
        return getattr(self, self.render_method)()

    def _render_output(self, html: Optional[str]) -> str:
        if html is None:
            tag = self.wrapper_tag if self._use_wrapper else "span"
            output = render_tag(tag, {"id": self.get_outer_id(), "style": "display:none"})
        elif self._use_wrapper:
            output = render_tag(self.wrapper_tag, self.get_wrapper_attributes(), html)
        else:
            output = html
        self.rendered = True
        if html is not None:
            self.make_jq_widget()
            self._send_bindings()
        return output

    # --- Post data / validation ---
    def parse_post_data(self, values: Dict[str, Any]) -> None:
        """Read this control's submitted value out of `values` (keyed by control id)."""

    def validate(self) -> bool:
        return True

    def validate_control_and_children(self) -> bool:
        if not (self._visible and self._enabled):
            return True
        valid = self.validate()
        for child in self._children:
            if not child.validate_control_and_children():
                valid = False
        return valid

    def validation_reset(self) -> None:
        self.validation_error = ""
        self.warning = ""

    # --- Client commands ---
    def execute_command(self, method: str, *args, priority: int = PRIORITY_STANDARD,
                        selector: Optional[str] = None) -> None:
        """Queue ``jQuery('#<jq id>').method(args)`` for the next response."""
        self.form.add_command(ClientCommand(
            method=method,
            args=list(args),
            selector=selector or f"#{self.get_jq_control_id()}",
            priority=priority,
        ))

    def make_jq_widget(self) -> None:
        """Queue client widget setup; runs after every full draw."""

    # --- Actions ---
    def add_action(self, event: EventBase, action: ActionBase) -> None:
        self._register_action(event, action)
        if self.rendered:
            self._send_bindings()

    def remove_all_actions(self, event_name: Optional[str] = None) -> None:
        for name in self._forget_actions(event_name):
            self._bound_events.discard(name)
            self.form.add_command(ClientCommand(
                method="off", args=[name, f"#{self.get_jq_control_id()}"], selector=f"#{self.form.form_id}",
            ))

    def _send_bindings(self):
        for event_name, pairs in self._actions.items():
            if event_name in self._bound_events or not pairs:
                continue
            self._bound_events.add(event_name)
            event = pairs[0][0]
            self.form.add_command(binding_command(
                self.form.form_id, f"#{self.get_jq_control_id()}", event, [a for _, a in pairs], self.control_id,
            ))

    def __repr__(self):
        return f"{type(self).__name__}({self.control_id!r})"


class BootstrapControl(Control):
    """
    Adds Bootstrap form-group rendering, grid classes and validation states.
    """
    # True for controls that take `form-control` in a form group
    is_form_control_input = False
    # True for controls whose label carries a `for` attribute
    label_for_input = False
    # True for checkbox/radio style controls whose label follows the input
    label_after_input = False

    PROPERTY_ALIASES = {"LabelCssClass": "label_css_class", "HorizontalClass": "horizontal_class"}

    def __init__(self, parent, control_id=None):
        self._label_styler: Optional[TagStyler] = None
        self._horizontal_class = ""
        self._validation_state = ""
        super().__init__(parent, control_id)

    @property
    def label_styler(self) -> TagStyler:
        if self._label_styler is None:
            self._label_styler = TagStyler(on_change=self.mark_as_modified)
            self._label_styler.add_css_class(bs.CONTROL_LABEL)
        return self._label_styler

    @property
    def label_css_class(self) -> str:
        return self.label_styler.css_class

    @label_css_class.setter
    def label_css_class(self, value):
        self.label_styler.set_css_class(cast(value, str))

    def add_label_class(self, css_class: str) -> None:
        self.label_styler.add_css_class(css_class)

    def remove_label_class(self, css_class: str) -> None:
        self.label_styler.remove_css_class(css_class)

    @property
    def horizontal_class(self) -> str:
        return self._horizontal_class

    @horizontal_class.setter
    def horizontal_class(self, value):
        value = cast(value, str)
        if value != self._horizontal_class:
            self._horizontal_class = value
            self.mark_as_modified()

    # --- Grid ---
    def add_column_class(self, device_size: str, columns: int = 0, offset: int = 0, push: int = 0) -> None:
        self.add_css_class(bs.create_column_class(device_size, columns, offset, push))

    def add_horizontal_column_class(self, device_size: str, columns: int = 0, offset: int = 0, push: int = 0) -> None:
        classes = f"{self._horizontal_class} {bs.create_column_class(device_size, columns, offset, push)}"
        self.horizontal_class = " ".join(c for c in classes.split(" ") if c)

    def set_horizontal_label_column_width(self, device_size: str, columns: int) -> None:
        """
        Split the grid between label and control.

        Without a name there is no label, so the control is offset instead.
        """
        if self._name:
            self.label_styler.remove_css_classes_by_prefix(f"col-{device_size}")
            self.add_label_class(bs.create_column_class(device_size, columns))
            self.horizontal_class = bs.create_column_class(device_size, bs.GRID_COLUMNS - columns)
        else:
            self.horizontal_class = bs.create_column_class(device_size, bs.GRID_COLUMNS - columns, columns)

    # --- Display ---
    def _apply_display(self):
        if self._display:
            self.styler.remove_css_class(bs.HIDDEN)
            self.wrapper_styler.remove_css_class(bs.HIDDEN)
        else:
            self.styler.add_css_class(bs.HIDDEN)
            self.wrapper_styler.add_css_class(bs.HIDDEN)

    def render_html_attributes(self, overrides=None, style_overrides=None):
        overrides = dict(overrides or {})
        described = self._help_block_id()
        if described:
            overrides.setdefault("aria-describedby", described)
        style_overrides = dict(style_overrides or {})
        # visibility is carried by the `hidden` class
        style_overrides.setdefault("display", None)
        return super().render_html_attributes(overrides, style_overrides)

    def get_wrapper_attributes(self):
        attributes = {"id": self.get_outer_id()}
        attributes.update(self.wrapper_styler.render_html_attributes())
        return attributes

    # --- Validation state ---
    def _on_validation_changed(self):
        self.reinforce_validation_state()

    def reinforce_validation_state(self) -> None:
        if not self._use_wrapper or self._children:
            return
        if self._validation_error:
            state = bs.HAS_ERROR
        elif self._warning:
            state = bs.HAS_WARNING
        else:
            state = self._validation_state if self._validation_state == bs.HAS_SUCCESS else ""
        self._set_validation_state(state)

    def _set_validation_state(self, state: str) -> None:
        if self._validation_state:
            self.wrapper_styler.remove_css_class(self._validation_state)
        if state:
            self.wrapper_styler.add_css_class(state)
        self._validation_state = state

    def mark_valid(self) -> None:
        """Show the success state (only meaningful on a wrapped control)."""
        if self._use_wrapper and not self._children:
            self._set_validation_state(bs.HAS_SUCCESS)

    @property
    def validation_state(self) -> str:
        return self._validation_state

    def validation_reset(self) -> None:
        super().validation_reset()
        if self._validation_state:
            self._set_validation_state("")

    # --- Form group rendering ---
    def _help_block_id(self) -> str:
        if self._validation_error:
            return f"{self.control_id}_error"
        if self._warning:
            return f"{self.control_id}_warning"
        if self._instructions:
            return f"{self.control_id}_help"
        return ""

    def get_help_block(self) -> str:
        if self._validation_error:
            text, suffix = self._validation_error, "error"
        elif self._warning:
            text, suffix = self._warning, "warning"
        elif self._instructions:
            text, suffix = self._instructions, "help"
        else:
            return ""
        return render_tag("p", {"class": bs.HELP_BLOCK, "id": f"{self.control_id}_{suffix}"}, escape(text),
                          no_space=True)

    def render_label(self, include_for: bool = False) -> str:
        if not self._name:
            return ""
        attributes = {}
        if include_for:
            attributes["for"] = self.control_id
        attributes.update(self.label_styler.render_html_attributes())
        return render_tag("label", attributes, escape(self._name), no_space=True)

    def render_form_group(self) -> str:
        """Draw the control as a Bootstrap form group: label, control, help block."""
        self._use_wrapper = True
        self.wrapper_styler.add_css_class(bs.FORM_GROUP)
        if self.is_form_control_input:
            self.styler.add_css_class(bs.FORM_CONTROL)
        self.reinforce_validation_state()
        self.render_method = "render_form_group"
        if not self._visible:
            return self._render_output(None)

        if self.label_after_input:
            # checkbox style controls carry their own label; the group label is empty
            label = ""
            if not self._text and self._name:
                self._text, self._name = self._name, ""
        else:
            label = self.render_label(self.label_for_input)

        html = self.html_before + self.get_control_html() + self.html_after + self.get_help_block()
        if self._horizontal_class:
            html = render_tag("div", {"class": self._horizontal_class}, html)
        return self._render_output(label + html)
