# strapkit/widgets.py
"""
Form controls and containers: buttons, alerts, text inputs, checkboxes,
radio lists, panels, horizontal forms and the modal dialog.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from . import bootstrap as bs
from .actions import AjaxControl
from .base import BootstrapControl, ClassChoice, ClassToggle, Control
from .cast import cast
from .events import ActionParams, ModalHidden
from .exceptions import CallerError
from .js import PRIORITY_HIGH, PRIORITY_LOW, JsClosure
from .lists import RadioButtonList
from .markup import escape, render_tag

logger = logging.getLogger(__name__)


class Panel(Control):
    """A plain ``div`` that draws its text followed by its child controls."""
    tag_name = "div"

    def get_control_html(self) -> str:
        inner = self.get_inner_html()
        children = self.render_children()
        if children:
            inner = f"{inner}\n{children}" if inner else children
        return self.render_tag(inner=inner)


class Button(BootstrapControl):
    """
    ``<button type="button" class="btn btn-default">``.

    `style_class` and `size_class` each hold exactly one class; writing a new
    value swaps the old one out.
    """
    tag_name = "button"
    default_css_class = "btn"

    style_class = ClassChoice(bs.BUTTON_DEFAULT)
    size_class = ClassChoice(bs.BUTTON_MEDIUM)

    def __init__(self, parent, control_id=None):
        self._glyph = ""
        self._tip = ""
        self._primary_button = False
        super().__init__(parent, control_id)
        self.styler.set_html_attribute("type", "button")

    @property
    def glyph(self) -> str:
        return self._glyph

    @glyph.setter
    def glyph(self, value):
        value = cast(value, str)
        if value != self._glyph:
            self._glyph = value
            self.mark_as_modified()

    @property
    def tip(self) -> str:
        return self._tip

    @tip.setter
    def tip(self, value):
        self._tip = cast(value, str)
        if self._tip:
            self.styler.set_data_attribute("toggle", "tooltip")
            self.styler.set_html_attribute("title", self._tip)
        else:
            self.styler.remove_html_attribute("data-toggle")
            self.styler.remove_html_attribute("title")

    @property
    def primary_button(self) -> bool:
        return self._primary_button

    @primary_button.setter
    def primary_button(self, value):
        self._primary_button = cast(value, bool)
        if self._primary_button:
            self.style_class = bs.BUTTON_PRIMARY
        elif self.style_class == bs.BUTTON_PRIMARY:
            self.style_class = bs.BUTTON_DEFAULT

    def get_inner_html(self) -> str:
        inner = super().get_inner_html()
        if self._glyph:
            icon = render_tag("i", {"class": self._glyph, "aria-hidden": "true"})
            inner = f"{icon} {inner}" if inner else icon
        return inner

    def get_control_html(self) -> str:
        return self.render_tag(inner=self.get_inner_html())

    def make_jq_widget(self) -> None:
        if self._tip:
            self.execute_command("tooltip")


class Alert(Panel):
    """
    ``div.alert.fade.in[role=alert]``.

    A dismissable alert shows a close button; the client records `_Visible`
    when the user closes it, so the server never redraws a closed alert.
    """
    default_css_class = "alert fade in"

    style_class = ClassChoice("")
    dismissable = ClassToggle(bs.ALERT_DISMISSABLE)

    PROPERTY_ALIASES = {"HasCloseButton": "dismissable"}
    CLIENT_PROPERTIES = {"_Visible": "_client_set_visible"}

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self.styler.set_html_attribute("role", "alert")

    @property
    def has_close_button(self) -> bool:
        return self.dismissable

    @has_close_button.setter
    def has_close_button(self, value):
        self.dismissable = value

    def _client_set_visible(self, value):
        self._visible = cast(value, bool)

    def close(self) -> None:
        """Close the alert on the client; it stays closed on later draws."""
        self._visible = False
        self.execute_command("alert", "close")

    def get_control_html(self) -> str:
        inner = self.get_inner_html()
        children = self.render_children()
        if children:
            inner = f"{inner}\n{children}" if inner else children
        if self.dismissable:
            close = render_tag(
                "button",
                {"type": "button", "class": "close", "data-dismiss": "alert", "aria-label": "Close"},
                render_tag("span", {"aria-hidden": "true"}, "&times;", no_space=True),
                no_space=True,
            )
            inner = f"{close}\n{inner}" if inner else close
        return self.render_tag(inner=inner)

    def make_jq_widget(self) -> None:
        if self.dismissable:
            record = f"strapkit.recordControlModification({self.control_id!r}, '_Visible', false);"
            self.execute_command("on", "closed.bs.alert", JsClosure(record), priority=PRIORITY_HIGH)


class Label(BootstrapControl):
    """Static text in a form group: ``<p class="form-control-static">``."""
    tag_name = "p"
    default_css_class = "form-control-static"

    def get_control_html(self) -> str:
        return self.render_tag(inner=self.get_inner_html())


class InputGroupMixin:
    """
    Bootstrap input groups: text or button add-ons on either side of an input.

    The group ``div`` is only drawn when at least one part is set.
    """

    def _init_input_group(self):
        self._sizing_class = ""
        self._left_text = ""
        self._right_text = ""
        self._left_button: Optional[Control] = None
        self._right_button: Optional[Control] = None

    def _set_group_part(self, attr, value):
        if getattr(self, attr) != value:
            setattr(self, attr, value)
            self.mark_as_modified()

    @property
    def sizing_class(self) -> str:
        return self._sizing_class

    @sizing_class.setter
    def sizing_class(self, value):
        self._set_group_part("_sizing_class", cast(value, str))

    @property
    def left_text(self) -> str:
        return self._left_text

    @left_text.setter
    def left_text(self, value):
        self._set_group_part("_left_text", cast(value, str))

    @property
    def right_text(self) -> str:
        return self._right_text

    @right_text.setter
    def right_text(self, value):
        self._set_group_part("_right_text", cast(value, str))

    def set_left_button(self, control: Optional[Control]) -> None:
        self._set_group_part("_left_button", control)

    def set_right_button(self, control: Optional[Control]) -> None:
        self._set_group_part("_right_button", control)

    def has_input_group(self) -> bool:
        return bool(self._left_text or self._right_text or self._left_button or self._right_button)

    def _addon(self, text: str, button: Optional[Control]) -> str:
        html = ""
        if text:
            html += render_tag("span", {"class": "input-group-addon"}, escape(text), no_space=True)
        if button is not None:
            html += render_tag("span", {"class": "input-group-btn"}, button.render(), no_space=True)
        return html

    def wrap_input_group(self, input_html: str) -> str:
        if not self.has_input_group():
            return input_html
        classes = "input-group"
        if self._sizing_class:
            classes += f" {self._sizing_class}"
        inner = self._addon(self._left_text, self._left_button) + input_html + \
            self._addon(self._right_text, self._right_button)
        return render_tag("div", {"class": classes}, inner, no_space=True)


class TextBox(InputGroupMixin, BootstrapControl):
    """
    A text input (or ``<textarea>`` in multi-line mode) styled as ``form-control``.

    Submitted values are read back by `parse_post_data`; validation checks
    `required` and `max_length`.
    """
    tag_name = "input"
    default_css_class = bs.FORM_CONTROL
    is_form_control_input = True
    label_for_input = True

    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"
    NUMBER = "number"
    SEARCH = "search"
    MULTI_LINE = "multi-line"

    def __init__(self, parent, control_id=None):
        self._init_input_group()
        self._text_mode = self.TEXT
        self._placeholder = ""
        self._max_length = 0
        self.rows = 0
        super().__init__(parent, control_id)

    @property
    def text_mode(self) -> str:
        return self._text_mode

    @text_mode.setter
    def text_mode(self, value):
        value = cast(value, str)
        if value not in (self.TEXT, self.PASSWORD, self.EMAIL, self.NUMBER, self.SEARCH, self.MULTI_LINE):
            raise CallerError(f"Unknown text mode {value!r}")
        if value != self._text_mode:
            self._text_mode = value
            self.mark_as_modified()

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @placeholder.setter
    def placeholder(self, value):
        value = cast(value, str)
        if value != self._placeholder:
            self._placeholder = value
            self.mark_as_modified()

    @property
    def max_length(self) -> int:
        return self._max_length

    @max_length.setter
    def max_length(self, value):
        value = cast(value, int)
        if value != self._max_length:
            self._max_length = value
            self.mark_as_modified()

    def _input_attributes(self) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {"name": self.control_id}
        if self._placeholder:
            attributes["placeholder"] = self._placeholder
        if self._max_length:
            attributes["maxlength"] = str(self._max_length)
        if self.required:
            attributes["required"] = True
        return attributes

    def get_control_html(self) -> str:
        attributes = self._input_attributes()
        if self._text_mode == self.MULTI_LINE:
            if self.rows:
                attributes["rows"] = str(self.rows)
            # textarea keeps its content verbatim, so no line breaks around it
            html = render_tag("textarea", {"id": self.control_id, **self.render_html_attributes(attributes)},
                              escape(self.text), no_space=True)
        else:
            attributes = {"type": self._text_mode, **attributes, "value": self.text}
            html = self.render_tag("input", attributes, is_void=True)
        return self.wrap_input_group(html)

    def parse_post_data(self, values: Dict[str, Any]) -> None:
        if self.control_id in values and self.enabled:
            # the client already shows this value
            self._text = cast(values[self.control_id], str)

    def validate(self) -> bool:
        label = self.name or "Value"
        if self.required and not self.text:
            self.validation_error = f"{label} is required"
            return False
        if self._max_length and len(self.text) > self._max_length:
            self.validation_error = f"{label} may have a maximum of {self._max_length} characters"
            return False
        return True


class Checkbox(BootstrapControl):
    """
    ``<input type="checkbox">`` followed by its label.

    Block checkboxes sit in ``div.checkbox``; inline ones get a
    ``checkbox-inline`` label instead.
    """
    tag_name = "input"
    label_for_input = True
    label_after_input = True

    def __init__(self, parent, control_id=None):
        self._checked = False
        self._inline = False
        super().__init__(parent, control_id)

    @property
    def checked(self) -> bool:
        return self._checked

    @checked.setter
    def checked(self, value):
        value = cast(value, bool)
        if value != self._checked:
            self._checked = value
            self.mark_as_modified()

    @property
    def inline(self) -> bool:
        return self._inline

    @inline.setter
    def inline(self, value):
        value = cast(value, bool)
        if value != self._inline:
            self._inline = value
            self.mark_as_modified()

    def get_control_html(self) -> str:
        attributes = {"type": "checkbox", "name": self.control_id, "value": "1", "checked": self._checked}
        box = self.render_tag("input", attributes, is_void=True)
        label_text = self.text or self.name
        if self._inline:
            return render_tag("label", {"class": bs.CHECKBOX_INLINE, "for": self.control_id},
                              f"{box} {escape(label_text)}", no_space=True)
        label = render_tag("label", {"for": self.control_id}, f"{box} {escape(label_text)}", no_space=True)
        return render_tag("div", {"class": "checkbox"}, label, no_space=True)

    def parse_post_data(self, values: Dict[str, Any]) -> None:
        if self.control_id in values and self.enabled:
            self._checked = cast(values[self.control_id], bool)


class RadioList(RadioButtonList):
    """
    Bootstrap radio group.

    Plain mode draws ``div.radio`` items; in `BUTTON_MODE_SET` the radios become
    ``label.btn.<button_style>`` toggles inside ``button_group_class``.
    """

    def __init__(self, parent, control_id=None):
        self._button_style = bs.BUTTON_DEFAULT
        self._group_name = ""
        self._button_group_class = "btn-group"
        super().__init__(parent, control_id)
        self.item_style.add_css_class("radio")

    @property
    def button_style(self) -> str:
        return self._button_style

    @button_style.setter
    def button_style(self, value):
        value = cast(value, str)
        if value != self._button_style:
            self._button_style = value
            self.mark_as_modified()

    @property
    def group_name(self) -> str:
        return self._group_name

    @group_name.setter
    def group_name(self, value):
        value = cast(value, str)
        if value != self._group_name:
            self._group_name = value
            self.mark_as_modified()

    @property
    def button_group_class(self) -> str:
        return self._button_group_class

    @button_group_class.setter
    def button_group_class(self, value):
        value = cast(value, str)
        if value != self._button_group_class:
            self._button_group_class = value
            self.mark_as_modified()

    def get_input_name(self) -> str:
        return self._group_name or self.control_id

    def get_button_classes(self, index: int) -> str:
        classes = f"btn {self._button_style}"
        if index == self.selected_index:
            classes += " active"
        return classes

    def get_container_overrides(self) -> Dict[str, Any]:
        if self.button_mode == self.BUTTON_MODE_SET:
            return {"class": f"{self.css_class} {self._button_group_class}".strip(), "data-toggle": "buttons"}
        return super().get_container_overrides()


class HorizontalForm(Panel):
    """A ``form-horizontal`` panel that draws its children as form groups."""
    default_css_class = bs.FORM_HORIZONTAL

    def render_children(self) -> str:
        parts = []
        for child in self.get_child_controls():
            if isinstance(child, BootstrapControl):
                parts.append(child.render_form_group())
            else:
                parts.append(child.render())
        return "\n".join(parts)

    def set_label_column_size(self, device_size: str, columns: int) -> None:
        """Split every form group into a `columns` wide label and the rest of the row."""
        for child in self.get_child_controls():
            if isinstance(child, BootstrapControl):
                child.set_horizontal_label_column_width(device_size, columns)


class Modal(Panel):
    """
    Bootstrap modal dialog.

    The wrapper ``div.modal.fade`` is the element Bootstrap drives, so its id
    (``<id>_ctl``) is the jq id. The control tag is the ``div.modal-dialog``
    holding header, body and footer buttons.
    """
    default_css_class = "modal-dialog"
    use_wrapper_default = True

    STATE_NONE = ""
    STATE_ERROR = "error"
    STATE_HIGHLIGHT = "highlight"

    SIZE_LARGE = "modal-lg"
    SIZE_SMALL = "modal-sm"

    fade = ClassToggle("fade", target="wrapper", default=True)
    size = ClassChoice("")

    PROPERTY_ALIASES = {
        "Show": "auto_open",
        "Keyboard": "close_on_escape",
        "Modal": None,
    }
    CLIENT_PROPERTIES = {"_IsOpen": "_client_set_is_open", "_ClickedButton": "_client_set_clicked_button"}

    def __init__(self, parent, control_id=None):
        self._is_open = False
        self._clicked_button = ""
        self._title = ""
        self._has_close_button = True
        self._close_on_escape = True
        self._backdrop: Union[bool, str] = True
        self._auto_open = False
        self._header_classes = ""
        self._dialog_state = self.STATE_NONE
        self._buttons: List[Dict[str, Any]] = []
        self._validation_buttons: Dict[str, bool] = {}
        super().__init__(parent, control_id)
        # actions fired by the dialog itself validate the dialog's contents
        self.causes_validation = self
        self._display = False
        self.wrapper_styler.set_html_attribute("tabindex", "-1")
        self.wrapper_styler.set_html_attribute("role", "dialog")
        bs.load_js(self)
        bs.load_css(self)

    def _apply_descriptor_defaults(self):
        self.wrapper_styler.add_css_class("modal")
        super()._apply_descriptor_defaults()

    def get_jq_control_id(self) -> str:
        return f"{self.control_id}_ctl"

    # --- Open state ---
    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def clicked_button(self) -> str:
        return self._clicked_button

    def _client_set_is_open(self, value):
        self._is_open = cast(value, bool)
        if not self._is_open:
            self.form.reset_validation_states()

    def _client_set_clicked_button(self, value):
        self._clicked_button = cast(value, str)

    def mark_as_wrapper_modified(self) -> None:
        # Bootstrap owns the wrapper while the dialog is showing
        if not self._is_open:
            super().mark_as_wrapper_modified()

    # --- Options ---
    def _set_option(self, attr, value):
        if getattr(self, attr) != value:
            setattr(self, attr, value)
            self.mark_as_modified()

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value):
        self._set_option("_title", cast(value, str))

    @property
    def has_close_button(self) -> bool:
        return self._has_close_button

    @has_close_button.setter
    def has_close_button(self, value):
        value = cast(value, bool)
        self._close_on_escape = value
        self._has_close_button = value
        self.mark_as_modified()

    @property
    def close_on_escape(self) -> bool:
        return self._close_on_escape

    @close_on_escape.setter
    def close_on_escape(self, value):
        self._set_option("_close_on_escape", cast(value, bool))

    @property
    def backdrop(self) -> Union[bool, str]:
        return self._backdrop

    @backdrop.setter
    def backdrop(self, value):
        self._set_option("_backdrop", "static" if value == "static" else cast(value, bool))

    @property
    def auto_open(self) -> bool:
        return self._auto_open

    @auto_open.setter
    def auto_open(self, value):
        self._auto_open = cast(value, bool)

    @property
    def header_classes(self) -> str:
        return self._header_classes

    @header_classes.setter
    def header_classes(self, value):
        self._set_option("_header_classes", cast(value, str))

    @property
    def dialog_state(self) -> str:
        return self._dialog_state

    @dialog_state.setter
    def dialog_state(self, value):
        self._set_option("_dialog_state", cast(value, str))

    def get_header_classes(self) -> str:
        if self._dialog_state == self.STATE_ERROR:
            return bs.BACKGROUND_DANGER
        if self._dialog_state == self.STATE_HIGHLIGHT:
            return bs.BACKGROUND_WARNING
        return self._header_classes or bs.BACKGROUND_PRIMARY

    def _primary_style(self) -> str:
        if self._dialog_state == self.STATE_ERROR:
            return "danger"
        if self._dialog_state == self.STATE_HIGHLIGHT:
            return "warning"
        return "primary"

    # --- Buttons ---
    def add_button(self, name: str, button_id: Optional[str] = None, causes_validation: bool = False,
                   is_primary: bool = False, confirmation: Optional[str] = None,
                   attributes: Optional[Dict[str, Any]] = None) -> None:
        """
        Add a footer button. Clicks fire `DialogButton` with the button id.

        :param name: Button label.
        :param button_id: Id reported on click; defaults to the label.
        :param causes_validation: Validate the dialog's controls when clicked.
        :param is_primary: Style as the primary button, matching the dialog state.
        :param confirmation: Optional message the client confirms before firing.
        :param attributes: Extra attributes for the button tag.
        """
        button_id = button_id or name
        options: Dict[str, Any] = {"id": button_id, "text": name}
        if confirmation:
            options["confirm"] = confirmation
        if attributes:
            options["attr"] = dict(attributes)
        if is_primary:
            options["isPrimary"] = True
            options["style"] = self._primary_style()
        self._buttons.append(options)
        self._validation_buttons[button_id] = bool(causes_validation)
        self.mark_as_modified()

    def add_close_button(self, name: str) -> None:
        self._buttons.append({"id": name, "text": name, "close": True, "click": False})
        self.mark_as_modified()

    def remove_button(self, button_id: str) -> None:
        self._buttons = [b for b in self._buttons if b["id"] != button_id]
        self._validation_buttons.pop(button_id, None)
        self.mark_as_modified()

    def remove_all_buttons(self) -> None:
        self._buttons = []
        self._validation_buttons = {}
        self.mark_as_modified()

    def get_buttons(self) -> List[Dict[str, Any]]:
        return [dict(b) for b in self._buttons]

    def show_hide_button(self, button_id: str, visible: bool) -> None:
        self.execute_command("bsModal", "showButton", button_id, bool(visible))

    def set_button_style(self, button_id: str, styles: Dict[str, str]) -> None:
        self.execute_command("bsModal", "setButtonCss", button_id, styles)

    # --- Showing ---
    def open(self) -> None:
        self.execute_command("bsModal", "open", priority=PRIORITY_LOW)

    def close(self) -> None:
        self.execute_command("bsModal", "close", priority=PRIORITY_LOW)

    def show_dialog_box(self) -> None:
        self.visible = True
        self.display = True
        self.open()

    def hide_dialog_box(self) -> None:
        self.close()

    @classmethod
    def alert(cls, form, message: str, buttons: Optional[Union[str, List[str]]] = None,
              control_id: Optional[str] = None) -> "Modal":
        """
        Show a message dialog right away; it removes itself from the form once hidden.

        No buttons gives a corner close box, one button closes the dialog, and
        with several the first is primary and clicks arrive as `DialogButton`.
        """
        dlg = cls(form, control_id)
        dlg.text = message
        dlg.add_action(ModalHidden(), AjaxControl(dlg, "alert_close"))
        if buttons:
            dlg._has_close_button = False
            if isinstance(buttons, str):
                dlg.add_close_button(buttons)
            elif len(buttons) == 1:
                dlg.add_close_button(buttons[0])
            else:
                dlg.add_button(buttons[0], None, False, True)
                for name in buttons[1:]:
                    dlg.add_button(name)
        else:
            dlg._has_close_button = True
        dlg.show_dialog_box()
        return dlg

    def alert_close(self, params: Optional[ActionParams] = None) -> None:
        self.form.remove_control(self.control_id)

    # --- Validation ---
    def validate_control_and_children(self) -> bool:
        if not self._is_open:
            return True
        if self._buttons:
            if self._validation_buttons.get(self._clicked_button):
                return super().validate_control_and_children()
            return True
        return super().validate_control_and_children()

    # --- Rendering ---
    def get_wrapper_attributes(self) -> Dict[str, Any]:
        attributes = super().get_wrapper_attributes()
        if self._is_open:
            # redrawn while showing: keep Bootstrap's visible state
            attributes["class"] = f"{attributes.get('class', '')} in".strip()
            attributes["style"] = "display:block"
        return attributes

    def _render_header(self) -> str:
        parts = []
        if self._has_close_button:
            parts.append(render_tag(
                "button", {"type": "button", "class": "close", "data-dismiss": "modal", "aria-label": "Close"},
                render_tag("span", {"aria-hidden": "true"}, "&times;", no_space=True), no_space=True,
            ))
        if self._title:
            parts.append(render_tag("h4", {"class": "modal-title"}, escape(self._title), no_space=True))
        if not parts:
            return ""
        return render_tag("div", {"class": f"modal-header {self.get_header_classes()}"}, "\n".join(parts))

    def _render_button(self, options: Dict[str, Any]) -> str:
        attributes: Dict[str, Any] = {"type": "button", "class": f"btn btn-{options.get('style', 'default')}"}
        if options.get("close"):
            attributes["data-dismiss"] = "modal"
        else:
            attributes["data-btnid"] = options["id"]
        if options.get("confirm"):
            attributes["data-confirm"] = options["confirm"]
        attributes.update(options.get("attr", {}))
        return render_tag("button", attributes, escape(options["text"]), no_space=True)

    def _render_footer(self) -> str:
        if not self._buttons:
            return ""
        buttons = "\n".join(self._render_button(b) for b in self._buttons)
        return render_tag("div", {"class": "modal-footer"}, buttons)

    def get_control_html(self) -> str:
        body = self.get_inner_html()
        children = self.render_children()
        if children:
            body = f"{body}\n{children}" if body else children
        parts = [self._render_header(), render_tag("div", {"class": "modal-body"}, body), self._render_footer()]
        content = render_tag("div", {"class": "modal-content"}, "\n".join(p for p in parts if p))
        return self.render_tag(inner=content)

    def get_jq_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "show": self._auto_open or self._is_open,
            "keyboard": self._close_on_escape,
            "backdrop": self._backdrop,
            "fade": self.fade,
        }
        if self._title:
            options["title"] = self._title
        if self.size:
            options["size"] = self.size
        if self._buttons:
            options["buttons"] = self.get_buttons()
        options["headerClasses"] = self.get_header_classes()
        return options

    def make_jq_widget(self) -> None:
        self.execute_command("off", priority=PRIORITY_HIGH)
        self.execute_command("bsModal", self.get_jq_options(), priority=PRIORITY_HIGH)
