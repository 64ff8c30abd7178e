# strapkit/widgets_more.py
"""
Navigation and list widgets: navbar, dropdown, carousel, accordion,
list group, pager and tabs.
"""

import logging
from typing import Any, Callable, Dict, Optional

from . import bootstrap as bs
from .actions import ActionBase, AjaxControl, Proxy
from .base import ClassToggle, Control
from .cast import cast
from .config import get_config
from .events import ActionParams, Click
from .exceptions import CallerError
from .js import PRIORITY_HIGH, JsClosure
from .lists import DataRepeater, HList, ListItem, ListItemStyle, Paginator
from .markup import escape, render_tag

logger = logging.getLogger(__name__)


# --- Navbar ---

class Navbar(Control):
    """
    ``nav.navbar[role=navigation]`` with a collapsible area for child controls.

    Clicking any ``li`` inside records `SelectedId` on the client and fires
    `NavbarSelect` with ``{id, value}``.
    """
    tag_name = "nav"
    default_css_class = "navbar"

    PROPERTY_ALIASES = {"Value": "selected_id"}
    CLIENT_PROPERTIES = {"SelectedId": "_client_set_selected_id"}

    def __init__(self, parent, control_id=None):
        self._header_text = ""
        self._header_anchor = ""
        self._container_class = bs.CONTAINER_FLUID
        self._style_class = ""
        self._selected_id = ""
        super().__init__(parent, control_id)
        self.style_class = bs.NAVBAR_DEFAULT
        bs.load_css(self)
        bs.load_js(self)

    @property
    def style_class(self) -> str:
        return self._style_class

    @style_class.setter
    def style_class(self, value):
        value = cast(value, str)
        self.styler.remove_css_class(self._style_class)
        self.styler.add_css_class(value)
        self._style_class = value

    @property
    def container_class(self) -> str:
        return self._container_class

    @container_class.setter
    def container_class(self, value):
        value = cast(value, str)
        if value != self._container_class:
            self._container_class = value
            self.mark_as_modified()

    @property
    def header_text(self) -> str:
        return self._header_text

    @header_text.setter
    def header_text(self, value):
        value = cast(value, str)
        if value != self._header_text:
            self._header_text = value
            self.mark_as_modified()

    @property
    def header_anchor(self) -> str:
        return self._header_anchor

    @header_anchor.setter
    def header_anchor(self, value):
        value = cast(value, str)
        if value != self._header_anchor:
            self._header_anchor = value
            self.mark_as_modified()

    @property
    def selected_id(self) -> str:
        return self._selected_id

    @selected_id.setter
    def selected_id(self, value):
        value = cast(value, str)
        if value != self._selected_id:
            self._selected_id = value
            self.mark_as_modified()

    def _client_set_selected_id(self, value):
        self._selected_id = cast(value, str)

    def get_control_html(self) -> str:
        toggle = render_tag(
            "button",
            {"type": "button", "class": "navbar-toggle collapsed", "data-toggle": "collapse",
             "data-target": f"#{self.control_id}_collapse"},
            "\n".join([
                render_tag("span", {"class": "sr-only"}, "Toggle navigation", no_space=True),
                render_tag("span", {"class": "icon-bar"}),
                render_tag("span", {"class": "icon-bar"}),
                render_tag("span", {"class": "icon-bar"}),
            ]),
        )
        header = toggle
        if self._header_text:
            brand = render_tag("a", {"class": "navbar-brand", "href": self._header_anchor or "#"},
                               escape(self._header_text), no_space=True)
            header += "\n" + brand
        header_html = render_tag("div", {"class": "navbar-header"}, header)
        collapse = render_tag("div", {"class": "collapse navbar-collapse", "id": f"{self.control_id}_collapse"},
                              self.render_children())
        container = render_tag("div", {"class": self._container_class}, f"{header_html}\n{collapse}")
        return self.render_tag(attr_overrides={"role": "navigation"}, inner=container)

    def make_jq_widget(self) -> None:
        script = (
            f"strapkit.recordControlModification({self.control_id!r}, 'SelectedId', this.id); "
            "jQuery(this).trigger('bsmenubarselect', {id: this.id, value: jQuery(this).data('value')});"
        )
        self.execute_command("on", "click", "li", JsClosure(script), priority=PRIORITY_HIGH)

    def validate(self) -> bool:
        return True


class NavbarItem(ListItem):
    """A navbar link; the anchor defaults to ``#`` so clicks and styling work."""

    def __init__(self, text: str = "", value: Any = None, anchor: Optional[str] = None,
                 item_id: Optional[str] = None):
        super().__init__(text, value, anchor or "#", item_id)


class NavbarDropdown(NavbarItem):
    """An ``li.dropdown`` whose sub items open in a ``ul.dropdown-menu``."""

    def __init__(self, name: str, item_id: Optional[str] = None):
        super().__init__(name, item_id=item_id)
        self.item_style = ListItemStyle()
        self.item_style.set_css_class("dropdown")

    def get_item_text(self) -> str:
        caret = render_tag("span", {"class": "caret"})
        return render_tag(
            "a",
            {"href": "#", "class": "dropdown-toggle", "data-toggle": "dropdown", "role": "button",
             "aria-expanded": "false"},
            f"{escape(self.text)} {caret}",
            no_space=True,
        )

    def get_sub_tag_attributes(self) -> Optional[Dict[str, Any]]:
        return {"class": "dropdown-menu", "role": "menu"}


class NavbarList(HList):
    """``ul.nav.navbar-nav``; the item matching the navbar's `selected_id` is active."""
    default_css_class = "nav navbar-nav"

    def add_menu_item(self, item: NavbarItem) -> NavbarItem:
        if not isinstance(item, NavbarItem):
            raise CallerError("NavbarList only accepts NavbarItem entries")
        return self.add_item(item)

    def _selected_id(self) -> str:
        return getattr(self.parent, "selected_id", "") if isinstance(self.parent, Navbar) else ""

    def get_item_attributes(self, item: ListItem) -> Dict[str, Any]:
        attributes = super().get_item_attributes(item)
        selected = self._selected_id()
        if selected and item.item_id == selected:
            attributes["class"] = f"{attributes.get('class', '')} active".strip()
        return attributes


# --- Dropdown ---

class DropdownItem(ListItem):
    """A dropdown menu entry; rendered as a link (``#`` when no anchor is given)."""

    def get_item_text(self) -> str:
        return render_tag("a", {"href": self.anchor or "#"}, escape(self.text), no_space=True)


class DropdownHeader(DropdownItem):
    """A non-clickable heading inside a dropdown menu."""

    def __init__(self, text: str, item_id: Optional[str] = None):
        super().__init__(text, item_id=item_id)
        self.item_style.set_css_class("dropdown-header")

    def get_item_text(self) -> str:
        return escape(self.text)


class DropdownDivider(DropdownItem):
    """A separator line inside a dropdown menu."""

    def __init__(self, item_id: Optional[str] = None):
        super().__init__("", item_id=item_id)
        self.item_style.set_css_class("divider")
        self.item_style.set_html_attribute("role", "separator")

    def get_item_text(self) -> str:
        return ""


class Dropdown(HList):
    """
    A toggle (link or button) plus its ``ul.dropdown-menu``, inside a wrapper.

    The wrapper is ``div.dropdown`` for a link toggle and ``div.btn-group``
    for a button toggle. Clicking an item fires `DropdownSelect` with
    ``{id, value}``.
    """
    tag_name = "a"
    use_wrapper_default = True

    up = ClassToggle("dropup", target="wrapper")

    def __init__(self, parent, control_id=None):
        self._as_button = False
        self._split = False
        self._button_style = bs.BUTTON_DEFAULT
        self._button_size = bs.BUTTON_MEDIUM
        super().__init__(parent, control_id)
        self.wrapper_styler.add_css_class("dropdown")
        bs.load_js(self)

    @property
    def text(self) -> str:
        return self.name

    @text.setter
    def text(self, value):
        self.name = value

    @property
    def style_class(self) -> str:
        return self._button_style

    @style_class.setter
    def style_class(self, value):
        value = cast(value, str)
        if self._as_button:
            self.styler.remove_css_class(self._button_style)
            self.styler.add_css_class(value)
        self._button_style = value

    @property
    def size_class(self) -> str:
        return self._button_size

    @size_class.setter
    def size_class(self, value):
        value = cast(value, str)
        if self._as_button:
            self.styler.remove_css_class(self._button_size)
            self.styler.add_css_class(value)
        self._button_size = value

    @property
    def as_button(self) -> bool:
        return self._as_button

    @as_button.setter
    def as_button(self, value):
        self._as_button = cast(value, bool)
        if self._as_button:
            self.styler.add_css_class(f"btn {self._button_style} {self._button_size}")
            if not self._split:
                self.styler.add_css_class("dropdown-toggle")
            self.wrapper_styler.remove_css_class("dropdown")
            self.wrapper_styler.add_css_class("btn-group")
        else:
            self.styler.remove_css_class("btn dropdown-toggle")
            self.styler.remove_css_classes_by_prefix("btn-")
            self.wrapper_styler.add_css_class("dropdown")
            self.wrapper_styler.remove_css_class("btn-group")
        self.mark_as_modified()

    @property
    def split(self) -> bool:
        return self._split

    @split.setter
    def split(self, value):
        self._split = cast(value, bool)
        if self._split:
            self.styler.remove_css_class("dropdown-toggle")
        elif self._as_button:
            self.styler.add_css_class("dropdown-toggle")
        self.mark_as_modified()

    def add_menu_item(self, item: DropdownItem) -> DropdownItem:
        if not isinstance(item, DropdownItem):
            raise CallerError("Dropdown only accepts DropdownItem entries")
        return self.add_item(item)

    def get_control_html(self) -> str:
        toggle_attrs = {"data-toggle": "dropdown", "aria-haspopup": "true", "aria-expanded": "false"}
        label = escape(self.name)
        caret = render_tag("span", {"class": "caret"})
        if not self._as_button:
            html = self.render_tag("a", {"href": "#", **toggle_attrs}, inner=f"{label} {caret}")
        elif not self._split:
            html = self.render_tag("button", {"type": "button", **toggle_attrs}, inner=f"{label} {caret}")
        else:
            html = self.render_tag("button", {"type": "button"}, inner=label)
            classes = " ".join(c for c in ("btn dropdown-toggle", self._button_size, self._button_style) if c)
            html += render_tag("button", {"type": "button", "class": classes, **toggle_attrs}, caret)
        if self.get_item_count():
            html += "\n" + render_tag(
                "ul",
                {"id": f"{self.control_id}_list", "class": "dropdown-menu", "aria-labelledby": self.control_id},
                self.get_items_html(self.get_all_items()),
            )
        return html

    def make_jq_widget(self) -> None:
        script = (
            f"jQuery('#{self.control_id}').trigger('bsdropdownselect', "
            "{id: this.id, value: jQuery(this).data('value')});"
        )
        self.execute_command("on", "click", "li", JsClosure(script), selector=f"#{self.control_id}_list",
                             priority=PRIORITY_HIGH)


# --- Carousel ---

class CarouselItem(ListItem):
    """
    One slide: an image (linked when `anchor` is set) and a caption.
    """

    def __init__(self, image_url: str, alt_text: Optional[str] = None, text: str = "",
                 anchor: Optional[str] = None, item_id: Optional[str] = None):
        super().__init__(text, None, anchor, item_id)
        self.image_url = image_url
        self.alt_text = alt_text


class Carousel(HList):
    """``div.carousel.slide[data-ride=carousel]``; the first slide starts active."""
    tag_name = "div"
    default_css_class = "carousel slide"

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        bs.load_js(self)

    def add_item(self, item, value=None, anchor=None):
        if not isinstance(item, CarouselItem):
            raise CallerError("Carousel child controls must be CarouselItems")
        return super().add_item(item)

    def get_indicators_html(self) -> str:
        indicators = []
        for index in range(self.get_item_count()):
            attributes = {"data-target": f"#{self.control_id}", "data-slide-to": str(index)}
            if index == 0:
                attributes["class"] = "active"
            indicators.append(render_tag("li", attributes))
        return render_tag("ol", {"class": "carousel-indicators"}, "\n".join(indicators))

    def get_slides_html(self) -> str:
        slides = []
        for index, item in enumerate(self.get_all_items()):
            if not isinstance(item, CarouselItem):
                raise CallerError("Carousel child controls must be CarouselItems")
            image = render_tag("img", {"class": "img-responsive center-block", "src": item.image_url,
                                       "alt": item.alt_text}, is_void=True)
            if item.anchor:
                image = render_tag("a", {"href": item.anchor}, image)
            caption = render_tag("div", {"class": "carousel-caption"}, escape(item.text), no_space=True)
            classes = "item active" if index == 0 else "item"
            slides.append(render_tag("div", {"class": classes, "id": item.item_id}, f"{image}\n{caption}"))
        return render_tag("div", {"class": "carousel-inner", "role": "listbox"}, "\n".join(slides))

    def _slide_control(self, side: str, direction: str, label: str) -> str:
        icon = render_tag("span", {"class": f"glyphicon glyphicon-chevron-{side}", "aria-hidden": "true"})
        sr = render_tag("span", {"class": "sr-only"}, label, no_space=True)
        return render_tag("a", {"class": f"{side} carousel-control", "href": f"#{self.control_id}",
                                "role": "button", "data-slide": direction}, f"{icon}\n{sr}")

    def get_control_html(self) -> str:
        inner = "\n".join([
            self.get_indicators_html(),
            self.get_slides_html(),
            self._slide_control("left", "prev", "Previous"),
            self._slide_control("right", "next", "Next"),
        ])
        return self.render_tag(attr_overrides={"data-ride": "carousel"}, inner=inner)

    def make_jq_widget(self) -> None:
        self.execute_command("on", "click", ".item", JsClosure("jQuery(this).trigger('bscarousselect', this.id);"),
                             priority=PRIORITY_HIGH)

    def validate(self) -> bool:
        return True


# --- Accordion ---

class Accordion(DataRepeater):
    """
    A Bootstrap collapse group with one panel per data item.

    Panel content comes from the drawing callback
    ``callback(accordion, part, item, index) -> str`` called with
    `RENDER_HEADER`, `RENDER_BODY` and `RENDER_FOOTER`.
    """
    RENDER_HEADER = "header"
    RENDER_BODY = "body"
    RENDER_FOOTER = "footer"

    default_css_class = bs.PANEL_GROUP

    CLIENT_PROPERTIES = {"CurrentOpenItem": "_client_set_current_open_item"}

    def __init__(self, parent, control_id=None):
        self._current_open_item = 0
        self._panel_style = bs.PANEL_DEFAULT
        self._drawing_callback: Optional[Callable[["Accordion", str, Any, int], str]] = None
        super().__init__(parent, control_id)
        self.styler.set_html_attribute("role", "tablist")
        self.styler.set_html_attribute("aria-multiselectable", "true")
        bs.load_js(self)

    def set_drawing_callback(self, callback: Callable[["Accordion", str, Any, int], str]) -> None:
        self._drawing_callback = callback
        self.mark_as_modified()

    @property
    def panel_style(self) -> str:
        return self._panel_style

    @panel_style.setter
    def panel_style(self, value):
        value = cast(value, str)
        if value != self._panel_style:
            self._panel_style = value
            self.mark_as_modified()

    @property
    def current_open_item(self) -> int:
        return self._current_open_item

    @current_open_item.setter
    def current_open_item(self, value):
        value = cast(value, int)
        if value != self._current_open_item:
            self._current_open_item = value
            self.mark_as_modified()

    def _client_set_current_open_item(self, value):
        self._current_open_item = cast(value, int)

    def _draw(self, part: str, item: Any) -> str:
        if self._drawing_callback is None:
            return ""
        return self._drawing_callback(self, part, item, self.current_item_index) or ""

    def _collapse_id(self) -> str:
        return f"{self.control_id}_collapse_{self.current_item_index}"

    def render_toggle_helper(self, html: str) -> str:
        """The anchor that opens and closes the current item's panel."""
        is_open = self.current_item_index == self._current_open_item
        collapse_id = self._collapse_id()
        return render_tag("a", {
            "class": None if is_open else "collapsed",
            "data-toggle": "collapse",
            "data-parent": f"#{self.control_id}",
            "href": f"#{collapse_id}",
            "aria-expanded": "true" if is_open else "false",
            "aria-controls": collapse_id,
        }, html, no_space=True)

    def get_item_html(self, item: Any) -> str:
        index = self.current_item_index
        heading_id = f"{self.control_id}_heading_{index}"
        collapse_id = self._collapse_id()
        title = render_tag("h4", {"class": "panel-title"}, self._draw(self.RENDER_HEADER, item))
        heading = render_tag("div", {"class": "panel-heading", "role": "tab", "id": heading_id}, title)
        body = render_tag("div", {"class": "panel-body"}, self._draw(self.RENDER_BODY, item))
        collapse_class = "panel-collapse collapse in" if index == self._current_open_item else "panel-collapse collapse"
        collapse = render_tag("div", {"id": collapse_id, "class": collapse_class, "role": "tabpanel",
                                      "aria-labelledby": heading_id}, body)
        parts = [heading, collapse]
        footer = self._draw(self.RENDER_FOOTER, item)
        if footer:
            parts.append(render_tag("div", {"class": "panel-footer"}, footer))
        return render_tag("div", {"class": f"panel {self._panel_style}"}, "\n".join(parts))

    def make_jq_widget(self) -> None:
        script = (
            "var panels = jQuery(this).find('.panel-collapse'); "
            f"strapkit.recordControlModification({self.control_id!r}, 'CurrentOpenItem', "
            "panels.index(panels.filter('.in')));"
        )
        self.execute_command("on", "shown.bs.collapse hidden.bs.collapse", JsClosure(script),
                             priority=PRIORITY_HIGH)


# --- List group ---

class ListGroup(DataRepeater):
    """
    ``div.list-group`` of ``a.list-group-item`` links drawn through a proxy.

    `item_params_callback(item, index)` returns a dict with ``html``, ``id``,
    ``action`` (the click parameter, defaults to the id) and ``attributes``.
    """
    default_css_class = "list-group"

    def __init__(self, parent, control_id=None):
        self._selected_id: Any = None
        self._item_params_callback: Optional[Callable[[Any, int], Dict[str, Any]]] = None
        super().__init__(parent, control_id)
        self.proxy = Proxy(self)
        self.proxy.add_action(Click(), AjaxControl(self, "item_click"))

    def add_click_action(self, action: ActionBase) -> None:
        self.proxy.add_action(Click(), action)

    def set_item_params_callback(self, callback: Callable[[Any, int], Dict[str, Any]]) -> None:
        self._item_params_callback = callback
        self.mark_as_modified()

    @property
    def selected_id(self) -> Any:
        return self._selected_id

    @selected_id.setter
    def selected_id(self, value):
        self._selected_id = value
        self.mark_as_modified()

    def item_click(self, params: ActionParams) -> None:
        if params is None or params.param is None:
            return
        self._selected_id = params.param
        if self.save_state:
            self.mark_as_modified()

    def get_item_html(self, item: Any) -> str:
        if self._item_params_callback is None:
            raise CallerError("ListGroup needs an item_params_callback")
        params = self._item_params_callback(item, self.current_item_index) or {}
        label = params.get("html", "")
        item_id = params.get("id", "")
        action_param = params.get("action", item_id)
        attributes = dict(params.get("attributes") or {})
        classes = f"{attributes['class']} list-group-item" if attributes.get("class") else "list-group-item"
        if self.save_state and self._selected_id is not None and str(self._selected_id) == str(item_id):
            classes += " active"
        attributes["class"] = classes
        return self.proxy.render_as_link(label, action_param, attributes, "a", False)


# --- Pager ---

class Pager(Paginator):
    """
    ``nav > ul.pagination`` with previous / "N of M" / next entries.

    With `spread` the arrows get the ``previous``/``next`` classes; an arrow at
    a bound is drawn disabled and carries no action.
    """
    tag_name = "nav"

    SMALL = 1
    MEDIUM = 2
    LARGE = 3

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        cfg = get_config()
        self._add_arrow = False
        self._spread = True
        self._size = self.MEDIUM
        self.label_for_previous = cfg.get_nested("pager.label_previous", "&laquo;")
        self.label_for_next = cfg.get_nested("pager.label_next", "&raquo;")

    @property
    def add_arrow(self) -> bool:
        return self._add_arrow

    @add_arrow.setter
    def add_arrow(self, value):
        self._add_arrow = cast(value, bool)
        self.mark_as_modified()

    @property
    def spread(self) -> bool:
        return self._spread

    @spread.setter
    def spread(self, value):
        self._spread = cast(value, bool)
        self.mark_as_modified()

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value):
        value = cast(value, int)
        if value not in (self.SMALL, self.MEDIUM, self.LARGE):
            raise CallerError(f"Unknown pager size {value}")
        self._size = value
        self.mark_as_modified()

    def _arrow(self, css_class: str, label: str, target_page: int, enabled: bool) -> str:
        classes = css_class if self._spread else ""
        if enabled:
            link = self.proxy.render_as_link(label, target_page, {"id": f"{self.control_id}_arrow_{target_page}"},
                                             "a", False)
        else:
            link = render_tag("a", {"href": "#"}, label, no_space=True)
            classes = f"{classes} disabled".strip()
        return render_tag("li", {"class": classes or None}, link, no_space=True)

    def get_previous_buttons_html(self) -> str:
        label = self.label_for_previous
        if self._add_arrow:
            label = f'<span aria-hidden="true">&larr;</span> {label}'
        return self._arrow("previous", label, self.page_number - 1, self.page_number > 1)

    def get_next_buttons_html(self) -> str:
        label = self.label_for_next
        if self._add_arrow:
            label = f'{label} <span aria-hidden="true">&rarr;</span>'
        return self._arrow("next", label, self.page_number + 1, self.page_number < self.page_count)

    def get_control_html(self) -> str:
        counter = render_tag("a", {"href": "#"}, f"{self.page_number} of {self.page_count}", no_space=True)
        items = "\n".join([
            self.get_previous_buttons_html(),
            render_tag("li", {"class": "disabled"}, counter, no_space=True),
            self.get_next_buttons_html(),
        ])
        classes = "pagination"
        if self._size == self.SMALL:
            classes += " pagination-sm"
        elif self._size == self.LARGE:
            classes += " pagination-lg"
        return self.render_tag(inner=render_tag("ul", {"class": classes}, items))


# --- Tabs ---

class Tabs(Control):
    """
    ``ul.nav.nav-tabs`` of one tab per child control, followed by the panes.

    The first child added starts selected; the client records `SelectedId`
    whenever a tab is shown.
    """

    CLIENT_PROPERTIES = {"SelectedId": "_client_set_selected_id"}

    def __init__(self, parent, control_id=None):
        self._selected_id = ""
        super().__init__(parent, control_id)
        bs.load_js(self)

    def add_child_control(self, child: Control) -> None:
        super().add_child_control(child)
        if len(self.get_child_controls()) == 1:
            self._selected_id = child.control_id

    @property
    def selected_id(self) -> str:
        return self._selected_id

    @selected_id.setter
    def selected_id(self, value):
        value = cast(value, str)
        if value != self._selected_id:
            self._selected_id = value
            self.mark_as_modified()

    def _client_set_selected_id(self, value):
        self._selected_id = cast(value, str)

    def get_control_html(self) -> str:
        tabs = []
        panes = []
        for child in self.get_child_controls():
            pane_id = f"{child.control_id}_tab"
            link = render_tag("a", {"href": f"#{pane_id}", "aria-controls": pane_id, "role": "tab",
                                    "data-toggle": "tab"}, escape(child.name), no_space=True)
            active = child.control_id == self._selected_id
            tab_attrs: Dict[str, Any] = {"role": "presentation"}
            if active:
                tab_attrs["class"] = "active"
            tabs.append(render_tag("li", tab_attrs, link, no_space=True))
            pane_class = "tab-pane active" if active else "tab-pane"
            panes.append(render_tag("div", {"role": "tabpanel", "class": pane_class, "id": pane_id}, child.render()))
        html = render_tag("ul", {"class": "nav nav-tabs", "role": "tablist"}, "\n".join(tabs))
        html += "\n" + render_tag("div", {"class": "tab-content"}, "\n".join(panes))
        return self.render_tag(inner=html)

    def make_jq_widget(self) -> None:
        script = (
            f"strapkit.recordControlModification({self.control_id!r}, 'SelectedId', "
            "jQuery(event.target).attr('aria-controls').replace(/_tab$/, ''));"
        )
        self.execute_command("on", "shown.bs.tab", 'a[data-toggle="tab"]', JsClosure(script, ["event"]),
                             priority=PRIORITY_HIGH)

    def validate(self) -> bool:
        return True
