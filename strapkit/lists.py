# strapkit/lists.py
"""
List primitives the widgets build on: item lists, data repeaters,
paginators and single-selection list controls.
"""

import logging
import math
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .actions import AjaxControl, Proxy
from .base import BootstrapControl, Control
from .cast import cast
from .config import get_config
from .events import ActionParams, Click
from .exceptions import CallerError
from .markup import TagStyler, escape, render_tag

logger = logging.getLogger(__name__)


class ListItemStyle(TagStyler):
    """Attribute state of one ``<li>``; shared styles are copied onto items that have none."""

    def merge_into(self, other: "ListItemStyle") -> Dict[str, Any]:
        """Attributes of `other` layered over this style."""
        attributes = self.render_html_attributes()
        mine = attributes.get("class", "")
        theirs = other.render_html_attributes()
        attributes.update(theirs)
        if mine and theirs.get("class"):
            attributes["class"] = f"{mine} {theirs['class']}"
        return attributes


class ListItem:
    """
    One entry of an `HList` (or a list control).

    :param text: Display text, escaped on render.
    :param value: Arbitrary value; rendered as ``data-value`` in lists.
    :param anchor: Optional href; the text is then rendered inside an ``<a>``.
    :param item_id: DOM id; assigned by the owning list when omitted.
    """

    def __init__(self, text: str = "", value: Any = None, anchor: Optional[str] = None,
                 item_id: Optional[str] = None):
        self.text = text
        self.value = value
        self.anchor = anchor
        self.item_id = item_id
        self.item_style = ListItemStyle()
        self.items: List["ListItem"] = []
        self.parent_item: Optional["ListItem"] = None
        self._owner: Optional["HList"] = None

    def add_item(self, item: Union["ListItem", str], value: Any = None, anchor: Optional[str] = None) -> "ListItem":
        if not isinstance(item, ListItem):
            item = ListItem(item, value, anchor)
        item.parent_item = self
        self.items.append(item)
        if self._owner is not None:
            self._owner._adopt(item)
        return item

    def add_items(self, items: List[Union["ListItem", str]]) -> None:
        for item in items:
            self.add_item(item)

    def get_item_count(self) -> int:
        return len(self.items)

    def get_item_text(self) -> str:
        text = escape(self.text)
        if self.anchor:
            return render_tag("a", {"href": self.anchor}, text, no_space=True)
        return text

    def get_sub_tag_attributes(self) -> Optional[Dict[str, Any]]:
        """Attributes of the nested ``<ul>`` holding sub items."""
        return None

    def __repr__(self):
        return f"{type(self).__name__}({self.text!r}, value={self.value!r})"


class HList(Control):
    """
    A ``<ul>`` of `ListItem`s, optionally nested.

    Items get ``<list id>_<n>`` ids when none is given.
    """
    tag_name = "ul"
    item_tag = "li"

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self._items: List[ListItem] = []
        self._item_counter = 0
        self._data_binder: Optional[Callable[["HList"], None]] = None
        self.item_style = ListItemStyle()

    def _adopt(self, item: ListItem) -> None:
        item._owner = self
        if not item.item_id:
            self._item_counter += 1
            item.item_id = f"{self.control_id}_{self._item_counter}"
        for sub in item.items:
            self._adopt(sub)
        self.mark_as_modified()

    def add_item(self, item: Union[ListItem, str], value: Any = None, anchor: Optional[str] = None) -> ListItem:
        if not isinstance(item, ListItem):
            item = ListItem(item, value, anchor)
        self._items.append(item)
        self._adopt(item)
        return item

    def add_list_item(self, item: ListItem) -> ListItem:
        if not isinstance(item, ListItem):
            raise CallerError(f"{type(self).__name__}.add_list_item expects a ListItem")
        return self.add_item(item)

    def add_items(self, items: List[Union[ListItem, str]]) -> None:
        for item in items:
            self.add_item(item)

    def get_all_items(self) -> List[ListItem]:
        return list(self._items)

    def get_item(self, index: int) -> ListItem:
        return self._items[index]

    def get_item_count(self) -> int:
        return len(self._items)

    def find_item(self, item_id: str) -> Optional[ListItem]:
        pending = list(self._items)
        while pending:
            item = pending.pop(0)
            if item.item_id == item_id:
                return item
            pending.extend(item.items)
        return None

    def remove_all_items(self) -> None:
        if self._items:
            self._items = []
            self.mark_as_modified()

    def set_data_binder(self, binder: Callable[["HList"], None]) -> None:
        """`binder(list)` is called before each draw to (re)load the items."""
        self._data_binder = binder

    def data_bind(self) -> None:
        if self._data_binder is not None:
            self._data_binder(self)

    def pre_render(self) -> None:
        self.data_bind()

    def get_item_attributes(self, item: ListItem) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {"id": item.item_id}
        if item.value is not None:
            attributes["data-value"] = str(item.value)
        attributes.update(self.item_style.merge_into(item.item_style))
        return attributes

    def get_item_html(self, item: ListItem) -> str:
        inner = item.get_item_text()
        if item.items:
            inner += "\n" + self.get_sub_list_html(item)
        return render_tag(self.item_tag, self.get_item_attributes(item), inner, no_space=not item.items)

    def get_sub_list_html(self, item: ListItem) -> str:
        return render_tag("ul", item.get_sub_tag_attributes(), self.get_items_html(item.items))

    def get_items_html(self, items: List[ListItem]) -> str:
        return "\n".join(self.get_item_html(item) for item in items)

    def get_control_html(self) -> str:
        return self.render_tag(inner=self.get_items_html(self._items))


class DataRepeater(Control):
    """
    Draws one block of html per entry of `data_source`.

    Subclasses implement `get_item_html`. With a `paginator` attached, only the
    current page is drawn and the paginator learns the total item count.
    """

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self._data_source: List[Any] = []
        self._data_binder: Optional[Callable[["DataRepeater"], None]] = None
        self._paginator: Optional["Paginator"] = None
        self.current_item_index = -1
        self.save_state = False

    @property
    def data_source(self) -> List[Any]:
        return self._data_source

    @data_source.setter
    def data_source(self, items):
        items = list(items or [])
        if items != self._data_source:
            self._data_source = items
            self.mark_as_modified()

    def set_data_binder(self, binder: Callable[["DataRepeater"], None]) -> None:
        self._data_binder = binder
        self.mark_as_modified()

    def data_bind(self) -> None:
        if self._data_binder is not None:
            self._data_binder(self)

    def pre_render(self) -> None:
        self.data_bind()
        if self._paginator is not None:
            self._paginator.total_item_count = len(self._data_source)

    @property
    def paginator(self) -> Optional["Paginator"]:
        return self._paginator

    @paginator.setter
    def paginator(self, paginator: Optional["Paginator"]):
        self._paginator = paginator
        if paginator is not None:
            paginator.paginated_control = self
        self.mark_as_modified()

    def get_page_items(self) -> List[Tuple[int, Any]]:
        """(absolute index, item) pairs to draw for the current page."""
        items = self._data_source
        if self._paginator is None:
            return list(enumerate(items))
        self._paginator.total_item_count = len(items)
        start = (self._paginator.page_number - 1) * self._paginator.items_per_page
        stop = start + self._paginator.items_per_page
        return list(enumerate(items))[start:stop]

    def get_item_html(self, item: Any) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement get_item_html()")

    def get_items_html(self) -> str:
        parts = []
        for index, item in self.get_page_items():
            self.current_item_index = index
            parts.append(self.get_item_html(item))
        self.current_item_index = -1
        return "\n".join(parts)

    def get_control_html(self) -> str:
        return self.render_tag(inner=self.get_items_html())


class Paginator(Control):
    """
    Page bookkeeping for a `DataRepeater`.

    `page_number` is always within ``[1, page_count]``; `page_count` is at least 1.
    Page links are drawn through `proxy`, which fires `page_click`.
    """
    tag_name = "span"

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self._items_per_page = int(get_config().get_nested("pager.items_per_page", 5))
        self._total_item_count = 0
        self._page_number = 1
        self.paginated_control: Optional[DataRepeater] = None
        self.proxy = Proxy(self)
        self.proxy.add_action(Click(), AjaxControl(self, "page_click"))

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @items_per_page.setter
    def items_per_page(self, value):
        value = cast(value, int)
        if value < 1:
            raise CallerError("items_per_page must be at least 1")
        if value != self._items_per_page:
            self._items_per_page = value
            self._clamp()
            self._changed()

    @property
    def total_item_count(self) -> int:
        return self._total_item_count

    @total_item_count.setter
    def total_item_count(self, value):
        value = max(0, cast(value, int))
        if value != self._total_item_count:
            self._total_item_count = value
            self._clamp()
            self.mark_as_modified()

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self._total_item_count / self._items_per_page))

    @property
    def page_number(self) -> int:
        return self._page_number

    @page_number.setter
    def page_number(self, value):
        value = min(max(1, cast(value, int)), self.page_count)
        if value != self._page_number:
            self._page_number = value
            self._changed()

    def _clamp(self):
        self._page_number = min(max(1, self._page_number), self.page_count)

    def _changed(self):
        self.mark_as_modified()
        if self.paginated_control is not None:
            self.paginated_control.mark_as_modified()

    def page_click(self, params: ActionParams) -> None:
        logger.debug("Paginator %s -> page %s", self.control_id, params.param)
        self.page_number = params.param

    def get_control_html(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement get_control_html()")


class ListControl(BootstrapControl):
    """A single-selection list of ``(label, value)`` items."""
    label_for_input = True

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self._items: List[ListItem] = []
        self._selected_index = -1

    def add_item(self, label: str, value: Any = None, selected: bool = False) -> ListItem:
        item = ListItem(label, value, item_id=f"{self.control_id}_{len(self._items)}")
        self._items.append(item)
        if selected:
            self.selected_index = len(self._items) - 1
        self.mark_as_modified()
        return item

    def add_items(self, items: Union[Dict[Any, str], List[Any]]) -> None:
        """Add from a ``{value: label}`` dict or a list of labels / ``(label, value)`` pairs."""
        if isinstance(items, dict):
            for value, label in items.items():
                self.add_item(label, value)
            return
        for entry in items:
            if isinstance(entry, tuple):
                self.add_item(*entry)
            else:
                self.add_item(entry)

    def get_item(self, index: int) -> ListItem:
        return self._items[index]

    def get_all_items(self) -> List[ListItem]:
        return list(self._items)

    def get_input_name(self) -> str:
        """The form field name the selection posts under."""
        return self.control_id

    def get_item_count(self) -> int:
        return len(self._items)

    def remove_all_items(self) -> None:
        self._items = []
        self._selected_index = -1
        self.mark_as_modified()

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @selected_index.setter
    def selected_index(self, value):
        value = cast(value, int)
        if value < -1 or value >= len(self._items):
            raise CallerError(f"Selected index {value} out of range for {self.control_id}")
        if value != self._selected_index:
            self._selected_index = value
            self.mark_as_modified()

    @property
    def selected_item(self) -> Optional[ListItem]:
        if self._selected_index < 0:
            return None
        return self._items[self._selected_index]

    @property
    def selected_value(self) -> Any:
        item = self.selected_item
        return item.value if item is not None else None

    @selected_value.setter
    def selected_value(self, value):
        if value is None:
            self.selected_index = -1
            return
        for index, item in enumerate(self._items):
            if item.value == value or str(item.value) == str(value):
                self.selected_index = index
                return
        self.selected_index = -1

    @property
    def selected_name(self) -> Optional[str]:
        item = self.selected_item
        return item.text if item is not None else None

    def parse_post_data(self, values: Dict[str, Any]) -> None:
        # submitted value is the item index; a missing key means nothing was picked
        if not self.enabled:
            return
        raw = values.get(self.get_input_name())
        if raw is None or raw == "":
            self._selected_index = -1
            return
        index = cast(raw, int)
        if 0 <= index < len(self._items):
            self._selected_index = index
        else:
            logger.warning("Ignoring out of range selection %r for %s", raw, self.control_id)

    def validate(self) -> bool:
        if self.required and self._selected_index == -1:
            self.validation_error = f"{self.name} is required" if self.name else "Required"
            return False
        return True


class RadioButtonList(ListControl):
    """
    A group of radio buttons.

    In `BUTTON_MODE_SET` / `BUTTON_MODE_LIST` the radios are drawn as a
    Bootstrap button group (horizontal or vertical) of ``label.btn`` toggles.
    """
    BUTTON_MODE_NONE = 0
    BUTTON_MODE_SET = 1
    BUTTON_MODE_LIST = 2

    def __init__(self, parent, control_id=None):
        super().__init__(parent, control_id)
        self._button_mode = self.BUTTON_MODE_NONE
        self.item_style = ListItemStyle(on_change=self.mark_as_modified)

    @property
    def button_mode(self) -> int:
        return self._button_mode

    @button_mode.setter
    def button_mode(self, value):
        value = cast(value, int)
        if value not in (self.BUTTON_MODE_NONE, self.BUTTON_MODE_SET, self.BUTTON_MODE_LIST):
            raise CallerError(f"Unknown button mode {value}")
        if value != self._button_mode:
            self._button_mode = value
            self.mark_as_modified()

    def render_radio(self, index: int, item: ListItem) -> str:
        attributes = {
            "type": "radio",
            "name": self.get_input_name(),
            "id": item.item_id,
            "value": str(index),
            "checked": index == self._selected_index,
            "disabled": not self.enabled,
        }
        return render_tag("input", attributes, is_void=True)

    def get_button_classes(self, index: int) -> str:
        classes = "btn"
        if index == self._selected_index:
            classes += " active"
        return classes

    def get_item_html(self, index: int, item: ListItem) -> str:
        radio = self.render_radio(index, item)
        if self._button_mode == self.BUTTON_MODE_NONE:
            label = render_tag("label", None, f"{radio} {escape(item.text)}", no_space=True)
            return render_tag("div", self.item_style.merge_into(item.item_style), label, no_space=True)
        return render_tag("label", {"class": self.get_button_classes(index)}, f"{radio} {escape(item.text)}",
                          no_space=True)

    def get_container_overrides(self) -> Dict[str, Any]:
        if self._button_mode == self.BUTTON_MODE_SET:
            return {"class": f"{self.css_class} btn-group".strip(), "data-toggle": "buttons"}
        if self._button_mode == self.BUTTON_MODE_LIST:
            return {"class": f"{self.css_class} btn-group-vertical".strip(), "data-toggle": "buttons"}
        return {}

    def get_control_html(self) -> str:
        inner = "\n".join(self.get_item_html(i, item) for i, item in enumerate(self._items))
        return self.render_tag("div", self.get_container_overrides(), inner=inner)
