# strapkit/demo.py
"""
A form that shows every widget.

`strapkit render` writes it to a file and `strapkit preview` opens it in a
window; the tests drive it through `handle_ajax`.
"""

import logging

from . import bootstrap as bs
from .actions import AjaxAction, ServerAction
from .core import Form
from .events import CarouselSelect, Click, DialogButton, DropdownSelect, NavbarSelect
from .lists import RadioButtonList
from .widgets import Alert, Button, HorizontalForm, Label, Modal, Panel, RadioList, TextBox
from .widgets_more import (
    Accordion, Carousel, CarouselItem, Dropdown, DropdownDivider, DropdownHeader, DropdownItem,
    ListGroup, Navbar, NavbarDropdown, NavbarItem, NavbarList, Pager, Tabs,
)

logger = logging.getLogger(__name__)

FRUITS = ["Apple", "Banana", "Cherry", "Damson", "Elderberry", "Fig", "Grape", "Huckleberry", "Kiwi",
          "Lemon", "Mango", "Nectarine"]

SECTIONS = [
    {"title": "Getting started", "body": "Construct widgets on a form, then configure them."},
    {"title": "Events", "body": "Bind actions to events; handlers run on the server."},
    {"title": "Updates", "body": "Only what changed is sent back to the page."},
]


class DemoForm(Form):
    """Every widget on one page, wired to small handlers that report what happened."""

    def __init__(self, form_id: str = "demo", title: str = "strapkit demo"):
        super().__init__(form_id, title)

    def form_create(self):
        self.status = Alert(self, "status")
        self.status.style_class = bs.ALERT_INFO
        self.status.text = "Click around; results show up here."

        self._create_navbar()
        self._create_carousel()

        self.tabs = Tabs(self, "tabs")
        for pane_id, name, builder in (
            ("tab_accordion", "Accordion", self._create_accordion),
            ("tab_lists", "Lists", self._create_lists),
            ("tab_inputs", "Inputs", self._create_inputs),
        ):
            pane = Panel(self.tabs, pane_id)
            pane.name = name
            builder(pane)

        self._create_modals()

    # --- Builders ---
    def _create_navbar(self):
        self.navbar = Navbar(self, "navbar")
        self.navbar.header_text = "strapkit"
        self.navbar.style_class = bs.NAVBAR_INVERSE
        menu = NavbarList(self.navbar, "menu")
        menu.add_menu_item(NavbarItem("Home", "home", item_id="nav_home"))
        more = NavbarDropdown("More", item_id="nav_more")
        more.add_item(NavbarItem("About", "about", item_id="nav_about"))
        more.add_item(NavbarItem("Help", "help", item_id="nav_help"))
        menu.add_menu_item(more)
        self.navbar.add_action(NavbarSelect(), AjaxAction("navbar_select"))

    def _create_carousel(self):
        self.carousel = Carousel(self, "carousel")
        for index in range(1, 4):
            self.carousel.add_item(CarouselItem(f"images/slide{index}.jpg", f"Slide {index}", f"Slide {index}"))
        self.carousel.add_action(CarouselSelect(), AjaxAction("carousel_select"))

    def _create_accordion(self, parent):
        self.accordion = Accordion(parent, "accordion")
        self.accordion.data_source = SECTIONS
        self.accordion.set_drawing_callback(draw_section)

    def _create_lists(self, parent):
        self.fruit_group = ListGroup(parent, "fruits")
        self.fruit_group.save_state = True
        self.fruit_group.set_data_binder(bind_fruits)
        self.fruit_group.set_item_params_callback(fruit_params)
        self.fruit_group.add_click_action(AjaxAction("fruit_click"))
        self.fruit_pager = Pager(parent, "fruit_pager")
        self.fruit_group.paginator = self.fruit_pager

        self.size_list = RadioList(parent, "sizes")
        self.size_list.name = "Size"
        self.size_list.button_mode = RadioButtonList.BUTTON_MODE_SET
        self.size_list.add_items([("Small", "s"), ("Medium", "m", True), ("Large", "l")])

        self.color_list = RadioList(parent, "colors")
        self.color_list.name = "Color"
        self.color_list.add_items({"red": "Red", "green": "Green", "blue": "Blue"})

        self.actions_dropdown = Dropdown(parent, "actions")
        self.actions_dropdown.text = "Actions"
        self.actions_dropdown.as_button = True
        self.actions_dropdown.style_class = bs.BUTTON_PRIMARY
        self.actions_dropdown.add_menu_item(DropdownHeader("Dialogs"))
        self.actions_dropdown.add_menu_item(DropdownItem("Open dialog", "dialog"))
        self.actions_dropdown.add_menu_item(DropdownItem("Show alert", "alert"))
        self.actions_dropdown.add_menu_item(DropdownDivider())
        self.actions_dropdown.add_menu_item(DropdownItem("Reset", "reset"))
        self.actions_dropdown.add_action(DropdownSelect(), AjaxAction("dropdown_select"))

        self.link_dropdown = Dropdown(parent, "links")
        self.link_dropdown.text = "Links"
        self.link_dropdown.up = True
        self.link_dropdown.add_menu_item(DropdownItem("Bootstrap", anchor="https://getbootstrap.com/docs/3.4/"))

    def _create_inputs(self, parent):
        self.entry_form = HorizontalForm(parent, "entry")
        self.first_name = TextBox(self.entry_form, "first_name")
        self.first_name.name = "First name"
        self.first_name.required = True
        self.email = TextBox(self.entry_form, "email")
        self.email.name = "Email"
        self.email.text_mode = TextBox.EMAIL
        self.email.placeholder = "name@example.com"
        self.email.right_text = "@"
        self.notes = TextBox(self.entry_form, "notes")
        self.notes.name = "Notes"
        self.notes.text_mode = TextBox.MULTI_LINE
        self.notes.max_length = 200
        self.notes.instructions = "Anything else we should know."
        self.summary = Label(self.entry_form, "summary")
        self.summary.name = "Summary"
        self.entry_form.set_label_column_size(bs.SMALL, 3)

        self.save_button = Button(self.entry_form, "save")
        self.save_button.text = "Save"
        self.save_button.primary_button = True
        self.save_button.add_action(Click(), AjaxAction("save_click", causes_validation=True))

        self.reload_button = Button(parent, "reload")
        self.reload_button.text = "Reload page"
        self.reload_button.glyph = "glyphicon glyphicon-refresh"
        self.reload_button.tip = "Full page round trip"
        self.reload_button.add_action(Click(), ServerAction("reload_click"))

    def _create_modals(self):
        self.info_dialog = Modal(self, "info_dialog")
        self.info_dialog.title = "About strapkit"
        self.info_dialog.text = "Server-rendered Bootstrap widgets."

        self.name_dialog = Modal(self, "name_dialog")
        self.name_dialog.title = "Your name"
        self.dialog_name = TextBox(self.name_dialog, "dialog_name")
        self.dialog_name.name = "Name"
        self.dialog_name.required = True
        self.name_dialog.add_button("OK", "ok", causes_validation=True, is_primary=True)
        self.name_dialog.add_button("Cancel", "cancel")
        self.name_dialog.add_action(DialogButton(), AjaxAction("name_dialog_button"))

    # --- Handlers ---
    def _report(self, message: str) -> None:
        logger.debug("Demo: %s", message)
        self.status.text = message

    def navbar_select(self, params):
        self._report(f"Navbar: {self.navbar.selected_id or params.event_data}")

    def carousel_select(self, params):
        self._report(f"Carousel: {params.event_data}")

    def fruit_click(self, params):
        self._report(f"Fruit: {params.param}")

    def dropdown_select(self, params):
        data = params.event_data or {}
        value = data.get("value") if isinstance(data, dict) else data
        if value == "dialog":
            self.name_dialog.show_dialog_box()
        elif value == "alert":
            Modal.alert(self, "Hello from the server.", "OK")
        elif value == "reset":
            self.fruit_pager.page_number = 1
            self._report("Reset")
        else:
            self._report(f"Dropdown: {value}")

    def save_click(self, params):
        self.summary.text = f"{self.first_name.text} <{self.email.text}>"
        self.first_name.mark_valid()
        self._report("Saved")

    def reload_click(self, params):
        self._report("Page reloaded")

    def name_dialog_button(self, params):
        if params.event_data == "ok":
            self._report(f"Hello, {self.dialog_name.text}")
        self.name_dialog.hide_dialog_box()


def draw_section(accordion, part, item, index):
    if part == Accordion.RENDER_HEADER:
        return accordion.render_toggle_helper(item["title"])
    if part == Accordion.RENDER_BODY:
        return item["body"]
    return ""


def bind_fruits(group):
    group.data_source = FRUITS


def fruit_params(item, index):
    return {"html": item, "id": item.lower()}
