# tests/test_widgets.py
import unittest

from strapkit import bootstrap as bs
from strapkit.config import Config
from strapkit.core import Form
from strapkit.exceptions import CallerError
from strapkit.js import PRIORITY_HIGH, PRIORITY_LOW
from strapkit.lists import RadioButtonList
from strapkit.widgets import Alert, Button, Checkbox, HorizontalForm, Label, Modal, RadioList, TextBox


class WidgetTestCase(unittest.TestCase):
    def setUp(self):
        Config.reset()
        self.form = Form()

    def tearDown(self):
        Config.reset()

    def commands(self):
        return [(c.selector, c.method, c.args, c.priority) for c in self.form.pop_commands()]


class TestButton(WidgetTestCase):
    def test_glyph(self):
        button = Button(self.form, "save")
        button.text = "Save"
        button.glyph = "glyphicon glyphicon-ok"
        self.assertEqual(button.get_inner_html(), '<i class="glyphicon glyphicon-ok" aria-hidden="true"></i> Save')

    def test_tip_sets_tooltip_attributes(self):
        button = Button(self.form, "save")
        button.tip = "Saves it"
        html = button.render()
        self.assertIn('data-toggle="tooltip"', html)
        self.assertIn('title="Saves it"', html)
        self.assertIn(("#save", "tooltip", [], 1), self.commands())
        button.tip = ""
        self.assertNotIn("tooltip", button.render())

    def test_primary_button(self):
        button = Button(self.form, "save")
        button.primary_button = True
        self.assertEqual(button.style_class, bs.BUTTON_PRIMARY)
        button.primary_button = False
        self.assertEqual(button.style_class, bs.BUTTON_DEFAULT)


class TestAlert(WidgetTestCase):
    def test_classes(self):
        alert = Alert(self.form, "note")
        alert.style_class = bs.ALERT_SUCCESS
        self.assertEqual(alert.css_class, "alert fade in alert-success")
        alert.style_class = bs.ALERT_DANGER
        self.assertEqual(alert.css_class, "alert fade in alert-danger")
        self.assertIn('role="alert"', alert.render())

    def test_dismissable(self):
        alert = Alert(self.form, "note")
        alert.set("HasCloseButton", True)
        self.assertTrue(alert.has_css_class(bs.ALERT_DISMISSABLE))
        html = alert.render()
        self.assertIn('data-dismiss="alert"', html)
        self.assertIn("closed.bs.alert", [c[2][0] for c in self.commands() if c[1] == "on"])

    def test_close(self):
        alert = Alert(self.form, "note")
        alert.close()
        self.assertFalse(alert.visible)
        self.assertEqual(self.commands(), [("#note", "alert", ["close"], 1)])

    def test_client_closed_alert_stays_hidden(self):
        alert = Alert(self.form, "note")
        alert.set_client_property("_Visible", "false")
        self.assertEqual(alert.render(), '<span id="note" style="display:none"></span>')


class TestTextBox(WidgetTestCase):
    def test_text_input(self):
        box = TextBox(self.form, "name")
        box.placeholder = "Your name"
        box.text = 'A "quoted" value'
        html = box.render()
        self.assertIn('type="text"', html)
        self.assertIn('placeholder="Your name"', html)
        self.assertIn('value="A &quot;quoted&quot; value"', html)

    def test_multi_line(self):
        box = TextBox(self.form, "notes")
        box.text_mode = TextBox.MULTI_LINE
        box.rows = 4
        box.text = "<b>"
        html = box.render()
        self.assertTrue(html.startswith('<textarea id="notes"'))
        self.assertIn('rows="4"', html)
        self.assertTrue(html.endswith(">&lt;b&gt;</textarea>"))

    def test_unknown_mode(self):
        box = TextBox(self.form, "name")
        with self.assertRaises(CallerError):
            box.text_mode = "colour"

    def test_input_group(self):
        box = TextBox(self.form, "price")
        box.left_text = "$"
        html = box.render()
        self.assertTrue(html.startswith('<div class="input-group"><span class="input-group-addon">$</span><input'))

    def test_parse_post_data(self):
        box = TextBox(self.form, "name")
        box.parse_post_data({"name": "Ada"})
        self.assertEqual(box.text, "Ada")
        box.enabled = False
        box.parse_post_data({"name": "Bob"})
        self.assertEqual(box.text, "Ada")

    def test_max_length(self):
        box = TextBox(self.form, "code")
        box.name = "Code"
        box.max_length = 3
        box.text = "abcd"
        self.assertFalse(box.validate())
        self.assertEqual(box.validation_error, "Code may have a maximum of 3 characters")


class TestCheckbox(WidgetTestCase):
    def test_block(self):
        box = Checkbox(self.form, "agree")
        box.text = "I agree"
        self.assertEqual(
            box.render(),
            '<div class="checkbox"><label for="agree"><input id="agree" type="checkbox" name="agree" value="1">'
            ' I agree</label></div>',
        )

    def test_inline_checked(self):
        box = Checkbox(self.form, "agree")
        box.inline = True
        box.checked = True
        html = box.render()
        self.assertTrue(html.startswith('<label class="checkbox-inline" for="agree">'))
        self.assertIn(" checked", html)

    def test_form_group_moves_name_into_label(self):
        box = Checkbox(self.form, "agree")
        box.name = "Subscribe"
        html = box.render_form_group()
        self.assertNotIn("control-label", html)
        self.assertIn("> Subscribe</label>", html)

    def test_parse_post_data(self):
        box = Checkbox(self.form, "agree")
        box.parse_post_data({"agree": "true"})
        self.assertTrue(box.checked)
        box.parse_post_data({"agree": False})
        self.assertFalse(box.checked)


class TestRadioList(WidgetTestCase):
    def setUp(self):
        super().setUp()
        self.radio = RadioList(self.form, "size")
        self.radio.name = "Size"
        self.radio.add_items([("Small", "s"), ("Large", "l")])

    def test_plain_items(self):
        html = self.radio.render()
        self.assertIn('<div class="radio"><label><input type="radio" name="size" id="size_0" value="0"> Small</label></div>',
                      html)

    def test_button_set(self):
        self.radio.button_mode = RadioButtonList.BUTTON_MODE_SET
        self.radio.selected_index = 1
        html = self.radio.render()
        self.assertIn('class="btn-group" data-toggle="buttons"', html)
        self.assertIn('<label class="btn btn-default active">', html)

    def test_button_list_is_vertical(self):
        self.radio.button_mode = RadioButtonList.BUTTON_MODE_LIST
        self.assertIn('class="btn-group-vertical"', self.radio.render())

    def test_group_name(self):
        self.radio.group_name = "sizes"
        self.assertIn('name="sizes"', self.radio.render())

    def test_group_name_post_data(self):
        self.radio.group_name = "sizes"
        self.form.render()
        self.form.handle_ajax({"values": {"sizes": "1"}})
        self.assertEqual(self.radio.selected_index, 1)
        self.radio.parse_post_data({"size": "0"})
        self.assertEqual(self.radio.selected_index, -1)

    def test_selection(self):
        self.radio.selected_value = "l"
        self.assertEqual(self.radio.selected_index, 1)
        self.assertEqual(self.radio.selected_name, "Large")
        with self.assertRaises(CallerError):
            self.radio.selected_index = 5

    def test_none_clears_selection(self):
        self.radio.add_item("Any")
        self.radio.selected_index = 1
        self.radio.selected_value = None
        self.assertEqual(self.radio.selected_index, -1)

    def test_post_data_is_an_index(self):
        self.radio.parse_post_data({"size": "1"})
        self.assertEqual(self.radio.selected_value, "l")
        self.radio.parse_post_data({})
        self.assertIsNone(self.radio.selected_item)

    def test_required(self):
        self.radio.required = True
        self.assertFalse(self.radio.validate())
        self.assertEqual(self.radio.validation_error, "Size is required")


class TestHorizontalForm(WidgetTestCase):
    def test_children_render_as_form_groups(self):
        entry = HorizontalForm(self.form, "entry")
        box = TextBox(entry, "name")
        box.name = "Name"
        static = Label(entry, "static")
        static.text = "Fixed"
        entry.set_label_column_size(bs.SMALL, 2)
        html = entry.render()
        self.assertTrue(html.startswith('<div id="entry" class="form-horizontal">'))
        self.assertIn('<div id="name_ctl" class="form-group">', html)
        self.assertIn('<label for="name" class="control-label col-sm-2">Name</label>', html)
        self.assertIn('<div class="col-sm-10">', html)
        self.assertIn('class="form-control-static"', html)
        self.assertEqual(box.render_method, "render_form_group")


class TestModal(WidgetTestCase):
    def setUp(self):
        super().setUp()
        self.dialog = Modal(self.form, "dlg")

    def test_initial_state(self):
        self.assertEqual(self.dialog.wrapper_styler.css_class, "modal fade")
        self.assertEqual(self.dialog.css_class, "modal-dialog")
        self.assertFalse(self.dialog.display)
        self.assertIs(self.dialog.causes_validation, self.dialog)
        attributes = self.dialog.get_wrapper_attributes()
        self.assertEqual(attributes["tabindex"], "-1")
        self.assertEqual(attributes["style"], "display:none")
        self.assertIn(Config().get_nested("assets.bootstrap_css"), self.form.css_files)

    def test_fade_toggle(self):
        self.dialog.fade = False
        self.assertEqual(self.dialog.wrapper_styler.css_class, "modal")

    def test_header_and_buttons(self):
        self.dialog.title = "Title"
        self.dialog.add_button("OK", "ok", is_primary=True)
        self.dialog.add_close_button("Cancel")
        html = self.dialog.render()
        self.assertIn('<div class="modal-header bg-primary">', html)
        self.assertIn('<h4 class="modal-title">Title</h4>', html)
        self.assertIn('<button type="button" class="btn btn-primary" data-btnid="ok">OK</button>', html)
        self.assertIn('<button type="button" class="btn btn-default" data-dismiss="modal">Cancel</button>', html)

    def test_dialog_state_colors_header(self):
        self.dialog.dialog_state = Modal.STATE_ERROR
        self.assertEqual(self.dialog.get_header_classes(), bs.BACKGROUND_DANGER)

    def test_remove_button(self):
        self.dialog.add_button("One", "one")
        self.dialog.add_button("Two", "two")
        self.dialog.remove_button("one")
        self.assertEqual([b["id"] for b in self.dialog.get_buttons()], ["two"])

    def test_title_stays_inside_script(self):
        self.dialog.title = "</script><script>alert(1)</script>"
        page = self.form.render()
        self.assertNotIn("</script><script>alert(1)", page)
        self.assertIn("&lt;/script&gt;&lt;script&gt;alert(1)", page)
        self.assertIn('"title": "\\u003c/script\\u003e\\u003cscript\\u003ealert(1)', page)

    def test_widget_setup_commands(self):
        self.dialog.render()
        commands = self.commands()
        self.assertEqual([c[1] for c in commands], ["off", "bsModal"])
        self.assertTrue(all(c[0] == "#dlg_ctl" and c[3] == PRIORITY_HIGH for c in commands))
        self.assertFalse(commands[1][2][0]["show"])

    def test_show_dialog_box(self):
        self.dialog.clear_modified()
        self.dialog.show_dialog_box()
        self.assertTrue(self.dialog.display)
        self.assertTrue(self.dialog.wrapper_modified)
        self.assertEqual(self.commands(), [("#dlg_ctl", "bsModal", ["open"], PRIORITY_LOW)])

    def test_open_dialog_owns_wrapper(self):
        self.dialog.set_client_property("_IsOpen", True)
        attributes = self.dialog.get_wrapper_attributes()
        self.assertEqual(attributes["class"], "modal fade in")
        self.assertEqual(attributes["style"], "display:block")
        self.dialog.clear_modified()
        self.dialog.fade = False
        self.assertFalse(self.dialog.wrapper_modified)

    def test_validation_gating(self):
        box = TextBox(self.dialog, "dlg_name")
        box.required = True
        self.dialog.add_button("OK", "ok", causes_validation=True)
        self.dialog.add_button("Cancel", "cancel")
        # closed dialogs never block
        self.assertTrue(self.dialog.validate_control_and_children())
        self.dialog.set_client_property("_IsOpen", True)
        self.dialog.set_client_property("_ClickedButton", "cancel")
        self.assertTrue(self.dialog.validate_control_and_children())
        self.dialog.set_client_property("_ClickedButton", "ok")
        self.assertFalse(self.dialog.validate_control_and_children())

    def test_closing_resets_validation(self):
        box = TextBox(self.dialog, "dlg_name")
        box.validation_error = "Bad"
        self.dialog.set_client_property("_IsOpen", False)
        self.assertEqual(box.validation_error, "")

    def test_alert_with_one_button(self):
        self.form.pop_commands()
        dlg = Modal.alert(self.form, "Saved", "OK")
        self.assertFalse(dlg.has_close_button)
        self.assertTrue(dlg.get_buttons()[0]["close"])
        self.assertEqual(self.commands(), [(f"#{dlg.control_id}_ctl", "bsModal", ["open"], PRIORITY_LOW)])

    def test_alert_with_several_buttons(self):
        dlg = Modal.alert(self.form, "Sure?", ["Yes", "No"])
        buttons = dlg.get_buttons()
        self.assertTrue(buttons[0]["isPrimary"])
        self.assertEqual([b["id"] for b in buttons], ["Yes", "No"])

    def test_alert_removes_itself(self):
        dlg = Modal.alert(self.form, "Bye")
        self.assertTrue(dlg.has_close_button)
        dlg.alert_close()
        self.assertFalse(self.form.has_control(dlg.control_id))


if __name__ == "__main__":
    unittest.main()
