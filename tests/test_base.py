# tests/test_base.py
import unittest

from strapkit import bootstrap as bs
from strapkit.config import Config
from strapkit.core import Form
from strapkit.exceptions import CallerError, InvalidCastError
from strapkit.widgets import Button, Panel, TextBox
from strapkit.widgets_more import Dropdown


class ControlTestCase(unittest.TestCase):
    def setUp(self):
        Config.reset()
        self.form = Form()

    def tearDown(self):
        Config.reset()


class TestControlIds(ControlTestCase):
    def test_generated_ids(self):
        first = Button(self.form)
        second = Button(self.form)
        self.assertEqual((first.control_id, second.control_id), ("c1", "c2"))

    def test_generated_id_skips_taken(self):
        Button(self.form, "c1")
        self.assertEqual(Button(self.form).control_id, "c2")

    def test_invalid_id(self):
        with self.assertRaises(CallerError):
            Button(self.form, "1bad id")

    def test_duplicate_id(self):
        Button(self.form, "btn")
        with self.assertRaises(CallerError):
            Button(self.form, "btn")

    def test_children_register_with_form_and_parent(self):
        panel = Panel(self.form, "panel")
        child = Button(panel, "child")
        self.assertIs(self.form.get_control("child"), child)
        self.assertEqual(panel.get_child_controls(), [child])
        self.assertEqual(self.form.get_child_controls(), [panel])


class TestClassDescriptors(ControlTestCase):
    def test_defaults_applied(self):
        button = Button(self.form, "btn")
        self.assertEqual(button.css_class, "btn btn-default")

    def test_choice_swaps_class(self):
        button = Button(self.form, "btn")
        button.style_class = bs.BUTTON_DANGER
        button.size_class = bs.BUTTON_LARGE
        self.assertEqual(button.css_class, "btn btn-danger btn-lg")
        button.size_class = bs.BUTTON_MEDIUM
        self.assertEqual(button.css_class, "btn btn-danger")

    def test_toggle_on_wrapper_only_marks_wrapper(self):
        dropdown = Dropdown(self.form, "dd")
        dropdown.clear_modified()
        dropdown.up = True
        self.assertTrue(dropdown.wrapper_styler.has_css_class("dropup"))
        self.assertTrue(dropdown.wrapper_modified)
        self.assertFalse(dropdown.modified)
        dropdown.up = "false"
        self.assertFalse(dropdown.wrapper_styler.has_css_class("dropup"))

    def test_control_write_marks_modified(self):
        button = Button(self.form, "btn")
        button.clear_modified()
        button.style_class = bs.BUTTON_DEFAULT
        self.assertFalse(button.modified)
        button.style_class = bs.BUTTON_INFO
        self.assertTrue(button.modified)


class TestGenericProperties(ControlTestCase):
    def test_set_by_pascal_name(self):
        button = Button(self.form, "btn")
        button.set("StyleClass", bs.BUTTON_SUCCESS)
        button.set("Text", "Go")
        self.assertEqual(button.get("StyleClass"), bs.BUTTON_SUCCESS)
        self.assertEqual(button.get("Text"), "Go")
        self.assertIn(bs.BUTTON_SUCCESS, button.get("CssClass"))

    def test_unknown_property(self):
        button = Button(self.form, "btn")
        with self.assertRaises(CallerError):
            button.set("NoSuchThing", 1)
        with self.assertRaises(CallerError):
            button.get("NoSuchThing")

    def test_values_are_cast(self):
        button = Button(self.form, "btn")
        button.set("Enabled", "false")
        self.assertFalse(button.enabled)
        with self.assertRaises(InvalidCastError):
            button.set("Visible", "perhaps")

    def test_unknown_client_property_is_logged(self):
        button = Button(self.form, "btn")
        with self.assertLogs("strapkit.base", level="WARNING"):
            button.set_client_property("Bogus", 1)


class TestRendering(ControlTestCase):
    def test_button_markup(self):
        button = Button(self.form, "btn")
        button.text = "<Go>"
        html = button.render()
        self.assertTrue(html.startswith('<button id="btn" type="button" class="btn btn-default">'))
        self.assertIn("&lt;Go&gt;", html)

    def test_disabled(self):
        button = Button(self.form, "btn")
        button.enabled = False
        self.assertIn(" disabled", button.render())

    def test_invisible_placeholder(self):
        button = Button(self.form, "btn")
        button.visible = False
        self.assertEqual(button.render(), '<span id="btn" style="display:none"></span>')
        panel = Panel(self.form, "panel")
        panel.use_wrapper = True
        panel.visible = False
        self.assertEqual(panel.render(), '<div id="panel_ctl" style="display:none"></div>')

    def test_display_on_plain_control(self):
        panel = Panel(self.form, "panel")
        panel.display = False
        self.assertIn('style="display:none"', panel.render())

    def test_display_on_wrapper(self):
        panel = Panel(self.form, "panel")
        panel.use_wrapper = True
        panel.clear_modified()
        panel.display = False
        self.assertTrue(panel.wrapper_modified)
        self.assertFalse(panel.modified)
        self.assertEqual(panel.get_wrapper_attributes(), {"id": "panel_ctl", "style": "display:none"})

    def test_display_on_bootstrap_control_uses_hidden_class(self):
        button = Button(self.form, "btn")
        button.display = False
        self.assertTrue(button.has_css_class(bs.HIDDEN))
        self.assertNotIn("display:none", button.render())
        button.display = True
        self.assertFalse(button.has_css_class(bs.HIDDEN))

    def test_wrapper_outer_id(self):
        panel = Panel(self.form, "panel")
        self.assertEqual(panel.get_outer_id(), "panel")
        panel.use_wrapper = True
        self.assertEqual(panel.get_outer_id(), "panel_ctl")
        self.assertTrue(panel.render().startswith('<div id="panel_ctl">'))


class TestFormGroup(ControlTestCase):
    def setUp(self):
        super().setUp()
        self.box = TextBox(self.form, "name")
        self.box.name = "Name"
        self.box.required = True

    def test_label_and_input(self):
        html = self.box.render_form_group()
        self.assertIn('<div id="name_ctl" class="form-group">', html)
        self.assertIn('<label for="name" class="control-label">Name</label>', html)
        self.assertIn('class="form-control"', html)
        self.assertEqual(self.box.render_method, "render_form_group")

    def test_validation_error_state(self):
        self.box.render_form_group()
        self.assertFalse(self.form.validate())
        self.assertEqual(self.box.validation_error, "Name is required")
        self.assertEqual(self.box.validation_state, bs.HAS_ERROR)
        html = self.box.render_form_group()
        self.assertIn('class="form-group has-error"', html)
        self.assertIn('<p class="help-block" id="name_error">Name is required</p>', html)
        self.assertIn('aria-describedby="name_error"', html)

    def test_reset_clears_state(self):
        self.box.render_form_group()
        self.form.validate()
        self.form.reset_validation_states()
        self.assertEqual(self.box.validation_error, "")
        self.assertFalse(self.box.wrapper_styler.has_css_class(bs.HAS_ERROR))

    def test_warning_then_success(self):
        self.box.render_form_group()
        self.box.warning = "Check this"
        self.assertEqual(self.box.validation_state, bs.HAS_WARNING)
        self.box.warning = ""
        self.box.mark_valid()
        self.assertEqual(self.box.validation_state, bs.HAS_SUCCESS)

    def test_instructions_help_block(self):
        self.box.instructions = "Your full name"
        html = self.box.render_form_group()
        self.assertIn('<p class="help-block" id="name_help">Your full name</p>', html)

    def test_horizontal_columns(self):
        self.box.set_horizontal_label_column_width(bs.SMALL, 3)
        self.assertIn("col-sm-3", self.box.label_css_class)
        self.assertEqual(self.box.horizontal_class, "col-sm-9")
        self.assertIn('<div class="col-sm-9">', self.box.render_form_group())

    def test_horizontal_offset_without_label(self):
        self.box.name = ""
        self.box.set_horizontal_label_column_width(bs.MEDIUM, 4)
        self.assertEqual(self.box.horizontal_class, "col-md-8 col-md-offset-4")


if __name__ == "__main__":
    unittest.main()
