# tests/test_markup.py
import unittest

from strapkit.cast import cast
from strapkit.exceptions import InvalidCastError
from strapkit.js import PRIORITY_HIGH, PRIORITY_LOW, ClientCommand, JsClosure, sort_commands, to_js
from strapkit.markup import (
    TagStyler, add_class, escape, has_class, remove_class, remove_classes_by_prefix,
    render_attributes, render_tag,
)


class TestEscape(unittest.TestCase):
    def test_special_characters(self):
        self.assertEqual(escape('<a href="x">&'), "&lt;a href=&quot;x&quot;&gt;&amp;")

    def test_none_is_empty(self):
        self.assertEqual(escape(None), "")


class TestRenderTag(unittest.TestCase):
    def test_attribute_values(self):
        rendered = render_attributes({"a": None, "b": False, "c": True, "d": "x"})
        self.assertEqual(rendered, ' c d="x"')

    def test_void(self):
        self.assertEqual(render_tag("input", {"type": "text"}, is_void=True), '<input type="text">')

    def test_empty_inner(self):
        self.assertEqual(render_tag("span", {"class": "caret"}), '<span class="caret"></span>')

    def test_no_space(self):
        self.assertEqual(render_tag("p", None, "hi", no_space=True), "<p>hi</p>")

    def test_block(self):
        self.assertEqual(render_tag("div", None, "hi"), "<div>\nhi\n</div>")


class TestClassHelpers(unittest.TestCase):
    def test_add_keeps_order_and_skips_duplicates(self):
        self.assertEqual(add_class("btn", "btn btn-lg"), ("btn btn-lg", True))
        self.assertEqual(add_class("btn btn-lg", "btn-lg"), ("btn btn-lg", False))

    def test_remove(self):
        self.assertEqual(remove_class("btn btn-lg active", "btn-lg active"), ("btn", True))
        self.assertEqual(remove_class("btn", "active"), ("btn", False))

    def test_remove_by_prefix(self):
        self.assertEqual(remove_classes_by_prefix("col-sm-4 col-sm-offset-2 x", "col-sm"), ("x", True))

    def test_has_class(self):
        self.assertTrue(has_class("a b c", "c a"))
        self.assertFalse(has_class("a b", "d"))
        self.assertFalse(has_class("a b", ""))


class TestTagStyler(unittest.TestCase):
    def setUp(self):
        self.changes = 0

        def on_change():
            self.changes += 1

        self.styler = TagStyler(on_change=on_change)

    def test_only_effective_changes_notify(self):
        self.assertTrue(self.styler.add_css_class("a"))
        self.assertFalse(self.styler.add_css_class("a"))
        self.assertTrue(self.styler.set_html_attribute("role", "button"))
        self.assertFalse(self.styler.set_html_attribute("role", "button"))
        self.assertTrue(self.styler.set_css_style("color", "red"))
        self.assertFalse(self.styler.remove_css_class("zzz"))
        self.assertEqual(self.changes, 3)

    def test_render_with_overrides(self):
        self.styler.add_css_class("a")
        self.styler.set_html_attribute("title", "t")
        self.styler.set_css_style("display", "none")
        attributes = self.styler.render_html_attributes({"title": None, "role": "x"}, {"display": None})
        self.assertEqual(attributes, {"class": "a", "role": "x"})

    def test_data_attribute(self):
        self.styler.set_data_attribute("toggle", "tooltip")
        self.assertEqual(self.styler.get_html_attribute("data-toggle"), "tooltip")

    def test_none_removes_attribute(self):
        self.styler.set_html_attribute("title", "t")
        self.styler.set_html_attribute("title", None)
        self.assertIsNone(self.styler.get_html_attribute("title"))


class TestCast(unittest.TestCase):
    def test_bool_strings(self):
        self.assertTrue(cast("true", bool))
        self.assertTrue(cast("1", bool))
        self.assertFalse(cast("false", bool))
        self.assertFalse(cast("", bool))

    def test_int(self):
        self.assertEqual(cast("12", int), 12)
        self.assertEqual(cast(3.0, int), 3)
        with self.assertRaises(InvalidCastError):
            cast(3.5, int)
        with self.assertRaises(InvalidCastError):
            cast("abc", int)

    def test_str(self):
        self.assertEqual(cast(None, str), "")
        self.assertEqual(cast(5, str), "5")
        self.assertEqual(cast(True, str), "true")

    def test_bad_bool(self):
        with self.assertRaises(InvalidCastError):
            cast("maybe", bool)

    def test_invalid_cast_is_a_type_error(self):
        with self.assertRaises(TypeError):
            cast([], str)


class TestClientCommands(unittest.TestCase):
    def test_to_js_values(self):
        self.assertEqual(to_js({"a": [1, True, None]}), '{"a": [1, true, null]}')
        self.assertEqual(to_js(JsClosure("return 1;", ["x"])), "function(x) {return 1;}")

    def test_strings_cannot_close_script(self):
        self.assertEqual(to_js("</script>&"), '"\\u003c/script\\u003e\\u0026"')
        self.assertEqual(ClientCommand("alert", [{"<b>": 1}]).to_js(), 'alert({"\\u003cb\\u003e": 1});')

    def test_selector_command(self):
        command = ClientCommand("bsModal", ["open"], "#dlg_ctl")
        self.assertEqual(command.to_js(), 'jQuery("#dlg_ctl").bsModal("open");')

    def test_plain_function_and_script(self):
        self.assertEqual(ClientCommand("alert", ["hi"]).to_js(), 'alert("hi");')
        self.assertEqual(ClientCommand(script="x = 1").to_js(), "x = 1;")

    def test_sort_is_stable_by_priority(self):
        low = ClientCommand("low", priority=PRIORITY_LOW)
        first = ClientCommand("first")
        high = ClientCommand("high", priority=PRIORITY_HIGH)
        second = ClientCommand("second")
        self.assertEqual([c.method for c in sort_commands([low, first, high, second])],
                         ["high", "first", "second", "low"])

    def test_to_dict_is_json_safe(self):
        command = ClientCommand("on", ["click", JsClosure("x();")], "#f")
        self.assertEqual(command.to_dict()["args"], ["click", "function() {x();}"])


if __name__ == "__main__":
    unittest.main()
