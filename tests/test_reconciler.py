# tests/test_reconciler.py
import json
import unittest

from strapkit.config import Config
from strapkit.core import Form
from strapkit.reconciler import Patch, ReconciliationResult, diff_attributes
from strapkit.widgets import Button, Panel


class ReconcilerTestCase(unittest.TestCase):
    def setUp(self):
        Config.reset()
        self.form = Form()
        self.panel = Panel(self.form, "panel")
        self.panel.use_wrapper = True
        self.child = Button(self.panel, "child")
        self.child.text = "Child"
        self.button = Button(self.form, "btn")
        self.button.text = "Go"
        self.form.render()

    def tearDown(self):
        Config.reset()

    def reconcile(self) -> ReconciliationResult:
        return self.form.reconciler.reconcile(self.form, self.form.rendered_map)

    @staticmethod
    def summary(result):
        return [(p.action, p.html_id) for p in result.patches]


class TestPatches(ReconcilerTestCase):
    def test_nothing_changed(self):
        result = self.reconcile()
        self.assertFalse(result)
        self.assertEqual(result.patches, [])

    def test_modified_control_is_replaced(self):
        self.child.text = "Changed"
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REPLACE", "child")])
        self.assertIn("Changed", result.patches[0].data["html"])
        self.assertFalse(self.child.modified)

    def test_replace_covers_subtree(self):
        self.panel.text = "Heading"
        self.child.text = "Changed"
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REPLACE", "panel_ctl")])
        html = result.patches[0].data["html"]
        self.assertTrue(html.startswith('<div id="panel_ctl">'))
        self.assertIn("Changed", html)

    def test_wrapper_only_change_is_update(self):
        self.panel.display = False
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("UPDATE", "panel_ctl")])
        self.assertEqual(result.patches[0].data, {"attributes": {"style": "display:none"}})
        self.panel.display = True
        result = self.reconcile()
        self.assertEqual(result.patches[0].data, {"attributes": {"style": None}})

    def test_hidden_control_keeps_placeholder(self):
        self.button.visible = False
        result = self.reconcile()
        self.assertEqual(result.patches[0].data["html"], '<span id="btn" style="display:none"></span>')
        self.button.visible = True
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REPLACE", "btn")])
        self.assertTrue(result.patches[0].data["html"].startswith('<button id="btn"'))

    def test_new_child_redraws_parent(self):
        Button(self.panel, "late")
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REPLACE", "panel_ctl")])
        self.assertIn('id="late"', result.patches[0].data["html"])
        self.assertIn("late", self.form.rendered_map)

    def test_new_top_level_control_is_inserted(self):
        Button(self.form, "late")
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("INSERT", "form")])
        self.assertEqual(result.patches[0].data["control_id"], "late")

    def test_removed_control(self):
        self.form.remove_control("btn")
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REMOVE", "btn")])
        self.assertNotIn("btn", self.form.rendered_map)

    def test_removal_covered_by_replaced_parent(self):
        self.form.remove_control("child")
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REPLACE", "panel_ctl")])

    def test_removals_come_first(self):
        self.form.remove_control("btn")
        self.child.text = "Changed"
        result = self.reconcile()
        self.assertEqual(self.summary(result), [("REMOVE", "btn"), ("REPLACE", "child")])


class TestCommands(ReconcilerTestCase):
    def test_sorted_after_patches(self):
        self.form.execute_command("late()", priority=2)
        self.form.execute_command("early()", priority=0)
        self.button.text = "Changed"
        result = self.reconcile()
        self.assertEqual([c.script for c in result.commands], ["early()", "late()"])
        script = result.to_script()
        self.assertTrue(script.startswith('jQuery("#btn").replaceWith('))
        self.assertLess(script.index("early();"), script.index("late();"))
        self.assertEqual(self.form.pop_commands(), [])

    def test_to_dict_is_json(self):
        self.form.execute_selector_function("#btn", "tooltip", {"placement": "top"})
        self.button.text = "Changed"
        body = json.loads(json.dumps(self.reconcile().to_dict()))
        self.assertEqual(body["patches"][0]["action"], "REPLACE")
        self.assertEqual(body["commands"][0]["method"], "tooltip")
        self.assertEqual(body["commands"][0]["args"], [{"placement": "top"}])


class TestScript(unittest.TestCase):
    def test_patch_scripts(self):
        result = ReconciliationResult(patches=[
            Patch("INSERT", "form", {"html": "<b>x</b>", "control_id": "x"}),
            Patch("REMOVE", "old", {}),
            Patch("UPDATE", "w_ctl", {"attributes": {"class": "in", "style": None}}),
        ])
        self.assertEqual(result.to_script().split("\n"), [
            'jQuery("#form").append("\\u003cb\\u003ex\\u003c/b\\u003e");',
            'jQuery("#old").remove();',
            'jQuery("#w_ctl").attr("class", "in").removeAttr("style");',
        ])

    def test_unknown_action(self):
        with self.assertRaises(ValueError):
            ReconciliationResult(patches=[Patch("MOVE", "x", {})]).to_script()

    def test_diff_attributes(self):
        self.assertEqual(diff_attributes({"id": "a", "class": "x", "style": "s"}, {"id": "a", "class": "y"}),
                         {"class": "y", "style": None})
        self.assertEqual(diff_attributes(None, {"class": "y"}), {"class": "y"})


if __name__ == "__main__":
    unittest.main()
