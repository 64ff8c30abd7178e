# strapkit/reconciler.py
"""
Turns control flags into the smallest client update.

After an event handler ran, every control carries two flags: `modified`
(its html must be redrawn) and `wrapper_modified` (only the wrapper's
attributes changed). The reconciler walks the control tree top-down with the
render map of the previous response and emits:

- INSERT  for new top-level controls (appended to the form)
- REPLACE for modified controls, covering their whole subtree
- UPDATE  for wrapper-only changes, carrying just the changed attributes
- REMOVE  for controls that are gone, unless an ancestor already covers them

followed by the queued client commands in priority order.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Set

from .js import ClientCommand, dumps, sort_commands

if TYPE_CHECKING:
    from .base import Control
    from .core import Form

logger = logging.getLogger(__name__)

PatchAction = Literal["INSERT", "REMOVE", "UPDATE", "REPLACE"]


@dataclass
class Patch:
    action: PatchAction
    html_id: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"action": self.action, "html_id": self.html_id, "data": self.data}


NodeData = Dict[str, Any]


@dataclass
class ReconciliationResult:
    patches: List[Patch] = field(default_factory=list)
    commands: List[ClientCommand] = field(default_factory=list)
    new_rendered_map: Dict[str, NodeData] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe response body."""
        return {
            "patches": [p.to_dict() for p in self.patches],
            "commands": [c.to_dict() for c in self.commands],
        }

    def to_script(self) -> str:
        """A script that applies the patches with jQuery, then runs the commands."""
        lines = [_patch_script(p) for p in self.patches]
        lines.extend(c.to_js() for c in self.commands)
        return "\n".join(line for line in lines if line)

    def __bool__(self) -> bool:
        return bool(self.patches or self.commands)


def _patch_script(patch: Patch) -> str:
    target = f"jQuery({dumps('#' + patch.html_id)})"
    if patch.action == "INSERT":
        return f"{target}.append({dumps(patch.data['html'])});"
    if patch.action == "REMOVE":
        return f"{target}.remove();"
    if patch.action == "REPLACE":
        return f"{target}.replaceWith({dumps(patch.data['html'])});"
    if patch.action == "UPDATE":
        calls = []
        for name, value in patch.data.get("attributes", {}).items():
            if value is None:
                calls.append(f".removeAttr({dumps(name)})")
            else:
                calls.append(f".attr({dumps(name)}, {dumps(str(value))})")
        return f"{target}{''.join(calls)};" if calls else ""
    raise ValueError(f"Unknown patch action {patch.action!r}")


def build_render_map(form: "Form") -> Dict[str, NodeData]:
    """Snapshot of what the client currently shows, keyed by control id."""
    rendered_map: Dict[str, NodeData] = {}
    for control in form.get_all_controls():
        if not control.rendered:
            continue
        parent_id = None if control.parent is form else control.parent.control_id
        rendered_map[control.control_id] = {
            "html_id": control.get_outer_id(),
            "parent_id": parent_id,
            "widget_type": type(control).__name__,
            "wrapper_attributes": control.get_wrapper_attributes() if control.use_wrapper else None,
        }
    return rendered_map


def diff_attributes(old: Optional[Dict[str, Any]], new: Dict[str, Any]) -> Dict[str, Any]:
    """Changed or added attributes, plus removed ones mapped to None."""
    old = old or {}
    changes = {name: value for name, value in new.items() if old.get(name) != value}
    for name in old:
        if name not in new:
            changes[name] = None
    return changes


class Reconciler:
    """Stateless; the previous render map lives on the form."""

    def reconcile(self, form: "Form", previous_map: Dict[str, NodeData]) -> ReconciliationResult:
        result = ReconciliationResult()
        for control in form.get_all_controls():
            control.pre_render()

        # a child the client has never seen can only appear through its parent's html
        for control in form.get_all_controls():
            if control.control_id not in previous_map and control.parent is not form \
                    and control.parent.control_id in previous_map:
                control.parent.mark_as_modified()

        replaced: Set[str] = set()
        for control in form.get_child_controls():
            self._visit(control, form, previous_map, result, replaced)

        removals = self._removals(form, previous_map, replaced)
        result.patches = removals + result.patches

        result.commands = sort_commands(form.pop_commands())
        result.new_rendered_map = build_render_map(form)
        for control in form.get_all_controls():
            control.clear_modified()
        form.rendered_map = result.new_rendered_map
        logger.debug("Reconciled %s: %d patches, %d commands", form.form_id, len(result.patches),
                     len(result.commands))
        return result

    def _visit(self, control: "Control", form: "Form", previous_map: Dict[str, NodeData],
               result: ReconciliationResult, replaced: Set[str]) -> None:
        old = previous_map.get(control.control_id)
        if old is None:
            if control.parent is form:
                html = self._draw(control)
                result.patches.append(Patch("INSERT", form.form_id, {"html": html, "control_id": control.control_id}))
            return

        if control.modified:
            html = self._draw(control)
            result.patches.append(Patch("REPLACE", old["html_id"], {"html": html}))
            replaced.add(control.control_id)
            return

        if control.wrapper_modified and control.use_wrapper:
            changes = diff_attributes(old.get("wrapper_attributes"), control.get_wrapper_attributes())
            changes.pop("id", None)
            if changes:
                result.patches.append(Patch("UPDATE", old["html_id"], {"attributes": changes}))

        for child in control.get_child_controls():
            self._visit(child, form, previous_map, result, replaced)

    @staticmethod
    def _draw(control: "Control") -> str:
        for descendant in control.get_child_controls(recursive=True):
            descendant.rendered = False
        return control.redraw()

    @staticmethod
    def _removals(form: "Form", previous_map: Dict[str, NodeData], replaced: Set[str]) -> List[Patch]:
        gone = [cid for cid in previous_map if not form.has_control(cid)]
        gone_set = set(gone)
        patches = []
        for control_id in gone:
            parent_id = previous_map[control_id].get("parent_id")
            covered = False
            while parent_id is not None:
                if parent_id in gone_set or parent_id in replaced:
                    covered = True
                    break
                parent_id = previous_map.get(parent_id, {}).get("parent_id")
            if not covered:
                patches.append(Patch("REMOVE", previous_map[control_id]["html_id"], {}))
        return patches
