# strapkit/js.py
"""
Client command values.

Widgets never write javascript strings for the page themselves. They queue
`ClientCommand` objects on the form, and the reconciler renders the queue in
priority order after the DOM patches.
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

PRIORITY_HIGH = 0
PRIORITY_STANDARD = 1
PRIORITY_LOW = 2

# keeps a literal from closing the inline <script> element it is written into
_SCRIPT_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def dumps(value: Any) -> str:
    """`json.dumps` for text placed inside a ``<script>`` element."""
    text = json.dumps(value)
    for char, escaped in _SCRIPT_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


class JsClosure:
    """A raw javascript function literal: ``function(params){body}``."""

    def __init__(self, body: str, params: Sequence[str] = ()):
        self.body = body
        self.params = list(params)

    def to_js(self) -> str:
        return f"function({', '.join(self.params)}) {{{self.body}}}"

    def __eq__(self, other):
        return isinstance(other, JsClosure) and self.body == other.body and self.params == other.params

    def __repr__(self):
        return f"JsClosure({self.body!r})"


class JsVarName:
    """A raw identifier or expression, rendered without quoting."""

    def __init__(self, name: str):
        self.name = name

    def to_js(self) -> str:
        return self.name

    def __eq__(self, other):
        return isinstance(other, JsVarName) and self.name == other.name

    def __repr__(self):
        return f"JsVarName({self.name!r})"


def to_js(value: Any) -> str:
    """Render a python value as a javascript literal, splicing raw values in place."""
    if hasattr(value, "to_js"):
        return value.to_js()
    if isinstance(value, dict):
        items = ", ".join(f"{dumps(str(k))}: {to_js(v)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_js(v) for v in value) + "]"
    return dumps(value)


def to_json_safe(value: Any) -> Any:
    """Like `to_js`, but produce plain data for JSON responses (raw values become strings)."""
    if hasattr(value, "to_js"):
        return value.to_js()
    if isinstance(value, dict):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    return value


@dataclass
class ClientCommand:
    """
    One queued client-side call.

    With a selector the command renders as ``jQuery(selector).method(args)``.
    Without one it renders as a plain function call ``method(args)``. A command
    with ``script`` set renders that script verbatim.
    """
    method: str = ""
    args: List[Any] = field(default_factory=list)
    selector: Optional[str] = None
    priority: int = PRIORITY_STANDARD
    script: Optional[str] = None

    def to_js(self) -> str:
        if self.script is not None:
            return self.script.rstrip(";") + ";"
        args = ", ".join(to_js(a) for a in self.args)
        if self.selector is None:
            return f"{self.method}({args});"
        return f"jQuery({dumps(self.selector)}).{self.method}({args});"

    def to_dict(self) -> dict:
        return {
            "selector": self.selector,
            "method": self.method,
            "args": to_json_safe(self.args),
            "priority": self.priority,
            "script": self.script,
        }


def sort_commands(commands: List[ClientCommand]) -> List[ClientCommand]:
    """Order by priority; `sorted` is stable, so insertion order holds within a priority."""
    return sorted(commands, key=lambda c: c.priority)
