# strapkit/markup.py
"""
Markup helpers shared by every widget.

Widgets never concatenate attribute strings by hand. They describe a tag as a
name, an ordered attribute dict and some inner html, and let `render_tag`
produce the text. `TagStyler` is the mutable attribute state of one tag; the
control base keeps one for the control itself and one for its wrapper.
"""

import html
from typing import Any, Callable, Dict, List, Optional, Tuple


def escape(text: Any) -> str:
    """Escape text for use inside html content or a quoted attribute."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def render_attributes(attributes: Optional[Dict[str, Any]]) -> str:
    """
    Render an attribute dict into a string with a leading space.

    ``None`` and ``False`` drop the attribute, ``True`` renders the bare name.
    """
    if not attributes:
        return ""
    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {escape(name)}")
            continue
        parts.append(f' {escape(name)}="{escape(value)}"')
    return "".join(parts)


def render_tag(
    tag: str,
    attributes: Optional[Dict[str, Any]] = None,
    inner: Optional[str] = None,
    is_void: bool = False,
    no_space: bool = False,
) -> str:
    """
    Render a complete tag.

    :param tag: Tag name.
    :param attributes: Ordered attributes, see `render_attributes`.
    :param inner: Inner html, inserted verbatim.
    :param is_void: Render as a void element with no closing tag.
    :param no_space: Keep the inner html on the same line as the tags.
    """
    attrs = render_attributes(attributes)
    if is_void:
        return f"<{tag}{attrs}>"
    if not inner:
        return f"<{tag}{attrs}></{tag}>"
    if no_space:
        return f"<{tag}{attrs}>{inner}</{tag}>"
    return f"<{tag}{attrs}>\n{inner}\n</{tag}>"


# --- Class string helpers ---

def _split(classes: Optional[str]) -> List[str]:
    return [c for c in (classes or "").split(" ") if c]


def has_class(classes: Optional[str], css_class: str) -> bool:
    wanted = _split(css_class)
    present = _split(classes)
    return bool(wanted) and all(c in present for c in wanted)


def add_class(classes: Optional[str], new_classes: Optional[str]) -> Tuple[str, bool]:
    """Append classes that are not present yet. Returns the new string and whether it changed."""
    present = _split(classes)
    changed = False
    for css_class in _split(new_classes):
        if css_class not in present:
            present.append(css_class)
            changed = True
    return " ".join(present), changed


def remove_class(classes: Optional[str], old_classes: Optional[str]) -> Tuple[str, bool]:
    """Remove classes if present. Returns the new string and whether it changed."""
    doomed = set(_split(old_classes))
    present = _split(classes)
    kept = [c for c in present if c not in doomed]
    return " ".join(kept), len(kept) != len(present)


def remove_classes_by_prefix(classes: Optional[str], prefix: str) -> Tuple[str, bool]:
    present = _split(classes)
    kept = [c for c in present if not c.startswith(prefix)]
    return " ".join(kept), len(kept) != len(present)


class TagStyler:
    """
    Holds the css classes, attributes and inline styles of a single tag.

    Every mutator returns True only when the stored state actually changed, and
    in that case calls `on_change`. Controls use the callback to flag
    themselves (or only their wrapper) for redraw.

    :param on_change: Optional callable invoked after each effective change.
    """

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self.on_change = on_change
        self._classes: str = ""
        self._attributes: Dict[str, Any] = {}
        self._styles: Dict[str, str] = {}

    def _changed(self) -> bool:
        if self.on_change:
            self.on_change()
        return True

    # --- classes ---
    @property
    def css_class(self) -> str:
        return self._classes

    def set_css_class(self, classes: Optional[str]) -> bool:
        normalized, _ = add_class("", classes)
        if normalized == self._classes:
            return False
        self._classes = normalized
        return self._changed()

    def add_css_class(self, classes: Optional[str]) -> bool:
        self._classes, changed = add_class(self._classes, classes)
        return self._changed() if changed else False

    def remove_css_class(self, classes: Optional[str]) -> bool:
        self._classes, changed = remove_class(self._classes, classes)
        return self._changed() if changed else False

    def remove_css_classes_by_prefix(self, prefix: str) -> bool:
        self._classes, changed = remove_classes_by_prefix(self._classes, prefix)
        return self._changed() if changed else False

    def has_css_class(self, css_class: str) -> bool:
        return has_class(self._classes, css_class)

    # --- attributes ---
    def set_html_attribute(self, name: str, value: Any) -> bool:
        if name == "class":
            return self.set_css_class(value)
        if value is None:
            return self.remove_html_attribute(name)
        if self._attributes.get(name) == value and name in self._attributes:
            return False
        self._attributes[name] = value
        return self._changed()

    def remove_html_attribute(self, name: str) -> bool:
        if name in self._attributes:
            del self._attributes[name]
            return self._changed()
        return False

    def get_html_attribute(self, name: str, default: Any = None) -> Any:
        if name == "class":
            return self._classes or default
        return self._attributes.get(name, default)

    def set_data_attribute(self, name: str, value: Any) -> bool:
        return self.set_html_attribute(f"data-{name}", value)

    # --- inline styles ---
    def set_css_style(self, name: str, value: Optional[str]) -> bool:
        if value is None:
            return self.remove_css_style(name)
        if self._styles.get(name) == value:
            return False
        self._styles[name] = value
        return self._changed()

    def remove_css_style(self, name: str) -> bool:
        if name in self._styles:
            del self._styles[name]
            return self._changed()
        return False

    def get_css_style(self, name: str) -> Optional[str]:
        return self._styles.get(name)

    def render_html_attributes(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        style_overrides: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        """
        Merge the stored state with per-render overrides into an attribute dict.

        An override value of None removes the attribute for this render only.
        A ``class`` override replaces the stored classes.
        """
        attributes: Dict[str, Any] = dict(self._attributes)
        if self._classes:
            attributes["class"] = self._classes
        styles = dict(self._styles)
        if style_overrides:
            for name, value in style_overrides.items():
                if value is None:
                    styles.pop(name, None)
                else:
                    styles[name] = value
        if styles:
            attributes["style"] = ";".join(f"{k}:{v}" for k, v in styles.items())
        if overrides:
            for name, value in overrides.items():
                if value is None:
                    attributes.pop(name, None)
                else:
                    attributes[name] = value
        return attributes

    def __repr__(self) -> str:
        return f"TagStyler(class={self._classes!r}, attributes={self._attributes!r}, styles={self._styles!r})"
