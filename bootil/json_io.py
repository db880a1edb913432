"""Conversion between Tree and JSON text."""

from __future__ import annotations

import itertools
import json
import math
from typing import Any, Iterable, Optional

from bootil.tree import Tree, VarKind


def _number_text(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError(f"cannot encode non-finite number {value!r}")
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _string_text(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _scalar_text(node: Tree) -> str:
    if node.is_var(VarKind.FLOAT) or node.is_var(VarKind.DOUBLE):
        return _number_text(float(node.var(VarKind.DOUBLE)))
    if node.is_var(VarKind.INT):
        return str(node.var(VarKind.INT))
    if node.is_var(VarKind.BOOL):
        return "true" if node.var(VarKind.BOOL) else "false"
    return _string_text(node.value)


def _write(node: Tree, pretty: bool, depth: int, out: list[str]) -> None:
    is_array = all(not child.name for child in node.children)
    out.append("[" if is_array else "{")
    unique = itertools.count(1)
    for position, child in enumerate(node.children):
        if position:
            out.append(",")
        if pretty:
            out.append("\n" + "\t" * (depth + 1))
        if not is_array:
            key = child.name or f"_{next(unique)}_"
            out.append(_string_text(key))
            out.append(": " if pretty else ":")
        if child.has_children() or child.is_branch():
            _write(child, pretty, depth + 1, out)
        else:
            out.append(_scalar_text(child))
    if pretty and node.children:
        out.append("\n" + "\t" * depth)
    out.append("]" if is_array else "}")


def to_json(tree: Tree, pretty: bool = False) -> str:
    """Encode a tree as JSON.

    A node whose children are all unnamed becomes an array, otherwise an
    object; unnamed children of an object get keys _1_, _2_ and so on.
    Pretty output is indented with tabs.
    """
    out: list[str] = []
    _write(tree, pretty, 0, out)
    return "".join(out)


class _Object(list):
    """Key/value pairs of a decoded JSON object, in document order."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _import(tree: Tree, doc: list) -> None:
    entries: Iterable[tuple[str, Any]]
    if isinstance(doc, _Object):
        entries = doc
    else:
        entries = (("", item) for item in doc)
    for name, value in entries:
        if isinstance(value, list):
            _import(tree.add_child(name), value)
        elif isinstance(value, str):
            tree.set_child(name, value)
        elif isinstance(value, bool):
            tree.set_child_var(name, value)
        elif isinstance(value, (int, float)):
            tree.set_child_var(name, float(value))


def from_json(text: str, tree: Optional[Tree] = None) -> Tree:
    """Decode JSON text into tree (a new one if none is given) and return it.

    Numbers become double values and nulls are skipped. Raises ValueError
    if the text is not valid JSON with an object or array at its root.
    """
    if tree is None:
        tree = Tree()
    doc = json.loads(text, object_pairs_hook=_Object, parse_constant=_reject_constant)
    if not isinstance(doc, list):
        raise ValueError("JSON root must be an object or an array")
    _import(tree, doc)
    return tree