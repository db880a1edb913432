"""A recursive name/value tree whose leaves carry typed values stored as text."""

from __future__ import annotations

import math
import re
import struct
from enum import IntEnum
from typing import Iterator, Union

Scalar = Union[str, int, float, bool]


class VarKind(IntEnum):
    """What a node's value holds; BRANCH means no value has been set."""

    BRANCH = 0
    STRING = 1
    FLOAT = 2
    INT = 3
    BOOL = 4
    DOUBLE = 5


_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _kind_of(value: Scalar) -> VarKind:
    if isinstance(value, bool):
        return VarKind.BOOL
    if isinstance(value, int):
        return VarKind.INT
    if isinstance(value, float):
        return VarKind.DOUBLE
    if isinstance(value, str):
        return VarKind.STRING
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def _nice_double(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _nice_float(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    try:
        single = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        single = value
    return format(single, ".7g")


def _parse_int(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _parse_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        match = _FLOAT_RE.match(text)
        return float(match.group(1)) if match else 0.0


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in ("true", "yes", "1")


def _to_text(kind: VarKind, value: Scalar) -> str:
    if kind is VarKind.BOOL:
        return "true" if value else "false"
    if kind is VarKind.INT:
        return str(int(value))
    if kind is VarKind.FLOAT:
        return _nice_float(float(value))
    if kind is VarKind.DOUBLE:
        return _nice_double(float(value))
    return str(value)


def _from_text(kind: VarKind, text: str) -> Scalar:
    if kind is VarKind.STRING:
        return text
    if kind is VarKind.INT:
        return _parse_int(text)
    if kind in (VarKind.FLOAT, VarKind.DOUBLE):
        return _parse_float(text)
    if kind is VarKind.BOOL:
        return _parse_bool(text)
    raise ValueError("a branch has no typed value")


class Tree:
    """A node with a name, an optional value and an ordered list of children.

    Names need not be unique; lookups by name return the first match.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._value = ""
        self._kind = VarKind.BRANCH
        self.children: list[Tree] = []

    def __repr__(self) -> str:
        return (
            f"Tree(name={self.name!r}, value={self._value!r}, "
            f"kind={self._kind.name}, children={len(self.children)})"
        )

    def __iter__(self) -> Iterator[Tree]:
        return iter(self.children)

    @property
    def value(self) -> str:
        """The value as text; assigning makes this node a string leaf."""
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._kind = VarKind.STRING
        self._value = value

    @property
    def kind(self) -> VarKind:
        return self._kind

    def has_children(self) -> bool:
        return bool(self.children)

    def add_child(self, name: str = "") -> Tree:
        """Append a new child and return it."""
        child = Tree(name)
        self.children.append(child)
        return child

    def set_child(self, key: str, value: str) -> Tree:
        """Append a new child holding a string value."""
        child = self.add_child(key)
        child.value = value
        return child

    def get_child(self, name: str) -> Tree:
        """Return the first child with this name, creating it if there is none."""
        for child in self.children:
            if child.name == name:
                return child
        return self.add_child(name)

    def has_child(self, name: str) -> bool:
        return any(child.name == name for child in self.children)

    def get_child_num(self, num: int) -> Tree:
        """Return the child at position num, adding unnamed children up to it."""
        if 0 <= num < len(self.children):
            return self.children[num]
        for _ in range(num - len(self.children)):
            self.add_child()
        return self.add_child()

    def child_value(self, name: str, default: str = "") -> str:
        """The text value of the first child with this name, or default."""
        for child in self.children:
            if child.name == name:
                return child.value
        return default

    def set_child_var(self, key: str, value: Scalar) -> Tree:
        """Append a new child holding a typed value."""
        child = self.add_child(key)
        child.set_var(value)
        return child

    def child_var(self, key: str, default: Scalar) -> Scalar:
        """The value of the first child with this name, read as default's type."""
        kind = _kind_of(default)
        for child in self.children:
            if child.name == key:
                return child.var(kind)
        return default

    def set_var(self, value: Scalar) -> None:
        """Store a typed value; its kind follows from the Python type."""
        kind = _kind_of(value)
        self._kind = kind
        self._value = _to_text(kind, value)

    def var(self, kind: VarKind) -> Scalar:
        """Read the stored text as a value of the given kind."""
        return _from_text(VarKind(kind), self._value)

    def is_var(self, kind: VarKind) -> bool:
        return self._kind == kind

    def is_branch(self) -> bool:
        return self._kind is VarKind.BRANCH

    def clear(self) -> None:
        """Remove all children."""
        self.children.clear()