"""Typed build-time constants module generation.

Every entry of the configuration's ``define`` mapping becomes one exported,
JSDoc-annotated constant in ``define.js`` so that a Closure-style type
checker can see its type::

    /**
     * @const {number}
     */
    export const FOO = 1;

Values are first converted into a closed set of frozen variant classes
(``to_define_value``); printing then only dispatches over that set.

Supported input values are ``None``, ``bool``, ``int``, ``float``, ``str``,
``FunctionText``, lists/tuples and string-keyed mappings of those.  Anything
else, including cyclic containers, raises ``DefineTypeError`` before any
text is produced.

``FunctionText`` is a trust boundary: its content is emitted verbatim and
is never validated or escaped.  Only pass self-contained, trusted source.
Mapping keys are emitted verbatim as property names for the same reason.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


class FunctionText(str):
    """JavaScript function source to embed as-is, e.g. ``"() => 42"``."""


class DefineTypeError(TypeError):
    """Raised for a define value that cannot be represented.

    Attributes:
        path: Dotted location of the offending value, e.g. ``"FOO.bar[2]"``.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


# ---------------------------------------------------------------------------
# Variant types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NullValue:
    type_tag = "null"


@dataclass(frozen=True)
class BoolValue:
    value: bool
    type_tag = "boolean"


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]
    type_tag = "number"


@dataclass(frozen=True)
class StringValue:
    value: str
    type_tag = "string"


@dataclass(frozen=True)
class FunctionValue:
    text: str
    type_tag = "Function"


@dataclass(frozen=True)
class ArrayValue:
    items: tuple["DefineValue", ...]

    @property
    def type_tag(self) -> str:
        if not self.items:
            return "Array<*>"
        # De-duplicated in first-seen order so output is stable across runs.
        element_tags = dict.fromkeys(item.type_tag for item in self.items)
        return f"Array<{'|'.join(element_tags)}>"


@dataclass(frozen=True)
class StructValue:
    members: tuple[tuple[str, "DefineValue"], ...]
    type_tag = "Object"


DefineValue = Union[
    NullValue, BoolValue, NumberValue, StringValue, FunctionValue, ArrayValue, StructValue
]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def to_define_value(value: Any, path: str = "define") -> DefineValue:
    """Convert a JSON-like Python value into its tagged variant.

    Args:
        value: The raw value.
        path: Location used in error messages.

    Raises:
        DefineTypeError: For unsupported types, non-string keys and cycles.
    """
    return _convert(value, path, set())


def _convert(value: Any, path: str, active: set[int]) -> DefineValue:
    if isinstance(value, FunctionText):
        return FunctionValue(str(value))
    if value is None:
        return NullValue()
    if isinstance(value, bool):
        return BoolValue(value)
    if isinstance(value, (int, float)):
        return NumberValue(value)
    if isinstance(value, str):
        return StringValue(str(value))

    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in active:
            raise DefineTypeError(path, "cyclic reference")
        active.add(id(value))
        try:
            if isinstance(value, Mapping):
                members = []
                for key, member in value.items():
                    if not isinstance(key, str):
                        raise DefineTypeError(path, f"non-string key {key!r}")
                    members.append((key, _convert(member, f"{path}.{key}", active)))
                return StructValue(tuple(members))
            return ArrayValue(
                tuple(_convert(item, f"{path}[{i}]", active) for i, item in enumerate(value))
            )
        finally:
            active.discard(id(value))

    if callable(value):
        raise DefineTypeError(path, "callables are not supported, wrap the source in FunctionText")
    raise DefineTypeError(path, f"unsupported value of type {type(value).__name__}")


def infer_type_tag(value: Any) -> str:
    """Return the type tag of a raw value, e.g. ``"Array<number|string>"``."""
    return to_define_value(value).type_tag


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


def render_defines(define: Mapping[str, Any]) -> str:
    """Render the whole constants module.

    Declarations are separated by a blank line; an empty mapping renders as
    an empty module.
    """
    converted = [(key, to_define_value(value, key)) for key, value in define.items()]
    return "\n\n".join(
        _jsdoc(_type_annotation(value)) + f"export const {key} = {_print_value(value)};"
        for key, value in converted
    )


def _type_annotation(value: DefineValue) -> str:
    # Struct members carry their own annotations.
    if isinstance(value, StructValue):
        return "@struct"
    return f"@const {{{value.type_tag}}}"


def _jsdoc(*tags: str) -> str:
    return "\n".join(["/**", *(f" * {tag}" for tag in tags), " */", ""])


def _indent(text: str) -> str:
    return "\t" + text.replace("\n", "\n\t")


def _print_struct(struct: StructValue) -> str:
    body = ",\n\n".join(
        _jsdoc(_type_annotation(member)) + f"{key}: {_print_value(member)}"
        for key, member in struct.members
    )
    return "\n".join(["{", _indent(body), "}"])


def _print_value(value: DefineValue) -> str:
    if isinstance(value, StructValue):
        return _print_struct(value)
    if isinstance(value, NumberValue):
        return format_js_number(value.value)
    if isinstance(value, FunctionValue):
        return value.text
    return _print_literal(value)


def _print_literal(value: DefineValue) -> str:
    """Compact JSON encoding, with function text kept verbatim."""
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        if isinstance(value.value, float) and not math.isfinite(value.value):
            return "null"
        return format_js_number(value.value)
    if isinstance(value, StringValue):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, FunctionValue):
        return value.text
    if isinstance(value, ArrayValue):
        return "[" + ",".join(_print_literal(item) for item in value.items) + "]"
    if isinstance(value, StructValue):
        return "{" + ",".join(
            f"{json.dumps(key, ensure_ascii=False)}:{_print_literal(member)}"
            for key, member in value.members
        ) + "}"
    raise AssertionError(f"unhandled define value {value!r}")


def format_js_number(value: int | float) -> str:
    """Format a number the way JavaScript's ``Number#toString`` does."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        if abs(value) < 2**53:
            return str(int(value))
        # Shortest round-trip digits, padded with zeros.
        return format(Decimal(repr(value)).to_integral_value(), "f")

    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text
    power = int(exponent)
    if -7 < power < 0:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
