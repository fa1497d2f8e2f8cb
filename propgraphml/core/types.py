"""Scalar value types used by GraphML ``attr.type`` / ``attr.list``.

Values are materialized as numpy scalars so that the 32/64-bit distinction
between ``int``/``long`` and ``float``/``double`` survives a round trip.
"""
from __future__ import annotations

import re
from enum import Enum

import numpy as np

from ..errors import FormatError

__all__ = ["ScalarType", "parse_list"]

_INT_RE = re.compile(r"[+-]?\d+")


def _parse_boolean(text):
    # Anything but "true" is False, never an error.
    return text is not None and text.strip().lower() == "true"


def _integer_parser(dtype, name):
    info = np.iinfo(dtype)

    def parse(text):
        s = (text or "").strip()
        if not _INT_RE.fullmatch(s):
            raise FormatError(text, name, reason="not an integer")
        value = int(s)
        if value < info.min or value > info.max:
            raise FormatError(text, name, reason=f"out of range [{info.min}, {info.max}]")
        return dtype(value)

    return parse


def _float_parser(dtype, name):
    def parse(text):
        s = (text or "").strip()
        if "_" in s:
            raise FormatError(text, name, reason="not a number")
        try:
            value = float(s)
        except ValueError:
            raise FormatError(text, name, reason="not a number") from None
        return dtype(value)

    return parse


def _parse_string(text):
    return "" if text is None else text


class ScalarType(str, Enum):
    """GraphML scalar type (BOOLEAN, INT, LONG, FLOAT, DOUBLE, STRING).

    Each member knows how to parse its textual form (``parse``) and which
    runtime class its values have (``scan_class``).
    """

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"

    @classmethod
    def for_name(cls, name):
        """Resolve an ``attr.type`` value; ``None`` means STRING."""
        if name is None:
            return cls.STRING
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise FormatError(name, "attr.type", reason="unknown type name") from None

    def parse(self, text):
        return _PARSERS[self](text)

    @property
    def scan_class(self) -> type:
        return _SCAN_CLASSES[self]


_PARSERS = {
    ScalarType.BOOLEAN: _parse_boolean,
    ScalarType.INT: _integer_parser(np.int32, "int"),
    ScalarType.LONG: _integer_parser(np.int64, "long"),
    ScalarType.FLOAT: _float_parser(np.float32, "float"),
    ScalarType.DOUBLE: _float_parser(np.float64, "double"),
    ScalarType.STRING: _parse_string,
}

_SCAN_CLASSES = {
    ScalarType.BOOLEAN: bool,
    ScalarType.INT: np.int32,
    ScalarType.LONG: np.int64,
    ScalarType.FLOAT: np.float32,
    ScalarType.DOUBLE: np.float64,
    ScalarType.STRING: str,
}


def parse_list(text, element_type: ScalarType) -> list:
    """Parse ``[v1, "v2", ...]`` into an ordered list of ``element_type`` values.

    Quotes are dropped, tokens trimmed, empty tokens skipped. Duplicates and
    order are kept. Text without brackets is read as the bare list body.
    """
    s = (text or "").strip()
    start, end = s.find("["), s.rfind("]")
    if start != -1 and end > start:
        s = s[start + 1:end]
    tokens = (t.strip() for t in s.replace('"', "").split(","))
    return [element_type.parse(t) for t in tokens if t]
