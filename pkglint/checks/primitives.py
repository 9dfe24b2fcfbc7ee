"""
Single-value checks.

Each check inspects one JSON value, records every problem it finds in the
report, and returns whether the value passed. A `null` value is reported
separately from a value of the wrong kind.
"""
from __future__ import annotations
import json
from typing import Any, Collection, Optional, Tuple

from ..report import Report, Violation, ViolationKind as K
from ..strings import is_blank, is_url_like, rune_len
from .verdict import Verdict

def range_bounds(allowed: range) -> Tuple[int, int]:
    """Inclusive (first, last) of a non-empty range."""
    if len(allowed) == 0:
        raise ValueError(f"allowed range is empty: {allowed!r}")
    return allowed[0], allowed[-1]

def dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)

def _field(context: str, key: str) -> str:
    return f"{context}.{key}" if context else key

def is_object(value: Any, context: str, path: str, report: Report) -> bool:
    v = Verdict(report)
    if not isinstance(value, dict):
        v.fail(Violation(K.WRONG_TYPE, path, field=context, expected="object"))
    return v.ok

def has_valid_rune_length(s: str, key: str, path: str, report: Report, max_len: int) -> bool:
    """True if `s` is at most `max_len` code points long."""
    v = Verdict(report)
    if rune_len(s) > max_len:
        v.fail(Violation(K.TOO_LONG, path, field=key, expected=max_len, actual=s))
    return v.ok

def is_string(value: Any, key: str, path: str, report: Report, *,
              required: bool = True,
              allowed: Collection[str] = (),
              url_like: bool = False,
              max_len: Optional[int] = None) -> bool:
    v = Verdict(report)
    if isinstance(value, str):
        if allowed:
            if value not in allowed:
                v.fail(Violation(K.NOT_ALLOWED, path, field=key, expected=tuple(sorted(allowed)), actual=value))
        elif url_like:
            if not is_url_like(value):
                v.fail(Violation(K.INVALID_URL, path, field=key, expected="url", actual=value))
        elif len(value) > 0:
            if is_blank(value):
                v.fail(Violation(K.BLANK_STRING, path, field=key))
            elif max_len is not None:
                v.absorb(has_valid_rune_length(value, key, path, report, max_len))
        else:
            v.fail(Violation(K.EMPTY_STRING, path, field=key))
    elif value is None:
        if required:
            v.fail(Violation(K.NULL_VALUE, path, field=key, expected="string"))
    else:
        v.fail(Violation(K.WRONG_TYPE, path, field=key, expected="string", actual=dump(value)))
    return v.ok

def is_bool(value: Any, key: str, path: str, report: Report, *, required: bool = True) -> bool:
    v = Verdict(report)
    if isinstance(value, bool):
        return True
    if value is None:
        if required:
            v.fail(Violation(K.NULL_VALUE, path, field=key, expected="bool"))
    else:
        v.fail(Violation(K.WRONG_TYPE, path, field=key, expected="bool", actual=dump(value)))
    return v.ok

def is_integer(value: Any, key: str, path: str, report: Report, *,
               required: bool = True,
               allowed: Optional[range] = None) -> bool:
    v = Verdict(report)
    # bool is an int subclass, but JSON true/false are not integers
    if isinstance(value, int) and not isinstance(value, bool):
        if allowed is not None:
            bounds = range_bounds(allowed)
            if value not in allowed:
                v.fail(Violation(K.OUT_OF_RANGE, path, field=key, expected=bounds, actual=value))
    elif value is None:
        if required:
            v.fail(Violation(K.NULL_VALUE, path, field=key, expected="integer"))
    else:
        v.fail(Violation(K.WRONG_TYPE, path, field=key, expected="integer", actual=dump(value)))
    return v.ok

def is_array_of_strings(value: Any, context: str, key: str, path: str, report: Report, *,
                        required: bool = True) -> bool:
    """
    True when `value` is a non-empty list holding only non-blank strings, or an
    empty list when `required` is false. Every bad element is reported.
    """
    v = Verdict(report)
    name = _field(context, key)
    if isinstance(value, list):
        if value:
            for item in value:
                if isinstance(item, str):
                    if len(item) == 0:
                        v.fail(Violation(K.BAD_ELEMENT, path, field=name, expected="string",
                                         detail="zero-length string"))
                    elif is_blank(item):
                        v.fail(Violation(K.BAD_ELEMENT, path, field=name, expected="string",
                                         detail="whitespace-only string"))
                else:
                    v.fail(Violation(K.BAD_ELEMENT, path, field=name, expected="string",
                                     actual=dump(item), detail="non-string"))
        elif required:
            v.fail(Violation(K.EMPTY_ARRAY, path, field=name))
    elif value is None:
        if required:
            v.fail(Violation(K.NULL_VALUE, path, field=name, expected="array"))
    else:
        v.fail(Violation(K.WRONG_TYPE, path, field=name, expected="array"))
    return v.ok
