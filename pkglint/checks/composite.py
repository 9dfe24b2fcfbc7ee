"""
Key-presence wrappers.

`has_*` looks `key` up in `data`: a missing required key is a violation, a
missing optional key passes, and a present key is handed to the matching
single-value check.
"""
from __future__ import annotations
from typing import Any, Collection, Optional

from ..report import Report, Violation, ViolationKind as K
from .arrays import ANY_LENGTH, ElementCheck, is_array_of
from .primitives import is_array_of_strings, is_bool, is_integer, is_string
from .verdict import Verdict

def _missing(report: Report, path: str, key: str) -> bool:
    return Verdict(report).fail(Violation(K.MISSING_KEY, path, field=key))

def has_key(data: Any, key: str) -> bool:
    return isinstance(data, dict) and key in data

def has_object(data: Any, key: str, path: str, report: Report, *, required: bool = True) -> bool:
    if has_key(data, key):
        if not isinstance(data[key], dict):
            return Verdict(report).fail(Violation(K.WRONG_TYPE, path, field=key, expected="object"))
        return True
    if required:
        return _missing(report, path, key)
    return True

def has_string(data: Any, key: str, path: str, report: Report, *,
               required: bool = True,
               allowed: Collection[str] = (),
               url_like: bool = False,
               max_len: Optional[int] = None) -> bool:
    if has_key(data, key):
        return is_string(data[key], key, path, report, required=required,
                         allowed=allowed, url_like=url_like, max_len=max_len)
    if required:
        return _missing(report, path, key)
    return True

def has_bool(data: Any, key: str, path: str, report: Report, *, required: bool = True) -> bool:
    if has_key(data, key):
        return is_bool(data[key], key, path, report, required=required)
    if required:
        return _missing(report, path, key)
    return True

def has_integer(data: Any, key: str, path: str, report: Report, *,
                required: bool = True,
                allowed: Optional[range] = None) -> bool:
    if has_key(data, key):
        return is_integer(data[key], key, path, report, required=required, allowed=allowed)
    if required:
        return _missing(report, path, key)
    return True

def has_array_of_strings(data: Any, context: str, key: str, path: str, report: Report, *,
                         required: bool = True) -> bool:
    """
    Checks `data[key]`, or `data[context][key]` when `context` is given, with
    `is_array_of_strings`.
    """
    d = data
    if context:
        if not has_key(data, context):
            return _missing(report, path, context)
        d = data[context]
        if not isinstance(d, dict):
            return Verdict(report).fail(Violation(K.WRONG_TYPE, path, field=context, expected="object"))
    if has_key(d, key):
        return is_array_of_strings(d[key], context, key, path, report, required=required)
    if required:
        name = f"{context}.{key}" if context else key
        return _missing(report, path, name)
    return True

def has_array_of(data: Any, key: str, path: str, check: ElementCheck, report: Report, *,
                 required: bool = True,
                 allowed_length: range = ANY_LENGTH) -> bool:
    if has_key(data, key):
        return is_array_of(data[key], key, path, check, report,
                           required=required, allowed_length=allowed_length)
    if required:
        return _missing(report, path, key)
    return True
