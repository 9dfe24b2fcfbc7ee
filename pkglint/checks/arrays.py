from __future__ import annotations
import sys
from typing import Any, Protocol

from ..report import Report, Violation, ViolationKind as K
from .primitives import range_bounds
from .verdict import Verdict

ANY_LENGTH = range(0, sys.maxsize)

class ElementCheck(Protocol):
    """Per-element rule for `is_array_of`. Writes only into `report`."""

    def __call__(self, value: Any, context: str, path: str, report: Report) -> bool: ...

def is_array_of(value: Any, context: str, path: str, check: ElementCheck, report: Report, *,
                required: bool = True,
                allowed_length: range = ANY_LENGTH) -> bool:
    """
    True when `value` is a non-empty list whose length is in `allowed_length`
    and `check` passes for every item, or an empty list when `required` is
    false.

    A length outside `allowed_length` is reported on its own and the items are
    not checked.
    """
    v = Verdict(report)
    if isinstance(value, list):
        n = len(value)
        if n > 0:
            if n in allowed_length:
                for item in value:
                    v.absorb(check(item, context, path, report))
            else:
                v.fail(Violation(K.LENGTH_MISMATCH, path, field=context,
                                 expected=range_bounds(allowed_length), actual=n))
        elif required:
            v.fail(Violation(K.EMPTY_ARRAY, path, field=context))
    elif value is None:
        if required:
            v.fail(Violation(K.NULL_VALUE, path, field=context, expected="array"))
    else:
        v.fail(Violation(K.WRONG_TYPE, path, field=context, expected="array"))
    return v.ok
