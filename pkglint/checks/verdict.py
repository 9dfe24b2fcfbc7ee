from __future__ import annotations
from typing import Iterable

from ..report import Report, Violation

class Verdict:
    """
    Boolean accumulator for one check or one validation pass.

    Starts true and only ever moves to false. `fail` records the violation in
    the report before flipping; `absorb` folds in an outcome the caller has
    already evaluated, so every sub-check still runs after the first failure.
    """

    def __init__(self, report: Report):
        self.report = report
        self.ok = True

    def fail(self, violation: Violation) -> bool:
        self.report.add(violation)
        self.ok = False
        return False

    def absorb(self, outcome: bool) -> bool:
        if not outcome:
            self.ok = False
        return outcome

    def __bool__(self) -> bool:
        return self.ok

def all_true(outcomes: Iterable[bool]) -> bool:
    """True iff every already-collected outcome is true."""
    results = list(outcomes)
    return all(results)
