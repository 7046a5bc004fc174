"""Errors raised by proof construction.

Every ``KernelError`` describes a local mistake in a derivation step made by
the caller: the rule application is unsound or malformed. None of them
indicate kernel corruption, and the kernel never recovers from them.

``ScopeError`` belongs to the scoped-assumption layer and is deliberately not
a ``KernelError``: discharging out of order is a usage error, not an unsound
inference.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .formulas import Formula


class KernelError(Exception):
    """Base class for every failure of a kernel rule."""


class InconsistentLabel(KernelError):
    """The same label is bound to two different formulas."""

    def __init__(self, label: Hashable, left: Formula, right: Formula) -> None:
        self.label = label
        self.left = left
        self.right = right
        super().__init__(
            f"Label {label!r} is bound to both {left!r} and {right!r}"
        )


# ---------------------------------------------------------------------------
# Shape mismatches: an elimination rule applied to the wrong connective
# ---------------------------------------------------------------------------


class ShapeMismatch(KernelError):
    expected: str = ""

    def __init__(self, formula: Formula) -> None:
        self.formula = formula
        super().__init__(f"Expected {self.expected}, got {formula!r}")


class NotAConjunction(ShapeMismatch):
    expected = "a conjunction"


class NotAnImplication(ShapeMismatch):
    expected = "an implication"


class NotADisjunction(ShapeMismatch):
    expected = "a disjunction"


# ---------------------------------------------------------------------------
# Formula mismatches: two formulas a rule requires to coincide do not
# ---------------------------------------------------------------------------


class FormulaMismatch(KernelError):
    what: str = "formulas"

    def __init__(self, expected: Formula, actual: Formula) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Mismatched {self.what}: expected {expected!r}, got {actual!r}"
        )


class PremiseMismatch(FormulaMismatch):
    what = "premise"


class CaseMismatch(FormulaMismatch):
    what = "case hypothesis"


class ConclusionMismatch(FormulaMismatch):
    what = "conclusion"


class LabelNotFound(KernelError):
    def __init__(self, label: Hashable) -> None:
        self.label = label
        super().__init__(f"No open assumption is labelled {label!r}")


class OpenAssumptions(KernelError):
    def __init__(self, assumptions: Mapping[Hashable, Formula]) -> None:
        self.assumptions = assumptions
        labels = ", ".join(sorted(repr(k) for k in assumptions))
        super().__init__(f"Proof still depends on open assumptions: {labels}")


# ---------------------------------------------------------------------------
# Outside the kernel
# ---------------------------------------------------------------------------


class ScopeError(Exception):
    """Hypotheses were discharged or released out of LIFO order."""
