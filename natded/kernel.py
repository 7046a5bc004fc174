"""The proof kernel.

A ``Proof`` is evidence that its conclusion follows from its open
assumptions. The functions in this module are the only way to obtain one:

    suppose      φ  ⊢  φ                                   (hypothesis)
    conj_intro   Γ ⊢ φ,  Δ ⊢ ψ        ⟹  Γ ∪ Δ ⊢ φ ∧ ψ
    conj_elim    Γ ⊢ φ ∧ ψ            ⟹  Γ ⊢ φ   (or ψ)
    disj_intro   Γ ⊢ φ                ⟹  Γ ⊢ φ ∨ ψ   (or ψ ∨ φ)
    disj_elim    Γ ⊢ φ ∨ ψ,  Δ, φ ⊢ χ,  Θ, ψ ⊢ χ   ⟹  Γ ∪ Δ ∪ Θ ⊢ χ
    impl_intro   Γ, φ ⊢ ψ             ⟹  Γ ⊢ φ → ψ
    impl_elim    Γ ⊢ φ,  Δ ⊢ φ → ψ    ⟹  Γ ∪ Δ ⊢ ψ

Every rule is a pure function: premises are never modified, and a rule
either returns a new ``Proof`` or raises a ``KernelError`` before anything
is built. ``shows`` is the closing check that a proof has no open
assumptions and proves a given statement.

Hypotheses are identified by labels. Two premises may share a label only if
they bind it to the same formula (see ``assumptions.merge``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, NoReturn

from .assumptions import AssumptionSet, Label, merge
from .errors import (
    CaseMismatch,
    ConclusionMismatch,
    LabelNotFound,
    NotAConjunction,
    NotADisjunction,
    NotAnImplication,
    OpenAssumptions,
    PremiseMismatch,
)
from .formulas import Conj, Disj, Formula, Impl, is_formula


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# The opaque proof value
# ---------------------------------------------------------------------------


class Proof:
    """A derivation of ``conclusion`` from ``assumptions``.

    Instances cannot be created, subclassed, modified, pickled or copied by
    client code. Read the conclusion and the open assumptions through the
    properties of the same names.
    """

    __slots__ = ("_conclusion", "_assumptions")

    _conclusion: Formula
    _assumptions: AssumptionSet

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("Proof values can only be produced by kernel rules")

    def __init_subclass__(cls, **kwargs: Any) -> NoReturn:
        raise TypeError("Proof cannot be subclassed")

    @property
    def conclusion(self) -> Formula:
        return self._conclusion

    @property
    def assumptions(self) -> AssumptionSet:
        return self._assumptions

    @property
    def is_closed(self) -> bool:
        return len(self._assumptions) == 0

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError("Proof is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError("Proof is immutable")

    def __reduce__(self) -> NoReturn:
        raise TypeError("Proof values cannot be serialized; replay the derivation instead")

    def __copy__(self) -> Proof:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Proof:
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Proof):
            return NotImplemented
        return (
            self._conclusion == other._conclusion
            and self._assumptions == other._assumptions
        )

    def __hash__(self) -> int:
        return hash((self._conclusion, self._assumptions))

    def __repr__(self) -> str:
        return f"Proof({self._conclusion!r}, assumptions={dict(self._assumptions)!r})"


def _mint(conclusion: Formula, assumptions: AssumptionSet) -> Proof:
    proof = object.__new__(Proof)
    object.__setattr__(proof, "_conclusion", conclusion)
    object.__setattr__(proof, "_assumptions", assumptions)
    return proof


def _require_formula(obj: object) -> None:
    if not is_formula(obj):
        raise TypeError(f"Expected Formula, got {type(obj).__name__}")


def _require_proof(obj: object) -> None:
    if not isinstance(obj, Proof):
        raise TypeError(f"Expected Proof, got {type(obj).__name__}")


def _require_side(obj: object) -> None:
    if not isinstance(obj, Side):
        raise TypeError(f"Expected Side, got {type(obj).__name__}")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def suppose(formula: Formula, label: Label) -> Proof:
    """Hypothesis: ``formula`` proves itself, under the assumption ``label``."""
    _require_formula(formula)
    return _mint(formula, AssumptionSet.of(label, formula))


def conj_intro(p: Proof, q: Proof) -> Proof:
    _require_proof(p)
    _require_proof(q)
    assumptions = merge(p.assumptions, q.assumptions)
    return _mint(Conj(p.conclusion, q.conclusion), assumptions)


def conj_elim(p: Proof, side: Side) -> Proof:
    _require_proof(p)
    _require_side(side)
    match p.conclusion:
        case Conj(lhs, rhs):
            return _mint(lhs if side is Side.LEFT else rhs, p.assumptions)
        case other:
            raise NotAConjunction(other)


def disj_intro(p: Proof, other: Formula, side: Side) -> Proof:
    """Weaken ``p``'s conclusion to a disjunction with ``other``.

    With ``Side.LEFT`` the proven formula becomes the left disjunct,
    with ``Side.RIGHT`` the right one.
    """
    _require_proof(p)
    _require_formula(other)
    _require_side(side)
    if side is Side.LEFT:
        return _mint(Disj(p.conclusion, other), p.assumptions)
    return _mint(Disj(other, p.conclusion), p.assumptions)


def impl_elim(p: Proof, q: Proof) -> Proof:
    """Modus ponens: from ``p`` proving φ and ``q`` proving φ → ψ, prove ψ."""
    _require_proof(p)
    _require_proof(q)
    match q.conclusion:
        case Impl(lhs, rhs):
            if lhs != p.conclusion:
                raise PremiseMismatch(lhs, p.conclusion)
            return _mint(rhs, merge(p.assumptions, q.assumptions))
        case other:
            raise NotAnImplication(other)


def impl_intro(label: Label, q: Proof) -> Proof:
    """Discharge the hypothesis ``label`` of ``q``, yielding φ → conclusion."""
    _require_proof(q)
    if label not in q.assumptions:
        raise LabelNotFound(label)
    antecedent = q.assumptions[label]
    return _mint(Impl(antecedent, q.conclusion), q.assumptions.without(label))


def disj_elim(r: Proof, s: Proof, l1: Label, t: Proof, l2: Label) -> Proof:
    """Proof by cases.

    ``r`` proves φ ∨ ψ; ``s`` proves χ with φ open under ``l1``; ``t``
    proves χ with ψ open under ``l2``. The case hypotheses are discharged and
    the remaining assumptions of all three premises are merged.
    """
    _require_proof(r)
    _require_proof(s)
    _require_proof(t)
    match r.conclusion:
        case Disj(lhs, rhs):
            pass
        case other:
            raise NotADisjunction(other)
    if l1 not in s.assumptions:
        raise LabelNotFound(l1)
    if l2 not in t.assumptions:
        raise LabelNotFound(l2)
    if s.assumptions[l1] != lhs:
        raise CaseMismatch(lhs, s.assumptions[l1])
    if t.assumptions[l2] != rhs:
        raise CaseMismatch(rhs, t.assumptions[l2])
    if s.conclusion != t.conclusion:
        raise ConclusionMismatch(s.conclusion, t.conclusion)
    cases = merge(s.assumptions.without(l1), t.assumptions.without(l2))
    return _mint(s.conclusion, merge(r.assumptions, cases))


def shows(p: Proof, expected: Formula) -> Proof:
    """Return ``p`` if it is a closed proof of exactly ``expected``."""
    _require_proof(p)
    _require_formula(expected)
    if not p.is_closed:
        raise OpenAssumptions(p.assumptions)
    if p.conclusion != expected:
        raise ConclusionMismatch(expected, p.conclusion)
    return p
