"""Formulas of propositional logic.

A formula is built from:
  - Propositional variables (p, q, r, ...)
  - Conjunction (φ ∧ ψ)
  - Disjunction (φ ∨ ψ)
  - Implication (φ → ψ)

Formulas are plain immutable values. Two formulas denote the same
proposition exactly when they are structurally equal; there is no
normalization of associativity or commutativity.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Formula AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Var:
    """A propositional variable.

    Example: p — Var("p")
    """

    name: str


@dataclass(frozen=True)
class Conj:
    """Logical AND of two formulas.

    Example: p ∧ q — Conj(Var("p"), Var("q"))
    """

    lhs: Formula
    rhs: Formula


@dataclass(frozen=True)
class Disj:
    """Logical OR of two formulas.

    Example: p ∨ q — Disj(Var("p"), Var("q"))
    """

    lhs: Formula
    rhs: Formula


@dataclass(frozen=True)
class Impl:
    """Logical implication.

    Example: p → q — Impl(Var("p"), Var("q"))
    """

    lhs: Formula
    rhs: Formula


# Union of all formula forms
Formula = Var | Conj | Disj | Impl

FORMULA_TYPES = (Var, Conj, Disj, Impl)


def is_formula(obj: object) -> bool:
    return isinstance(obj, FORMULA_TYPES)


def atoms(formula: Formula) -> frozenset[str]:
    """Names of all propositional variables occurring in ``formula``."""
    match formula:
        case Var(name):
            return frozenset({name})
        case Conj(lhs, rhs) | Disj(lhs, rhs) | Impl(lhs, rhs):
            return atoms(lhs) | atoms(rhs)
    raise TypeError(f"Unknown formula type: {type(formula)}")
