"""Builder helpers for writing formulas.

These are the shortest way to spell formulas in Python code:

    impl(conj(p, q), conj(q, p))     # p ∧ q → q ∧ p

For text input use ``natded.notation.parse_formula`` instead.
"""

from natded.formulas import Conj, Disj, Formula, Impl, Var


def var(name: str) -> Var:
    return Var(name=name)


def variables(names: str) -> tuple[Var, ...]:
    """Several variables at once: ``p, q, r = variables("p q r")``."""
    return tuple(Var(name=n) for n in names.split())


def conj(lhs: Formula, rhs: Formula, *more: Formula) -> Conj:
    """Conjunction, nested to the left when given more than two operands."""
    result = Conj(lhs=lhs, rhs=rhs)
    for f in more:
        result = Conj(lhs=result, rhs=f)
    return result


def disj(lhs: Formula, rhs: Formula, *more: Formula) -> Disj:
    """Disjunction, nested to the left when given more than two operands."""
    result = Disj(lhs=lhs, rhs=rhs)
    for f in more:
        result = Disj(lhs=result, rhs=f)
    return result


def impl(lhs: Formula, rhs: Formula, *more: Formula) -> Impl:
    """Implication, nested to the right: ``impl(a, b, c)`` is a → (b → c)."""
    *init, last = (lhs, rhs, *more)
    result = Impl(lhs=init[-1], rhs=last)
    for f in reversed(init[:-1]):
        result = Impl(lhs=f, rhs=result)
    return result
