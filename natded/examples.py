"""Textbook Natural Deduction derivations.

Each function builds a closed proof through the kernel and returns it after
checking it with ``shows``. Some derivations manage labels by hand, others
use ``AssumptionScope``; both are only ever chains of kernel rules.

References:
  - van Dalen, "Logic and Structure", ch. 2 (2013)
  - Prawitz, "Natural Deduction: A Proof-Theoretical Study" (1965)
"""

from collections.abc import Callable

from natded.helpers import conj, disj, impl, variables
from natded.kernel import (
    Proof,
    Side,
    conj_elim,
    conj_intro,
    disj_elim,
    disj_intro,
    impl_elim,
    impl_intro,
    shows,
    suppose,
)
from natded.notation import render_proof
from natded.scoped import AssumptionScope

p, q, r = variables("p q r")

# ===================================================================
# Example 1: Hypothetical syllogism
#
#   (p → q) → ((q → r) → (p → r))
#
# Labels are chosen by hand; they need not follow the order in which
# hypotheses are discharged.
# ===================================================================

HYPOTHETICAL_SYLLOGISM = impl(impl(p, q), impl(q, r), impl(p, r))


def hypothetical_syllogism() -> Proof:
    hp = suppose(p, 1)
    hpq = suppose(impl(p, q), 3)
    hqr = suppose(impl(q, r), 2)
    hq = impl_elim(hp, hpq)  # 1, 3 ⊢ q
    hr = impl_elim(hq, hqr)  # 1, 2, 3 ⊢ r
    proof = impl_intro(1, hr)  # 2, 3 ⊢ p → r
    proof = impl_intro(2, proof)  # 3 ⊢ (q → r) → (p → r)
    proof = impl_intro(3, proof)
    return shows(proof, HYPOTHETICAL_SYLLOGISM)


# ===================================================================
# Example 2: Conjunction is commutative
# ===================================================================

CONJ_COMMUTES = impl(conj(p, q), conj(q, p))


def conj_commutes() -> Proof:
    scope = AssumptionScope()
    with scope.assume(conj(p, q)) as h:
        swapped = conj_intro(
            conj_elim(h.proof, Side.RIGHT), conj_elim(h.proof, Side.LEFT)
        )
        proof = scope.discharge(swapped, h)
    return shows(proof, CONJ_COMMUTES)


# ===================================================================
# Example 3: Disjunction is commutative
#
# Proof by cases on p ∨ q, each case introducing q ∨ p.
# ===================================================================

DISJ_COMMUTES = impl(disj(p, q), disj(q, p))


def disj_commutes() -> Proof:
    hd = suppose(disj(p, q), "d")
    case_p = disj_intro(suppose(p, "left"), q, Side.RIGHT)  # left ⊢ q ∨ p
    case_q = disj_intro(suppose(q, "right"), p, Side.LEFT)  # right ⊢ q ∨ p
    proof = disj_elim(hd, case_p, "left", case_q, "right")
    return shows(impl_intro("d", proof), DISJ_COMMUTES)


# ===================================================================
# Example 4: Weakening
#
#   p → (q → p)
#
# impl_intro only discharges hypotheses that are actually open, so q has to
# be carried into the derivation first: pair it with p and project p back
# out, which keeps q among the open assumptions.
# ===================================================================

WEAKENING = impl(p, q, p)


def weakening() -> Proof:
    scope = AssumptionScope()
    with scope.assume(p) as hp:
        with scope.assume(q) as hq:
            carried = conj_elim(conj_intro(hp.proof, hq.proof), Side.LEFT)
            body = scope.discharge(carried)  # q → p
        proof = scope.discharge(body)
    return shows(proof, WEAKENING)


# ===================================================================
# Example 5: Currying
#
#   (p ∧ q → r) → (p → (q → r))
# ===================================================================

CURRYING = impl(impl(conj(p, q), r), p, q, r)


def currying() -> Proof:
    scope = AssumptionScope()
    with scope.assume(impl(conj(p, q), r)) as h:
        with scope.assume(p) as hp:
            with scope.assume(q) as hq:
                hr = impl_elim(conj_intro(hp.proof, hq.proof), h.proof)
                body = scope.discharge(hr, hq)
            body = scope.discharge(body, hp)
        proof = scope.discharge(body, h)
    return shows(proof, CURRYING)


# ===================================================================
# Example 6: Conjunction distributes over disjunction
#
#   p ∧ (q ∨ r) → (p ∧ q) ∨ (p ∧ r)
# ===================================================================

DISTRIBUTION = impl(conj(p, disj(q, r)), disj(conj(p, q), conj(p, r)))


def distribution() -> Proof:
    h = suppose(conj(p, disj(q, r)), 1)
    hp = conj_elim(h, Side.LEFT)
    hqr = conj_elim(h, Side.RIGHT)
    case_q = disj_intro(conj_intro(hp, suppose(q, 2)), conj(p, r), Side.LEFT)
    case_r = disj_intro(conj_intro(hp, suppose(r, 3)), conj(p, q), Side.RIGHT)
    proof = disj_elim(hqr, case_q, 2, case_r, 3)  # 1 ⊢ (p ∧ q) ∨ (p ∧ r)
    return shows(impl_intro(1, proof), DISTRIBUTION)


ALL_EXAMPLES: dict[str, Callable[[], Proof]] = {
    "hypothetical_syllogism": hypothetical_syllogism,
    "conj_commutes": conj_commutes,
    "disj_commutes": disj_commutes,
    "weakening": weakening,
    "currying": currying,
    "distribution": distribution,
}


if __name__ == "__main__":
    for name, build in ALL_EXAMPLES.items():
        print(f"{name:24s}  {render_proof(build())}")
