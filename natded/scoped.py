"""Scoped hypotheses on top of the kernel.

Writing labels by hand is error prone. ``AssumptionScope`` hands out fresh
labels and discharges hypotheses in strict LIFO order, so derivations read
like nested Fitch-style subproofs::

    scope = AssumptionScope()
    with scope.assume(impl(p, q)) as pq:
        with scope.assume(p) as hp:
            body = scope.discharge(impl_elim(hp.proof, pq.proof))  # p → q
        closed = scope.discharge(body)                              # (p → q) → (p → q)

This module only chains kernel calls. It never builds or inspects a
``Proof`` by any other means, so a mistake here can at worst produce a
``ScopeError`` or a ``KernelError``, never an unsound proof.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .errors import ScopeError
from .formulas import Formula
from .kernel import Proof, impl_intro, suppose

logger = logging.getLogger(__name__)

_serials = itertools.count(1)
_serials_lock = threading.Lock()


@dataclass(frozen=True, order=True)
class FreshLabel:
    """A label generated by the scoped layer; never equal to a client label."""

    serial: int

    def __str__(self) -> str:
        return f"#{self.serial}"


def fresh_label() -> FreshLabel:
    with _serials_lock:
        return FreshLabel(next(_serials))


@dataclass(frozen=True)
class Hypothesis:
    """An open hypothesis: its label, its formula and the proof ``φ ⊢ φ``."""

    label: FreshLabel
    formula: Formula
    proof: Proof = field(compare=False)


class AssumptionScope:
    """A stack of open hypotheses for one derivation.

    A scope belongs to a single derivation; build independent derivations
    with independent scopes.
    """

    def __init__(self) -> None:
        self._stack: list[Hypothesis] = []
        self._lock = threading.Lock()

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def open_hypotheses(self) -> tuple[Hypothesis, ...]:
        """Open hypotheses, outermost first."""
        return tuple(self._stack)

    def push(self, formula: Formula) -> Hypothesis:
        label = fresh_label()
        hyp = Hypothesis(label=label, formula=formula, proof=suppose(formula, label))
        with self._lock:
            self._stack.append(hyp)
        logger.debug("Opened hypothesis %s: %r (depth %d)", label, formula, self.depth)
        return hyp

    def discharge(self, proof: Proof, hypothesis: Hypothesis | None = None) -> Proof:
        """Discharge the innermost open hypothesis from ``proof``.

        If ``hypothesis`` is given it must be the innermost open one. Kernel
        failures propagate and leave the stack as it was.
        """
        with self._lock:
            if not self._stack:
                raise ScopeError("No open hypothesis to discharge")
            innermost = self._stack[-1]
            if hypothesis is not None and hypothesis.label != innermost.label:
                raise ScopeError(
                    f"Cannot discharge {hypothesis.label}: "
                    f"{innermost.label} is still open inside it"
                )
            result = impl_intro(innermost.label, proof)
            self._stack.pop()
        logger.debug("Discharged hypothesis %s (depth %d)", innermost.label, self.depth)
        return result

    def release(self, hypothesis: Hypothesis) -> None:
        """Close ``hypothesis`` without discharging it.

        A hypothesis that was already discharged is ignored; one with nested
        hypotheses still open is a LIFO violation.
        """
        with self._lock:
            if hypothesis not in self._stack:
                return
            if self._stack[-1] != hypothesis:
                raise ScopeError(
                    f"Cannot release {hypothesis.label}: "
                    f"{self._stack[-1].label} is still open inside it"
                )
            self._stack.pop()
        logger.debug("Released undischarged hypothesis %s", hypothesis.label)

    @contextmanager
    def assume(self, formula: Formula) -> Iterator[Hypothesis]:
        hyp = self.push(formula)
        try:
            yield hyp
        except BaseException:
            self._unwind(hyp)
            raise
        self.release(hyp)

    def _unwind(self, hypothesis: Hypothesis) -> None:
        # abandon ``hypothesis`` and everything opened inside it
        with self._lock:
            if hypothesis in self._stack:
                del self._stack[self._stack.index(hypothesis):]
