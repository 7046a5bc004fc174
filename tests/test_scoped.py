"""Tests for natded/scoped.py — scoped hypotheses with LIFO discharge."""

import logging
import threading

import pytest

from natded import (
    AssumptionScope,
    FreshLabel,
    Impl,
    KernelError,
    LabelNotFound,
    ScopeError,
    Var,
    impl_elim,
    shows,
)
from natded.scoped import fresh_label

p, q, r = Var("p"), Var("q"), Var("r")


def test_push_supposes_with_fresh_label() -> None:
    scope = AssumptionScope()
    h = scope.push(p)
    assert isinstance(h.label, FreshLabel)
    assert h.formula == p
    assert h.proof.conclusion == p
    assert h.proof.assumptions == {h.label: p}
    assert scope.depth == 1
    assert scope.open_hypotheses == (h,)


def test_fresh_labels_are_unique_and_never_client_labels() -> None:
    a, b = fresh_label(), fresh_label()
    assert a != b
    assert a < b
    assert a != a.serial
    assert str(a) == f"#{a.serial}"


def test_fresh_labels_unique_across_threads() -> None:
    labels: list[FreshLabel] = []
    lock = threading.Lock()

    def worker() -> None:
        mine = [fresh_label() for _ in range(200)]
        with lock:
            labels.extend(mine)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(set(labels)) == len(labels) == 1600


def test_assume_and_discharge() -> None:
    scope = AssumptionScope()
    with scope.assume(p) as h:
        proof = scope.discharge(h.proof, h)
    assert scope.depth == 0
    assert shows(proof, Impl(p, p)) is proof


def test_nested_discharge_in_lifo_order() -> None:
    scope = AssumptionScope()
    with scope.assume(Impl(p, q)) as hpq:
        with scope.assume(p) as hp:
            body = scope.discharge(impl_elim(hp.proof, hpq.proof))
            assert scope.depth == 1
        proof = scope.discharge(body)
    assert scope.depth == 0
    assert shows(proof, Impl(Impl(p, q), Impl(p, q))) is proof


def test_discharge_wrong_hypothesis_is_scope_error() -> None:
    scope = AssumptionScope()
    with scope.assume(Impl(p, q)) as hpq:
        with scope.assume(p) as hp:
            body = impl_elim(hp.proof, hpq.proof)
            with pytest.raises(ScopeError):
                scope.discharge(body, hpq)
            # nothing was popped
            assert scope.open_hypotheses == (hpq, hp)
            scope.discharge(body, hp)


def test_scope_error_is_not_a_kernel_error() -> None:
    assert not issubclass(ScopeError, KernelError)


def test_discharge_with_empty_stack() -> None:
    scope = AssumptionScope()
    other = AssumptionScope()
    h = other.push(p)
    with pytest.raises(ScopeError):
        scope.discharge(h.proof)


def test_discharge_unused_hypothesis_propagates_kernel_error() -> None:
    scope = AssumptionScope()
    outer = scope.push(p)
    inner = scope.push(q)
    with pytest.raises(LabelNotFound):
        # the inner hypothesis does not occur in the outer proof
        scope.discharge(outer.proof)
    assert scope.open_hypotheses == (outer, inner)


def test_undischarged_hypothesis_released_on_exit() -> None:
    scope = AssumptionScope()
    with scope.assume(p):
        assert scope.depth == 1
    assert scope.depth == 0


def test_release_out_of_order_is_scope_error() -> None:
    scope = AssumptionScope()
    outer = scope.push(p)
    scope.push(q)
    with pytest.raises(ScopeError):
        scope.release(outer)


def test_exit_with_inner_hypothesis_open_is_scope_error() -> None:
    scope = AssumptionScope()
    with pytest.raises(ScopeError):
        with scope.assume(p):
            scope.push(q)


def test_exception_inside_scope_unwinds() -> None:
    scope = AssumptionScope()
    with pytest.raises(RuntimeError):
        with scope.assume(p):
            with scope.assume(q):
                raise RuntimeError("boom")
    assert scope.depth == 0


def test_hypotheses_escape_their_scope_only_as_discharged_proofs() -> None:
    scope = AssumptionScope()
    with scope.assume(p) as h:
        leaked = h.proof
    # a proof that still depends on a released hypothesis can never be shown
    assert not leaked.is_closed


def test_logs_push_and_discharge(caplog: pytest.LogCaptureFixture) -> None:
    scope = AssumptionScope()
    with caplog.at_level(logging.DEBUG, logger="natded.scoped"):
        with scope.assume(r) as h:
            scope.discharge(h.proof)
    messages = [rec.getMessage() for rec in caplog.records]
    assert any("Opened hypothesis" in m for m in messages)
    assert any("Discharged hypothesis" in m for m in messages)
