"""Derivation scripts: a derivation written down as data.

A script is a goal formula plus a sequence of named steps. Each step applies
one kernel rule to formulas, labels and the results of earlier steps. The
last step is the candidate proof of the goal.

Scripts contain no ``Proof`` values. ``replay`` rebuilds the derivation by
calling the kernel, so a script that replays successfully is checked by the
same rules as hand-written Python, and nothing about a script can forge a
proof.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from .assumptions import Label
from .errors import KernelError
from .formulas import Formula
from .kernel import (
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
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


class ScriptFormatError(ValueError):
    """A script is structurally malformed (before any rule is applied)."""


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Suppose:
    rule: ClassVar[str] = "suppose"

    id: str
    formula: Formula
    label: Label


@dataclass(frozen=True)
class ConjIntro:
    rule: ClassVar[str] = "conj_intro"

    id: str
    left: str
    right: str


@dataclass(frozen=True)
class ConjElim:
    rule: ClassVar[str] = "conj_elim"

    id: str
    proof: str
    side: Side


@dataclass(frozen=True)
class ImplElim:
    rule: ClassVar[str] = "impl_elim"

    id: str
    premise: str
    implication: str


@dataclass(frozen=True)
class ImplIntro:
    rule: ClassVar[str] = "impl_intro"

    id: str
    label: Label
    proof: str


@dataclass(frozen=True)
class DisjIntro:
    rule: ClassVar[str] = "disj_intro"

    id: str
    proof: str
    other: Formula
    side: Side


@dataclass(frozen=True)
class DisjElim:
    rule: ClassVar[str] = "disj_elim"

    id: str
    disjunction: str
    left_case: str
    left_label: Label
    right_case: str
    right_label: Label


Step = Suppose | ConjIntro | ConjElim | ImplElim | ImplIntro | DisjIntro | DisjElim

STEP_TYPES: tuple[type, ...] = (
    Suppose,
    ConjIntro,
    ConjElim,
    ImplElim,
    ImplIntro,
    DisjIntro,
    DisjElim,
)


def step_refs(step: Step) -> tuple[str, ...]:
    """Ids of the earlier steps that ``step`` uses as premises."""
    match step:
        case Suppose():
            return ()
        case ConjIntro(left=left, right=right):
            return (left, right)
        case ConjElim(proof=proof) | ImplIntro(proof=proof) | DisjIntro(proof=proof):
            return (proof,)
        case ImplElim(premise=premise, implication=implication):
            return (premise, implication)
        case DisjElim(disjunction=r, left_case=s, right_case=t):
            return (r, s, t)
    raise TypeError(f"Unknown step type: {type(step)}")


@dataclass(frozen=True)
class Script:
    """A named derivation of ``goal``."""

    name: str
    goal: Formula
    steps: tuple[Step, ...]


def validate_script(script: Script) -> None:
    """Raise ``ScriptFormatError`` unless every step only refers to earlier steps."""
    if not script.steps:
        raise ScriptFormatError(f"Script '{script.name}' has no steps")
    seen: set[str] = set()
    for i, step in enumerate(script.steps):
        if step.id in seen:
            raise ScriptFormatError(f"steps[{i}]: duplicate step id '{step.id}'")
        for ref in step_refs(step):
            if ref not in seen:
                raise ScriptFormatError(
                    f"steps[{i}] ('{step.id}'): refers to '{ref}', "
                    f"which is not an earlier step"
                )
        seen.add(step.id)


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StepFailure:
    """Where replay stopped. ``step_id`` is None when the final ``shows`` failed."""

    step_id: str | None
    rule: str
    error: KernelError


def apply_step(step: Step, proofs: Mapping[str, Proof]) -> Proof:
    match step:
        case Suppose(formula=formula, label=label):
            return suppose(formula, label)
        case ConjIntro(left=left, right=right):
            return conj_intro(proofs[left], proofs[right])
        case ConjElim(proof=proof, side=side):
            return conj_elim(proofs[proof], side)
        case ImplElim(premise=premise, implication=implication):
            return impl_elim(proofs[premise], proofs[implication])
        case ImplIntro(label=label, proof=proof):
            return impl_intro(label, proofs[proof])
        case DisjIntro(proof=proof, other=other, side=side):
            return disj_intro(proofs[proof], other, side)
        case DisjElim(
            disjunction=r, left_case=s, left_label=l1, right_case=t, right_label=l2
        ):
            return disj_elim(proofs[r], proofs[s], l1, proofs[t], l2)
    raise TypeError(f"Unknown step type: {type(step)}")


def replay(script: Script) -> Result[Proof, StepFailure]:
    """Run every step through the kernel, then check the goal with ``shows``."""
    validate_script(script)
    proofs: dict[str, Proof] = {}
    for step in script.steps:
        try:
            proofs[step.id] = apply_step(step, proofs)
        except KernelError as e:
            logger.warning(
                "Script %r: step %r (%s) failed: %s", script.name, step.id, step.rule, e
            )
            return Err(StepFailure(step_id=step.id, rule=step.rule, error=e))
        logger.debug(
            "Script %r: step %r (%s) ok, %d open assumption(s)",
            script.name,
            step.id,
            step.rule,
            len(proofs[step.id].assumptions),
        )

    try:
        return Ok(shows(proofs[script.steps[-1].id], script.goal))
    except KernelError as e:
        logger.warning("Script %r: final proof does not show the goal: %s", script.name, e)
        return Err(StepFailure(step_id=None, rule="shows", error=e))
