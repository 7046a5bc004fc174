from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import KernelError
from .kernel import Proof
from .notation import render_formula, render_proof
from .result import Err, Ok
from .script import Script, replay
from .serialization import formula_to_json


@dataclass(frozen=True)
class CheckOutcome:
    script_name: str
    source: str | None
    goal: str
    proof: Proof | None
    failed_step: str | None
    failed_rule: str | None
    error: KernelError | None

    @property
    def success(self) -> bool:
        return self.proof is not None


def check_script(script: Script, *, source: str | None = None, ascii: bool = False) -> CheckOutcome:
    """Replay ``script`` and summarize the result."""
    goal = render_formula(script.goal, ascii=ascii)
    match replay(script):
        case Ok(proof):
            return CheckOutcome(script.name, source, goal, proof, None, None, None)
        case Err(failure):
            return CheckOutcome(
                script.name,
                source,
                goal,
                None,
                failure.step_id,
                failure.rule,
                failure.error,
            )
    raise AssertionError("unreachable")


def format_report(outcome: CheckOutcome, *, ascii: bool = False) -> str:
    """Human-readable report for terminal output."""
    where = f" ({outcome.source})" if outcome.source else ""
    lines = [f"{outcome.script_name}{where}"]
    if outcome.proof is not None:
        lines.append(f"  ✓ Proved: {render_proof(outcome.proof, ascii=ascii)}")
        return "\n".join(lines)

    lines.append(f"  × Not proved: {outcome.goal}")
    step = f"step '{outcome.failed_step}'" if outcome.failed_step else "final check"
    kind = type(outcome.error).__name__
    lines.append(f"    - [{kind}] {step} ({outcome.failed_rule}): {outcome.error}")
    return "\n".join(lines)


def report_json(outcome: CheckOutcome) -> dict[str, Any]:
    """Machine-readable report for pipeline integration."""
    return {
        "script": outcome.script_name,
        "source": outcome.source,
        "goal": outcome.goal,
        "success": outcome.success,
        "conclusion": (
            formula_to_json(outcome.proof.conclusion) if outcome.proof is not None else None
        ),
        "failure": (
            None
            if outcome.error is None
            else {
                "step": outcome.failed_step,
                "rule": outcome.failed_rule,
                "error": type(outcome.error).__name__,
                "message": str(outcome.error),
            }
        ),
    }
