"""JSON serialization for formulas and derivation scripts.

Formulas serialize to a dict with a "type" discriminator field.
Round-trip: formula_from_json(formula_to_json(f)) == f for all f.

Wherever a script expects a formula, the JSON may hold either such a dict
or a string in infix notation (see ``natded.notation``); the string form is
what people write by hand.

Proofs are never serialized. A script is the portable form of a proof.
"""

from __future__ import annotations

import json
from typing import Any

from .assumptions import Label
from .formulas import Conj, Disj, Formula, Impl, Var
from .kernel import Side
from .notation import IDENTIFIER_RE, ParseError, parse_formula
from .script import (
    ConjElim,
    ConjIntro,
    DisjElim,
    DisjIntro,
    ImplElim,
    ImplIntro,
    Script,
    ScriptFormatError,
    Step,
    Suppose,
    validate_script,
)

# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------


def formula_to_json(f: Formula) -> dict[str, Any]:
    if isinstance(f, Var):
        return {"type": "var", "name": f.name}
    elif isinstance(f, Conj):
        return {"type": "conj", "lhs": formula_to_json(f.lhs), "rhs": formula_to_json(f.rhs)}
    elif isinstance(f, Disj):
        return {"type": "disj", "lhs": formula_to_json(f.lhs), "rhs": formula_to_json(f.rhs)}
    elif isinstance(f, Impl):
        return {"type": "impl", "lhs": formula_to_json(f.lhs), "rhs": formula_to_json(f.rhs)}
    raise TypeError(f"Unknown formula type: {type(f)}")


def formula_from_json(d: dict[str, Any]) -> Formula:
    t = d["type"]
    if t == "var":
        name = d["name"]
        if not isinstance(name, str) or not IDENTIFIER_RE.fullmatch(name):
            raise ValueError(f"Invalid variable name: {name!r}")
        return Var(name=name)
    elif t == "conj":
        return Conj(lhs=formula_from_json(d["lhs"]), rhs=formula_from_json(d["rhs"]))
    elif t == "disj":
        return Disj(lhs=formula_from_json(d["lhs"]), rhs=formula_from_json(d["rhs"]))
    elif t == "impl":
        return Impl(lhs=formula_from_json(d["lhs"]), rhs=formula_from_json(d["rhs"]))
    raise ValueError(f"Unknown formula type: {t}")


# ---------------------------------------------------------------------------
# Script fields
# ---------------------------------------------------------------------------


def _field(d: dict[str, Any], name: str, where: str) -> Any:
    if name not in d:
        raise ScriptFormatError(f"{where}: missing field '{name}'")
    return d[name]


def _formula_field(d: dict[str, Any], name: str, where: str) -> Formula:
    value = _field(d, name, where)
    try:
        match value:
            case str(text):
                return parse_formula(text)
            case dict():
                return formula_from_json(value)
    except ParseError as e:
        raise ScriptFormatError(f"{where}.{name}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise ScriptFormatError(f"{where}.{name}: malformed formula ({e})") from e
    except RecursionError:
        raise ScriptFormatError(f"{where}.{name}: formula is nested too deeply") from None
    raise ScriptFormatError(
        f"{where}.{name}: expected a formula string or object, got {type(value).__name__}"
    )


def _label_field(d: dict[str, Any], name: str, where: str) -> Label:
    value = _field(d, name, where)
    # bool is an int subclass, but True would silently collide with label 1
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ScriptFormatError(
            f"{where}.{name}: labels must be integers or strings, got {value!r}"
        )
    return value


def _ref_field(d: dict[str, Any], name: str, where: str) -> str:
    value = _field(d, name, where)
    if not isinstance(value, str):
        raise ScriptFormatError(f"{where}.{name}: expected a step id, got {value!r}")
    return value


def _side_field(d: dict[str, Any], name: str, where: str) -> Side:
    value = _field(d, name, where)
    try:
        return Side(value)
    except ValueError:
        raise ScriptFormatError(
            f"{where}.{name}: expected 'left' or 'right', got {value!r}"
        ) from None


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def step_to_json(step: Step) -> dict[str, Any]:
    if isinstance(step, Suppose):
        return {
            "id": step.id,
            "rule": step.rule,
            "formula": formula_to_json(step.formula),
            "label": step.label,
        }
    elif isinstance(step, ConjIntro):
        return {"id": step.id, "rule": step.rule, "left": step.left, "right": step.right}
    elif isinstance(step, ConjElim):
        return {"id": step.id, "rule": step.rule, "proof": step.proof, "side": step.side.value}
    elif isinstance(step, ImplElim):
        return {
            "id": step.id,
            "rule": step.rule,
            "premise": step.premise,
            "implication": step.implication,
        }
    elif isinstance(step, ImplIntro):
        return {"id": step.id, "rule": step.rule, "label": step.label, "proof": step.proof}
    elif isinstance(step, DisjIntro):
        return {
            "id": step.id,
            "rule": step.rule,
            "proof": step.proof,
            "other": formula_to_json(step.other),
            "side": step.side.value,
        }
    elif isinstance(step, DisjElim):
        return {
            "id": step.id,
            "rule": step.rule,
            "disjunction": step.disjunction,
            "left_case": step.left_case,
            "left_label": step.left_label,
            "right_case": step.right_case,
            "right_label": step.right_label,
        }
    raise TypeError(f"Unknown step type: {type(step)}")


def step_from_json(d: dict[str, Any], where: str = "step") -> Step:
    if not isinstance(d, dict):
        raise ScriptFormatError(f"{where}: expected an object, got {type(d).__name__}")
    step_id = _ref_field(d, "id", where)
    rule = _field(d, "rule", where)
    if rule == "suppose":
        return Suppose(
            id=step_id,
            formula=_formula_field(d, "formula", where),
            label=_label_field(d, "label", where),
        )
    elif rule == "conj_intro":
        return ConjIntro(
            id=step_id,
            left=_ref_field(d, "left", where),
            right=_ref_field(d, "right", where),
        )
    elif rule == "conj_elim":
        return ConjElim(
            id=step_id,
            proof=_ref_field(d, "proof", where),
            side=_side_field(d, "side", where),
        )
    elif rule == "impl_elim":
        return ImplElim(
            id=step_id,
            premise=_ref_field(d, "premise", where),
            implication=_ref_field(d, "implication", where),
        )
    elif rule == "impl_intro":
        return ImplIntro(
            id=step_id,
            label=_label_field(d, "label", where),
            proof=_ref_field(d, "proof", where),
        )
    elif rule == "disj_intro":
        return DisjIntro(
            id=step_id,
            proof=_ref_field(d, "proof", where),
            other=_formula_field(d, "other", where),
            side=_side_field(d, "side", where),
        )
    elif rule == "disj_elim":
        return DisjElim(
            id=step_id,
            disjunction=_ref_field(d, "disjunction", where),
            left_case=_ref_field(d, "left_case", where),
            left_label=_label_field(d, "left_label", where),
            right_case=_ref_field(d, "right_case", where),
            right_label=_label_field(d, "right_label", where),
        )
    raise ScriptFormatError(f"{where}: unknown rule {rule!r}")


# ---------------------------------------------------------------------------
# Script
# ---------------------------------------------------------------------------


def script_to_json(script: Script) -> dict[str, Any]:
    return {
        "name": script.name,
        "goal": formula_to_json(script.goal),
        "steps": [step_to_json(s) for s in script.steps],
    }


def script_from_json(d: dict[str, Any]) -> Script:
    if not isinstance(d, dict):
        raise ScriptFormatError(f"Expected a script object, got {type(d).__name__}")
    steps = _field(d, "steps", "script")
    if not isinstance(steps, list):
        raise ScriptFormatError("script.steps: expected a list")
    script = Script(
        name=str(d.get("name", "unnamed")),
        goal=_formula_field(d, "goal", "script"),
        steps=tuple(step_from_json(s, f"steps[{i}]") for i, s in enumerate(steps)),
    )
    validate_script(script)
    return script


# ---------------------------------------------------------------------------
# Convenience: dump / load entire scripts as JSON strings
# ---------------------------------------------------------------------------


def dumps(script: Script) -> str:
    return json.dumps(script_to_json(script), indent=2, ensure_ascii=False)


def loads(s: str) -> Script:
    try:
        data = json.loads(s)
    except json.JSONDecodeError as e:
        raise ScriptFormatError(f"Invalid JSON: {e}") from e
    except RecursionError:
        raise ScriptFormatError("Invalid JSON: nested too deeply") from None
    return script_from_json(data)
