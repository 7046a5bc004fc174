"""Tests for natded/cli.py — the command-line driver."""

import json
import shutil
from pathlib import Path

import pytest

from natded.cli import main

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

pytestmark = pytest.mark.usefixtures("isolated_env")


def example(name: str, dest: Path) -> str:
    target = dest / name
    shutil.copy(EXAMPLES_DIR / name, target)
    return str(target)


def test_check_success(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = example("hypothetical_syllogism.json", isolated_env)
    assert main(["check", path]) == 0
    out = capsys.readouterr().out
    assert "hypothetical_syllogism" in out
    assert "✓ Proved: ⊢ (p → q) → (q → r) → p → r" in out


def test_check_all_bundled_successes(isolated_env: Path) -> None:
    paths = [
        example(name, isolated_env)
        for name in ("hypothetical_syllogism.json", "conj_commutes.json", "disj_commutes.json")
    ]
    assert main(["check", *paths]) == 0


def test_check_failure_exit_status(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = example("undischarged.json", isolated_env)
    assert main(["check", path]) == 1
    out = capsys.readouterr().out
    assert "× Not proved: (p → q) → q" in out
    assert "[OpenAssumptions] final check (shows)" in out


def test_check_any_failure_fails_the_run(isolated_env: Path) -> None:
    good = example("conj_commutes.json", isolated_env)
    bad = example("undischarged.json", isolated_env)
    assert main(["check", good, bad]) == 1


def test_check_json_report(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = example("disj_commutes.json", isolated_env)
    bad = example("undischarged.json", isolated_env)
    main(["check", "--json", good, bad])
    report = json.loads(capsys.readouterr().out)
    assert [r["success"] for r in report] == [True, False]
    assert report[0]["conclusion"]["type"] == "impl"
    assert report[0]["failure"] is None
    assert report[1]["failure"]["error"] == "OpenAssumptions"
    assert report[1]["failure"]["step"] is None


def test_check_kernel_error_in_step(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = {
        "name": "bad_label",
        "goal": "p -> p",
        "steps": [
            {"id": "h", "rule": "suppose", "formula": "p", "label": 1},
            {"id": "done", "rule": "impl_intro", "label": 99, "proof": "h"},
        ],
    }
    path = isolated_env / "bad_label.json"
    path.write_text(json.dumps(script))
    assert main(["check", str(path)]) == 1
    out = capsys.readouterr().out
    assert "[LabelNotFound] step 'done' (impl_intro)" in out


def test_check_malformed_script(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = isolated_env / "broken.json"
    path.write_text('{"goal": "p", "steps": []}')
    assert main(["check", str(path)]) == 1
    assert "malformed script" in capsys.readouterr().err


def test_check_missing_file(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", str(isolated_env / "nope.json")]) == 1
    assert "could not read file" in capsys.readouterr().err


def test_check_ascii_output(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = example("conj_commutes.json", isolated_env)
    assert main(["--ascii", "check", path]) == 0
    assert "|- p & q -> q & p" in capsys.readouterr().out


def test_ascii_from_environment(
    isolated_env: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("NATDED_ASCII", "1")
    assert main(["parse", "p ∧ q → r"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "p & q -> r"


def test_parse(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "(p -> q) & r"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "(p → q) ∧ r"
    assert out[1] == "  atoms: p, q, r"


def test_parse_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "--json", "p | q"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "type": "disj",
        "lhs": {"type": "var", "name": "p"},
        "rhs": {"type": "var", "name": "q"},
    }


def test_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "p &"]) == 1
    assert "Parse error: column 4" in capsys.readouterr().err


def test_examples(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["examples"]) == 0
    out = capsys.readouterr().out
    assert "weakening" in out
    assert "⊢ p → q → p" in out


def test_examples_by_name(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["examples", "currying"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("currying")


def test_unknown_example(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["examples", "perpetual_motion"]) == 1
    assert "Unknown example(s): perpetual_motion" in capsys.readouterr().err


def test_no_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1


def test_bad_configuration(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("NATDED_LOG_LEVEL", "LOUD")
    assert main(["parse", "p"]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_bad_environment_fails_even_with_log_level_flag(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("NATDED_LOG_LEVEL", "LOUD")
    assert main(["--log-level", "debug", "parse", "p"]) == 1


def test_invalid_log_level_flag() -> None:
    with pytest.raises(SystemExit):
        main(["--log-level", "loud", "parse", "p"])


def test_parse_deeply_nested(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "(" * 100_000 + "p" + ")" * 100_000]) == 1
    assert "nested too deeply" in capsys.readouterr().err


def test_parse_long_left_nested_chain(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", " & ".join(["p"] * 100_000)]) == 1
    assert "nested too deeply" in capsys.readouterr().err


def test_check_deeply_nested_script(isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    depth = 100_000
    goal = '{"type": "conj", "lhs": {"type": "var", "name": "p"}, "rhs": ' * depth
    goal += '{"type": "var", "name": "p"}' + "}" * depth
    path = isolated_env / "deep.json"
    path.write_text(
        '{"goal": ' + goal + ', "steps": [{"id": "h", "rule": "suppose", "formula": "p", "label": 1}]}'
    )
    assert main(["check", str(path)]) == 1
    assert "nested too deeply" in capsys.readouterr().err
