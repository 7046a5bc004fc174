import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from natded.config import LOG_LEVELS, Settings
from natded.errors import KernelError, ScopeError
from natded.examples import ALL_EXAMPLES
from natded.formulas import atoms
from natded.notation import ParseError, parse_formula, render_formula, render_proof
from natded.report import CheckOutcome, check_script, format_report, report_json
from natded.result import Err, Ok
from natded.script import ScriptFormatError
from natded.serialization import formula_to_json, loads

logger = logging.getLogger(__name__)


def handle_check(files: Sequence[str], *, as_json: bool, ascii: bool) -> int:
    """Replay each derivation script and report whether it proves its goal."""
    outcomes: list[CheckOutcome] = []
    malformed = 0

    for path in files:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            print(f"{path}: could not read file: {e}", file=sys.stderr)
            malformed += 1
            continue
        try:
            script = loads(text)
        except ScriptFormatError as e:
            print(f"{path}: malformed script: {e}", file=sys.stderr)
            malformed += 1
            continue
        logger.info("Checking %s (%d steps)", path, len(script.steps))
        try:
            outcomes.append(check_script(script, source=path, ascii=ascii))
        except RecursionError:
            print(f"{path}: malformed script: formula is nested too deeply", file=sys.stderr)
            malformed += 1

    if as_json:
        print(json.dumps([report_json(o) for o in outcomes], indent=2, ensure_ascii=False))
    else:
        for outcome in outcomes:
            print(format_report(outcome, ascii=ascii))

    any_failure = malformed > 0 or any(not o.success for o in outcomes)
    return 1 if any_failure else 0


def handle_parse(text: str, *, as_json: bool, ascii: bool) -> int:
    try:
        formula = parse_formula(text)
        if as_json:
            output = json.dumps(formula_to_json(formula), indent=2)
        else:
            output = (
                f"{render_formula(formula, ascii=ascii)}\n"
                f"  atoms: {', '.join(sorted(atoms(formula)))}"
            )
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Parse error: formula is nested too deeply", file=sys.stderr)
        return 1
    print(output)
    return 0


def handle_examples(names: Sequence[str], *, ascii: bool) -> int:
    unknown = [n for n in names if n not in ALL_EXAMPLES]
    if unknown:
        print(f"Unknown example(s): {', '.join(unknown)}", file=sys.stderr)
        print(f"Available: {', '.join(ALL_EXAMPLES)}", file=sys.stderr)
        return 1

    status = 0
    for name in names or list(ALL_EXAMPLES):
        try:
            proof = ALL_EXAMPLES[name]()
        except (KernelError, ScopeError) as e:
            print(f"{name:24s}  × {type(e).__name__}: {e}")
            status = 1
            continue
        print(f"{name:24s}  {render_proof(proof, ascii=ascii)}")
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="natded",
        description="Check propositional Natural Deduction derivations",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: NATDED_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--ascii",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print formulas with & | -> instead of ∧ ∨ → (default: NATDED_ASCII).",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: check
    check_parser = subparsers.add_parser(
        "check",
        help="Replay derivation scripts (JSON) through the kernel and check their goals.",
    )
    check_parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Derivation script .json file(s).",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print a machine-readable JSON report.",
    )

    # Command: parse
    parse_parser = subparsers.add_parser(
        "parse", help="Parse a formula and print it back in canonical form."
    )
    parse_parser.add_argument("formula", help='Formula text, e.g. "p & q -> q & p".')
    parse_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the formula as JSON.",
    )

    # Command: examples
    examples_parser = subparsers.add_parser(
        "examples", help="Build the bundled textbook derivations."
    )
    examples_parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help=f"Examples to build (default: all). One of: {', '.join(ALL_EXAMPLES)}.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    match Settings.from_env():
        case Ok(settings):
            pass
        case Err(e):
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ascii = settings.ascii if args.ascii is None else args.ascii

    match args.command:
        case "check":
            return handle_check(args.files, as_json=args.json, ascii=ascii)
        case "parse":
            return handle_parse(args.formula, as_json=args.json, ascii=ascii)
        case "examples":
            return handle_examples(args.names, ascii=ascii)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
