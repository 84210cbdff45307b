"""CLI entry point for webforms."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from webforms import __version__, logger
from webforms.exceptions import PackageError
from webforms.logging import configure_logging
from webforms.manager import validate_schema_structure
from webforms.schema_document import dumps_schema, parse_schema
from webforms.settings import get_settings
from webforms.typing.models import FormSchema, SubmissionResult
from webforms.validation import ValidationEngine


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="webforms")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Check the structure of a form schema")
    check_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")

    validate_parser = subparsers.add_parser("validate", help="Validate flat submission data against a schema")
    validate_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    validate_parser.add_argument("--data", required=True, type=Path, dest="data_path")

    roundtrip_parser = subparsers.add_parser("roundtrip", help="Parse a schema and emit it back as JSON")
    roundtrip_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    roundtrip_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    return parser


def _read_schema(path: Path) -> FormSchema:
    """Parse a schema file.

    Args:
        path (Path): Schema JSON file.

    Returns:
        FormSchema: Parsed schema.
    """
    return parse_schema(path.read_bytes())


def _read_data(path: Path) -> dict[str, object]:
    """Read flat submission data.

    Args:
        path (Path): JSON object file.

    Raises:
        ValueError: If the file does not hold a JSON object.

    Returns:
        dict[str, object]: Submitted key/value pairs.
    """
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Submission data must be a JSON object")  # noqa: TRY003
    return payload


def _run_check(args: argparse.Namespace) -> int:
    schema = _read_schema(args.schema_path)
    validate_schema_structure(schema)
    logger.info("Schema structure is valid", extra={"form_id": schema.form_id})
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    schema = _read_schema(args.schema_path)
    errors = ValidationEngine().validate(schema, _read_data(args.data_path))
    result = SubmissionResult.failure(errors) if errors else SubmissionResult.success()
    sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    return 0 if result.valid else 1


def _run_roundtrip(args: argparse.Namespace) -> int:
    document = dumps_schema(_read_schema(args.schema_path), indent=2)
    if args.output_path is None:
        sys.stdout.write(document + "\n")
    else:
        args.output_path.parent.mkdir(parents=True, exist_ok=True)
        args.output_path.write_text(document + "\n", encoding="utf-8")
        logger.info("Schema written", extra={"output_path": str(args.output_path)})
    return 0


_COMMANDS = {
    "check": _run_check,
    "validate": _run_validate,
    "roundtrip": _run_roundtrip,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, `sys.argv[1:]` when omitted.

    Returns:
        int: Exit code (0 for success, 1 for error or invalid input).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except (OSError, ValueError):
        logger.exception("Could not read input", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
