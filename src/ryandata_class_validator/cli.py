from __future__ import annotations

import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import typer

from ryandata_class_validator.core.errors import ClassValidatorUsageError
from ryandata_class_validator.core.registry import PipelineRegistry
from ryandata_class_validator.pipeline.engine import create_validated

logger = logging.getLogger(__name__)

USAGE_EXIT_CODE = 2

app = typer.Typer(help="Validate JSON data against classes with registered pipelines.")


def load_target(target: str) -> type:
    """Import a class given as ``package.module:ClassName``.

    Importing the module runs its pipeline registrations.

    Raises:
        ClassValidatorUsageError: If the target is malformed or not a class.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ClassValidatorUsageError(
            f"Target must look like `module:ClassName`, got `{target}`."
        )
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ClassValidatorUsageError(f"Cannot import `{module_name}`: {exc}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ClassValidatorUsageError(
                f"`{module_name}` has no attribute `{attr_path}`."
            ) from exc
    if not isinstance(obj, type):
        raise ClassValidatorUsageError(f"`{target}` is not a class.")
    return obj


def read_json(source: str) -> Any:
    """Read JSON from a file path, or from stdin when ``source`` is ``-``."""
    try:
        if source == "-":
            return json.load(sys.stdin)
        return json.loads(Path(source).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ClassValidatorUsageError(f"Cannot read JSON from `{source}`: {exc}") from exc


def _fail_usage(exc: Exception) -> NoReturn:
    logger.warning("Usage error: %s", exc)
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=USAGE_EXIT_CODE)


@app.command()
def check(
    target: str = typer.Argument(..., help="Class to validate against, as module:ClassName."),
    data_file: str = typer.Argument(..., help="JSON file to validate, or '-' for stdin."),
    as_json: bool = typer.Option(  # noqa: B008
        False,
        "--json",
        help="Print a JSON report instead of plain text.",
    ),
) -> None:
    """Validate a JSON object, or each object of a JSON list."""
    try:
        cls = load_target(target)
        data = read_json(data_file)
        records = data if isinstance(data, list) else [data]
        results = [create_validated(cls, record) for record in records]
    except ClassValidatorUsageError as exc:
        _fail_usage(exc)

    failed = [(index, result) for index, result in enumerate(results) if result.is_err()]

    if as_json:
        report = [
            {
                "index": index,
                "valid": result.is_ok(),
                "errors": [] if result.is_ok() else result.value,
            }
            for index, result in enumerate(results)
        ]
        typer.echo(json.dumps(report, indent=2))
    elif not failed:
        typer.echo(f"OK: {len(results)} record(s) valid as {cls.__name__}")
    else:
        for index, result in failed:
            prefix = f"[{index}] " if isinstance(data, list) else ""
            for error in result.value:
                typer.echo(f"{prefix}{error}")

    raise typer.Exit(code=1 if failed else 0)


@app.command()
def describe(
    target: str = typer.Argument(..., help="Class to describe, as module:ClassName."),
) -> None:
    """Show the registered pipeline of each field."""
    try:
        cls = load_target(target)
    except ClassValidatorUsageError as exc:
        _fail_usage(exc)

    context = PipelineRegistry.get(cls)
    if context is None:
        _fail_usage(ClassValidatorUsageError(f"`{cls.__name__}` contains no validation."))

    typer.echo(f"{cls.__name__}:")
    for name, field_context in context.items():
        info = field_context.describe()
        flags = [
            flag
            for flag, enabled in (
                ("optional", info["allow_undefined"]),
                ("nullable", info["allow_null"]),
            )
            if enabled
        ]
        suffix = f" ({', '.join(flags)})" if flags else ""
        typer.echo(f"  {name}: {info['declared_type'] or '?'}{suffix}")
        if info["parsers"]:
            typer.echo(f"    parsers: {', '.join(info['parsers'])}")
        if info["rules"]:
            typer.echo(f"    rules: {', '.join(info['rules'])}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
