"""Command-line interface for zotcsl.

Provides CLI commands for converting between item JSON and CSL-JSON.
"""

import importlib.metadata
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Any

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("zotcsl")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


def _open_logger(log: str | None) -> Any:
    from zotcsl.diagnostics import DiagnosticLogger, generate_run_id

    if log is None:
        return nullcontext(None)
    return DiagnosticLogger(generate_run_id(), Path(log))


def _report(result: Any, output: str, verbose: bool) -> None:
    if verbose:
        for record_id, diagnostics in result.diagnostics.items():
            for diagnostic in diagnostics:
                click.echo(
                    f"  [{diagnostic.level}] {record_id}: {diagnostic.code}: {diagnostic.message}",
                    err=True,
                )

    for record_id, message in result.failures:
        click.secho(f"✗ {record_id}: {message}", fg="red", err=True)

    if result.status == "failed":
        click.secho("✗ Error: no record could be converted", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ Successfully wrote {len(result.records)} records to {output}", fg="green")
    if result.failures:
        click.secho(f"⚠ {len(result.failures)} records failed", fg="yellow", err=True)


def _run(
    command: str,
    input_path: str,
    output: str,
    parameters: dict[str, Any],
    log: str | None,
    verbose: bool,
) -> None:
    from zotcsl import (
        ConversionConfig,
        ConversionOptions,
        convert_from_csl,
        convert_to_csl,
        read_records,
        write_records,
    )

    try:
        config = ConversionConfig(
            locale=parameters["locale"],
            jurisdiction_default=parameters.get("jurisdiction_default"),
            jurisdiction_fallback=parameters.get("jurisdiction_fallback"),
            use_citeproc_date_parser=parameters.get("citeproc_dates", False),
            timezone=parameters.get("timezone"),
        )
        options = ConversionOptions(
            portable=parameters["portable"],
            include_relations=parameters["include_relations"],
            strict=parameters.get("strict", False),
            repair=parameters.get("repair", False),
        )

        if verbose:
            click.echo(f"Reading: {input_path}", err=True)
        records = read_records(input_path)
        if verbose:
            click.echo(f"Found {len(records)} records", err=True)

        convert = convert_to_csl if command == "to-csl" else convert_from_csl
        with _open_logger(log) as logger:
            if logger is not None:
                logger.run_started(command, {"input": input_path, "output": output, **parameters})
            result = convert(records, options, config=config, logger=logger)
            if logger is not None:
                logger.run_finished(result.status, len(result.records), len(result.failures))

        if result.records:
            if verbose:
                click.echo(f"Writing to: {output}", err=True)
            write_records(result.records, output)

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    _report(result, output, verbose)


def _common_options(func: Any) -> Any:
    options = [
        click.argument("input_path", type=click.Path(exists=True, dir_okay=False)),
        click.option(
            "--output",
            "-o",
            type=click.Path(dir_okay=False),
            required=True,
            help="Output JSON file path (.jsonl writes one record per line)",
        ),
        click.option(
            "--portable",
            is_flag=True,
            help="Carry extended fields and language variants inside 'extra'",
        ),
        click.option(
            "--include-relations",
            is_flag=True,
            help="Copy 'seeAlso' relations",
        ),
        click.option(
            "--locale",
            type=str,
            default="en-US",
            show_default=True,
            help="Locale deciding day/month order of numeric dates",
        ),
        click.option(
            "--log",
            type=click.Path(dir_okay=False),
            default=None,
            help="Append a JSONL run log to this file",
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable verbose output",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="zotcsl")
def cli() -> None:
    """Convert bibliographic records between item JSON and CSL-JSON.

    Use 'zotcsl COMMAND --help' for command-specific help.
    """


@cli.command("to-csl")
@_common_options
@click.option(
    "--timezone",
    type=str,
    default=None,
    help="IANA timezone for access dates (default: system zone)",
)
@click.option(
    "--citeproc-dates",
    is_flag=True,
    help="Parse dates with the citeproc-style date parser",
)
def to_csl(
    input_path: str,
    output: str,
    portable: bool,
    include_relations: bool,
    locale: str,
    log: str | None,
    verbose: bool,
    timezone: str | None,
    citeproc_dates: bool,
) -> None:
    """Convert item JSON records in INPUT_PATH to CSL-JSON.

    INPUT_PATH is a JSON file holding one record or a list of records,
    or a JSONL file with one record per line.

    Examples
    --------
        zotcsl to-csl items.json -o csl.json
        zotcsl to-csl items.json -o csl.json --portable --log run.jsonl
    """
    parameters = {
        "portable": portable,
        "include_relations": include_relations,
        "locale": locale,
        "timezone": timezone,
        "citeproc_dates": citeproc_dates,
    }
    _run("to-csl", input_path, output, parameters, log, verbose)


@cli.command("from-csl")
@_common_options
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on CSL types with no item type instead of using 'document'",
)
@click.option(
    "--repair",
    is_flag=True,
    help="Treat given-name-only creators as family names",
)
@click.option(
    "--jurisdiction-default",
    type=str,
    default=None,
    help="Jurisdiction for records without one",
)
@click.option(
    "--jurisdiction-fallback",
    type=str,
    default=None,
    help="Jurisdiction used when no default is set",
)
def from_csl(
    input_path: str,
    output: str,
    portable: bool,
    include_relations: bool,
    locale: str,
    log: str | None,
    verbose: bool,
    strict: bool,
    repair: bool,
    jurisdiction_default: str | None,
    jurisdiction_fallback: str | None,
) -> None:
    """Convert CSL-JSON records in INPUT_PATH to item JSON.

    Examples
    --------
        zotcsl from-csl csl.json -o items.json
        zotcsl from-csl csl.json -o items.json --strict --jurisdiction-default gb
    """
    parameters = {
        "portable": portable,
        "include_relations": include_relations,
        "locale": locale,
        "strict": strict,
        "repair": repair,
        "jurisdiction_default": jurisdiction_default,
        "jurisdiction_fallback": jurisdiction_fallback,
    }
    _run("from-csl", input_path, output, parameters, log, verbose)


@cli.command("infer-type")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on CSL types with no item type instead of using 'document'",
)
def infer_type(input_path: str, strict: bool) -> None:
    """Print the item type inferred for each CSL-JSON record in INPUT_PATH.

    One line per record: the record id (or its position) and the item type.

    Examples
    --------
        zotcsl infer-type csl.json
    """
    from zotcsl import ConversionError, infer_item_type, read_records

    try:
        records = read_records(input_path)
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    failed = False
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            click.secho(f"✗ #{index}: Record is not a JSON object", fg="red", err=True)
            failed = True
            continue
        record_id = record.get("id", f"#{index}")
        try:
            click.echo(f"{record_id}\t{infer_item_type(record, strict=strict)}")
        except ConversionError as e:
            click.secho(f"✗ {record_id}: {e}", fg="red", err=True)
            failed = True

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
