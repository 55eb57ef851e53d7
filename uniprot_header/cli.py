"""
Command-line interface for the UniProt header parser.

Reads FASTA files (or bare header lists) and prints one parsed record per
header, reporting lines that fail to parse without stopping.
"""

import click
import sys
import time
from typing import Optional

from .config import VALID_OUTPUT_FORMATS, VALID_VARIANTS, get_config, load_config_from_file
from .errors import FailureReport, HeaderParserError, get_error_handler
from .headers import parse_lines
from .logging_config import get_logger, log_batch_summary, setup_logging
from .models.entities import CanonicalRecord


logger = get_logger(__name__)

TEXT_COLUMNS = (
    "database", "identifier", "isoform", "entry_name", "protein_name",
    "organism_name", "organism_identifier", "gene_name",
    "protein_existence", "sequence_version",
)


def format_record(record, output_format: str) -> str:
    """Render a record as a JSON line or a tab-separated row."""
    if output_format == "json":
        return record.to_json()
    data = record.to_dict()
    return "\t".join("" if data.get(column) is None else str(data[column]) for column in TEXT_COLUMNS)


def _source_name(handle) -> str:
    return getattr(handle, "name", "-")


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """UniProt header parser - parse UniProtKB FASTA headers."""
    ctx.ensure_object(dict)

    if config:
        system_config = load_config_from_file(config)
    else:
        system_config = get_config()

    if verbose:
        system_config.logging.level = "DEBUG"

    setup_logging(system_config.logging)
    ctx.obj['config'] = system_config


@cli.command()
@click.argument('input_file', type=click.File('rb'), default='-')
@click.option('--variant', type=click.Choice(VALID_VARIANTS),
              help='Header grammar to use (default: from configuration)')
@click.option('--format', 'output_format', type=click.Choice(VALID_OUTPUT_FORMATS),
              help='Output format for parsed records')
@click.option('--strict', is_flag=True,
              help='Exit with a non-zero status if any header fails to parse')
@click.option('--all-lines', is_flag=True,
              help='Parse every non-blank line, not only lines starting with ">"')
@click.pass_context
def parse(ctx, input_file, variant, output_format, strict, all_lines):
    """Parse headers from INPUT_FILE and print one record per header."""
    parser_config = ctx.obj['config'].parser
    variant = variant or parser_config.variant
    output_format = output_format or parser_config.output_format
    strict = strict or parser_config.strict
    headers_only = parser_config.headers_only and not all_lines

    source = _source_name(input_file)
    handler = get_error_handler()
    handler.reset_error_statistics()
    parsed = failed = 0
    start = time.time()

    for result in parse_lines(input_file, variant=variant, headers_only=headers_only):
        if result.ok:
            parsed += 1
            click.echo(format_record(result.record, output_format))
            continue
        failed += 1
        handler.handle_failure(FailureReport(
            failure=result.failure,
            variant=variant,
            line_number=result.line_number,
            source=source,
        ))
        click.echo(f"{source}:{result.line_number}: {result.failure.message}", err=True)

    log_batch_summary(logger, source, parsed, failed, time.time() - start,
                      failure_counts=handler.get_error_statistics())

    if strict and failed:
        sys.exit(1)


@cli.command()
@click.argument('input_file', type=click.File('rb'), default='-')
@click.option('--variant', type=click.Choice(VALID_VARIANTS),
              help='Header grammar to use (default: from configuration)')
@click.pass_context
def check(ctx, input_file, variant):
    """Report how many headers in INPUT_FILE parse, and why others fail."""
    parser_config = ctx.obj['config'].parser
    variant = variant or parser_config.variant

    source = _source_name(input_file)
    handler = get_error_handler()
    handler.reset_error_statistics()
    counts = {"canonical": 0, "isoform": 0}
    failed = 0
    start = time.time()

    for result in parse_lines(input_file, variant=variant, headers_only=parser_config.headers_only):
        if result.ok:
            key = "canonical" if isinstance(result.record, CanonicalRecord) else "isoform"
            counts[key] += 1
        else:
            failed += 1
            handler.handle_failure(FailureReport(
                failure=result.failure,
                variant=variant,
                line_number=result.line_number,
                source=source,
            ))

    parsed = counts["canonical"] + counts["isoform"]
    log_batch_summary(logger, source, parsed, failed, time.time() - start)

    click.echo(f"=== Header check: {source} ===")
    click.echo(f"Canonical headers: {counts['canonical']}")
    click.echo(f"Isoform headers: {counts['isoform']}")
    click.echo(f"Failed headers: {failed}")

    statistics = handler.get_error_statistics()
    if statistics:
        click.echo("\n=== Failures by kind ===")
        for kind, count in sorted(statistics.items()):
            click.echo(f"{kind}: {count}")

    if failed:
        sys.exit(1)


def main(argv: Optional[list] = None):
    """Main entry point for the CLI."""
    try:
        cli(args=argv)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)
    except HeaderParserError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
