"""
toonconv command line interface.

Commands:
- convert: encode JSON files or STDIN as TOON
- schema: show the array schemas detected in a JSON document

TOON text goes to STDOUT (or the --output file); errors, statistics and
log records go to STDERR.
"""

import sys
from pathlib import Path

import click

from toonconv import __version__
from toonconv.config import Delimiter, EncodeConfig, QuoteStrategy
from toonconv.conversion import ConversionEngine, ConversionStatistics, EncodedResult
from toonconv.types.errors import ConfigurationError, InputParseError, ToonconvError
from toonconv.utils.logger import configure_logging, logger
from toonconv.utils.validators import parse_byte_size


def _byte_size(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return parse_byte_size(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _read_input(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputParseError("Input is not valid UTF-8", source=path, original_error=e) from e
    except OSError as e:
        raise InputParseError(f"Cannot read input: {e}", source=path, original_error=e) from e


def _report_error(error: ToonconvError, source: str | None = None) -> None:
    if source:
        click.echo(f"{source}:", err=True)
    click.echo(error.get_formatted_message(), err=True)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="toonconv", message="%(prog)s v%(version)s")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to STDERR")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """toonconv - JSON to TOON encoder.

    Converts JSON documents into TOON, a compact token-oriented text
    format for language model prompts.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("inputs", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write TOON to this file")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read one JSON document from STDIN")
@click.option("--indent", type=int, default=2, show_default=True, help="Spaces per level (0-8)")
@click.option(
    "--delimiter",
    type=click.Choice(["comma", "tab", "pipe"], case_sensitive=False),
    default="comma",
    show_default=True,
    help="Array and row separator",
)
@click.option(
    "--quote",
    "quote_strategy",
    type=click.Choice(["smart", "always", "never"], case_sensitive=False),
    default="smart",
    show_default=True,
    help="String quoting policy",
)
@click.option("--plain", is_flag=True, help="Compact output, one line per object")
@click.option("--no-length-marker", is_flag=True, help="Omit element counts in array headers")
@click.option("--byte-limit", callback=_byte_size, help="Maximum input size, e.g. 100MB")
@click.option("--timeout", type=float, help="Maximum seconds per document")
@click.option("--max-depth", type=int, help="Maximum nesting depth")
@click.option("--no-validate", is_flag=True, help="Skip output validation")
@click.option("--stats", "show_stats", is_flag=True, help="Print statistics to STDERR")
@click.option("--continue-on-error", is_flag=True, help="Skip failing inputs instead of stopping")
def convert(
    inputs: tuple[str, ...],
    output: str | None,
    use_stdin: bool,
    indent: int,
    delimiter: str,
    quote_strategy: str,
    plain: bool,
    no_length_marker: bool,
    byte_limit: int | None,
    timeout: float | None,
    max_depth: int | None,
    no_validate: bool,
    show_stats: bool,
    continue_on_error: bool,
) -> None:
    """Convert JSON documents to TOON.

    Reads each INPUTS file (or STDIN with --stdin) and writes the TOON
    text to STDOUT, or to --output. Multiple documents are separated by
    a blank line.
    """
    if not inputs and not use_stdin:
        raise click.UsageError("No input given. Pass JSON files or use --stdin.")

    try:
        config = _build_config(
            indent=indent,
            delimiter=delimiter,
            quote_strategy=quote_strategy,
            plain=plain,
            no_length_marker=no_length_marker,
            byte_limit=byte_limit,
            timeout=timeout,
            max_depth=max_depth,
            no_validate=no_validate,
        )
    except ConfigurationError as e:
        _report_error(e)
        sys.exit(1)

    engine = ConversionEngine(config)
    stats = ConversionStatistics()
    documents: list[str] = []
    failed = 0

    sources: list[str | None] = list(inputs)
    if use_stdin:
        sources.append(None)

    for source in sources:
        try:
            if source is None:
                result = engine.encode_json(click.get_text_stream("stdin").read(), source="<stdin>")
            else:
                result = engine.encode_json(_read_input(source), source=source)
        except ToonconvError as e:
            failed += 1
            _report_error(e, source or "<stdin>")
            if not continue_on_error:
                sys.exit(1)
            logger.debug(f"Skipping failed input {source or '<stdin>'}")
            continue

        documents.append(result.text)
        stats.combine(ConversionStatistics.for_result(result))

    if documents:
        text = "\n\n".join(documents)
        if output:
            Path(output).write_text(text + "\n", encoding="utf-8")
            logger.debug(f"Wrote {len(documents)} documents to {output}")
        else:
            click.echo(text)

    if show_stats:
        click.echo(stats.summary(), err=True)
        if failed:
            click.echo(f"{failed} input(s) failed", err=True)

    if failed:
        sys.exit(1)


def _build_config(
    *,
    indent: int,
    delimiter: str,
    quote_strategy: str,
    plain: bool,
    no_length_marker: bool,
    byte_limit: int | None,
    timeout: float | None,
    max_depth: int | None,
    no_validate: bool,
) -> EncodeConfig:
    """Translate command line options into an EncodeConfig."""
    options = {
        "indent": indent,
        "delimiter": Delimiter.from_name(delimiter),
        "quote_strings": QuoteStrategy.from_name(quote_strategy),
        "pretty": not plain,
        "length_marker": not no_length_marker,
        "validate_output": not no_validate,
    }
    if byte_limit is not None:
        options["byte_limit"] = byte_limit
    if timeout is not None:
        options["time_limit"] = timeout
    if max_depth is not None:
        options["max_depth"] = max_depth
    return EncodeConfig(**options)


@cli.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
def schema(input_path: str) -> None:
    """Show the array schemas detected in a JSON document."""
    engine = ConversionEngine(EncodeConfig(include_schema=True, validate_output=False))

    try:
        result = engine.encode_json(_read_input(input_path), source=input_path)
    except ToonconvError as e:
        _report_error(e, input_path)
        sys.exit(1)

    _print_schema(result)


def _print_schema(result: EncodedResult) -> None:
    info = result.metadata.schema_info
    if info is None:
        click.echo("No arrays found")
        return

    click.echo(f"Arrays: {info.array_count}")
    click.echo(f"Uniform arrays: {len(info.uniform_arrays)}")

    for i, summary in enumerate(info.uniform_arrays, 1):
        click.echo("")
        click.echo(
            f"Array {i}: {summary.element_count} elements, {summary.field_count} fields"
        )
        for name in summary.field_names:
            click.echo(f"  {name}: {summary.field_types[name]}")


def main() -> None:
    """Entry point for the toonconv script."""
    cli()


if __name__ == "__main__":
    main()
