"""
Command-line interface for hartools.

Commands:
- convert: Write HAR entries as delimited text and print timing statistics
- stats: Show timing statistics as a table without writing any CSV
"""

import click
from pathlib import Path
import logging
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import ConverterConfig, LINE_ENDINGS, unescape
from .converter import HarConverter, TRACKED_FIELDS
from .errors import HarToolsError

console = Console(stderr=True, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_converter(har_file: Path, config: ConverterConfig) -> HarConverter:
    try:
        return HarConverter.from_file(har_file, config)
    except HarToolsError as e:
        console.print(f"[red]✗ Failed to load {escape(str(har_file))}: {escape(str(e))}[/]")
        raise click.Abort()


@click.group()
def main():
    """hartools - Convert HAR captures to CSV with timing statistics."""
    pass


@main.command()
@click.argument('har_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('-o', '--output', type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
              help='Output CSV path, or - for stdout (default: HAR path with .csv suffix)')
@click.option('-c', '--charset', help='Input charset (default: utf-8)')
@click.option('-d', '--delimiter', help='Single delimiter character, escapes like \\t allowed (default: TAB)')
@click.option('--line-ending', type=click.Choice(list(LINE_ENDINGS)), help='Row terminator (default: platform)')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
def convert(har_file: Path, output: Path | None, charset: str | None, delimiter: str | None,
            line_ending: str | None, verbose: bool):
    """Convert a HAR file to delimited text."""
    configure_logging(verbose)

    try:
        config = ConverterConfig.from_env().with_overrides(
            charset=charset,
            delimiter=unescape(delimiter) if delimiter is not None else None,
            line_ending=LINE_ENDINGS.get(line_ending) if line_ending else None,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    if output is None:
        output = har_file.with_suffix('.csv')

    if str(output) != '-' and output.resolve() == har_file.resolve():
        raise click.UsageError(f"Output path is the input file: {har_file} (use -o to choose another)")

    converter = load_converter(har_file, config)

    try:
        result = converter.convert()
    except HarToolsError as e:
        console.print(f"[red]✗ Failed to convert {escape(str(har_file))}: {escape(str(e))}[/]")
        raise click.Abort()

    if str(output) == '-':
        click.echo(result.csv_text, nl=False)
    else:
        # newline='' keeps the configured line ending as-is
        with open(output, 'w', encoding='utf-8', newline='') as f:
            f.write(result.csv_text)
        console.print(f"[bold green]✓ Wrote {result.row_count} rows to:[/] {output}")

    for report in result.reports:
        console.print(report, markup=False, highlight=False)


@main.command()
@click.argument('har_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('-c', '--charset', help='Input charset (default: utf-8)')
def stats(har_file: Path, charset: str | None):
    """Show timing and size statistics for a HAR file."""
    configure_logging(False)

    try:
        config = ConverterConfig.from_env().with_overrides(charset=charset)
    except ValueError as e:
        raise click.UsageError(str(e))

    converter = load_converter(har_file, config)

    try:
        result = converter.convert()
    except HarToolsError as e:
        console.print(f"[red]✗ Failed to analyze {escape(str(har_file))}: {escape(str(e))}[/]")
        raise click.Abort()

    console.print(f"[bold]Analyzed:[/] {har_file} ({result.row_count} entries)")
    console.print()

    table = Table(title="Statistics")
    table.add_column("Field", style="cyan")
    table.add_column("Count", justify="right")
    for heading in ("Min", "Mean", "STD", "Median", "90%", "99%", "Max"):
        table.add_column(heading, justify="right")
    table.add_column("Unit")

    for tracked in TRACKED_FIELDS:
        summary = result.aggregator.summarize(tracked)
        if summary is None:
            table.add_row(tracked.name, "[dim]not found[/]", *[""] * 7, tracked.unit)
            continue
        table.add_row(
            tracked.name,
            str(summary.count),
            *(f"{v:.2f}" for v in (summary.min, summary.mean, summary.std, summary.median,
                                    summary.p90, summary.p99, summary.max)),
            tracked.unit,
        )

    console.print(table)


if __name__ == '__main__':
    main()
