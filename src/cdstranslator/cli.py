"""Command-line interface for cdstranslator."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cdstranslator import __version__
from cdstranslator.core.feature import (
    CODON,
    CODON_START,
    EXCEPTION,
    PSEUDO,
    TRANSL_EXCEPT,
    TRANSL_TABLE,
    Feature,
)
from cdstranslator.core.tables import GeneticCodeTableRegistry
from cdstranslator.core.translator import FixOptions, Translator
from cdstranslator.data.genetic_codes import DEFAULT_TABLE_ID, NCBI_GENETIC_CODES_VERSION
from cdstranslator.errors import TranslationError
from cdstranslator.io.output import OutputFormat, format_result

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cdstranslator {__version__}")
        raise typer.Exit()


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Send log records to stderr through rich."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_format(output_format: str) -> OutputFormat:
    try:
        return OutputFormat(output_format.lower())
    except ValueError:
        typer.echo(f"Error: Invalid format '{output_format}'. Must be pretty, tsv, or json.", err=True)
        raise typer.Exit(2)


def _parse_fixes(names: list[str], fix_all: bool) -> FixOptions:
    if fix_all:
        return FixOptions.all()

    fixes = FixOptions()
    for name in names:
        attribute = name.replace("-", "_")
        if attribute not in FixOptions.names():
            typer.echo(
                f"Error: Unknown fix '{name}'. Must be one of: {', '.join(FixOptions.names())}",
                err=True,
            )
            raise typer.Exit(2)
        setattr(fixes, attribute, True)
    return fixes


app = typer.Typer(
    name="cdstranslator",
    help="cdstranslator: translate coding sequences with NCBI genetic codes.\n\n"
    "Handles partial features, IUPAC ambiguity codes, transl_except and codon "
    "overrides, and optional automatic fixes.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (-vv for debug)"),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log errors"),
    ] = False,
) -> None:
    """cdstranslator: translate coding sequences with NCBI genetic codes."""
    configure_logging(verbose, quiet)


@app.command()
def translate(
    sequence: Annotated[
        str,
        typer.Argument(help="Nucleotide sequence (IUPAC codes allowed)"),
    ],
    table: Annotated[
        int,
        typer.Option("--table", "-t", help="NCBI translation table"),
    ] = DEFAULT_TABLE_ID,
    codon_start: Annotated[
        int,
        typer.Option("--codon-start", "-c", help="Position of the first complete codon (1, 2, or 3)"),
    ] = 1,
    five_prime_partial: Annotated[
        bool,
        typer.Option("--five-prime-partial", help="Sequence lacks its start codon"),
    ] = False,
    three_prime_partial: Annotated[
        bool,
        typer.Option("--three-prime-partial", help="Sequence lacks its stop codon"),
    ] = False,
    pseudo: Annotated[
        bool,
        typer.Option(help="Feature is a pseudogene (nothing is translated)"),
    ] = False,
    peptide: Annotated[
        bool,
        typer.Option(help="Feature is a peptide (no start or stop codon required)"),
    ] = False,
    exception: Annotated[
        bool,
        typer.Option("--exception", help="Feature carries an exception (relaxes validation)"),
    ] = False,
    transl_except: Annotated[
        Optional[list[str]],
        typer.Option("--transl-except", help="Position override, e.g. '(pos:4..6,aa:Sec)'"),
    ] = None,
    codon: Annotated[
        Optional[list[str]],
        typer.Option("--codon", help="Codon override, e.g. '(seq:\"tga\",aa:Trp)'"),
    ] = None,
    fix: Annotated[
        Optional[list[str]],
        typer.Option("--fix", help="Enable an automatic fix by name"),
    ] = None,
    fix_all: Annotated[
        bool,
        typer.Option("--fix-all", help="Enable every automatic fix"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format"),
    ] = "pretty",
) -> None:
    """Translate a coding sequence.

    Exits with status 1 when the translation has errors and 2 when the
    options themselves are invalid.

    Examples:
        cdstranslator translate ATGAAATAG
        cdstranslator translate RTGAAATAG --table 1 --fix degenerate_start_codon
        cdstranslator translate ATGTGAAAATAG --transl-except '(pos:4..6,aa:Sec)'
    """
    fmt = _parse_format(output_format)
    fixes = _parse_fixes(fix or [], fix_all)

    feature = Feature(type="propeptide" if peptide else "CDS")
    feature.add_attribute(TRANSL_TABLE, str(table))
    feature.add_attribute(CODON_START, str(codon_start))
    feature.set_five_prime_partial(five_prime_partial)
    feature.set_three_prime_partial(three_prime_partial)
    if pseudo:
        feature.add_attribute(PSEUDO, "true")
    if exception:
        feature.add_attribute(EXCEPTION, "true")
    for value in transl_except or []:
        feature.add_attribute(TRANSL_EXCEPT, value)
    for value in codon or []:
        feature.add_attribute(CODON, value)

    try:
        translator = Translator(feature, fixes=fixes)
    except TranslationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    result = translator.translate(sequence)
    typer.echo(format_result(result, fmt))

    if translator.applied_fixes:
        logger.info("Fixes applied: %s", ", ".join(sorted(translator.applied_fixes)))

    if result.has_errors():
        raise typer.Exit(1)


@app.command()
def tables() -> None:
    """List the available genetic code tables."""
    table = Table(title=f"NCBI genetic codes (version {NCBI_GENETIC_CODES_VERSION})")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Name")
    table.add_column("Start codons", style="green")
    table.add_column("Stop codons", style="red")

    for code in GeneticCodeTableRegistry.instance():
        table.add_row(
            str(code.id),
            code.name,
            " ".join(code.start_codons()),
            " ".join(code.stop_codons()),
        )

    Console().print(table)


@app.command()
def compare(
    expected: Annotated[
        str,
        typer.Argument(help="Expected translation (X marks unknown residues)"),
    ],
    actual: Annotated[
        str,
        typer.Argument(help="Conceptual translation to check"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format"),
    ] = "pretty",
) -> None:
    """Compare an expected translation with a conceptual one.

    Exits with status 1 when the translations do not match.
    """
    fmt = _parse_format(output_format)
    comparison = Translator().equals_translation(expected.upper(), actual.upper())
    typer.echo(format_result(comparison, fmt))

    if not comparison.matches:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
