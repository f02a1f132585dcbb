"""Output formatters for translation results."""

from __future__ import annotations

import json
from enum import Enum

from cdstranslator.core.result import TranslationComparison, TranslationResult


class OutputFormat(Enum):
    """Supported output formats."""

    PRETTY = "pretty"
    TSV = "tsv"
    JSON = "json"


def format_result(
    result: TranslationResult | TranslationComparison,
    format: OutputFormat = OutputFormat.PRETTY,
) -> str:
    """Format a translation result for output.

    Args:
        result: Translation result or comparison
        format: Output format

    Returns:
        Formatted string representation
    """
    if format == OutputFormat.PRETTY:
        return str(result)

    elif format == OutputFormat.JSON:
        return json.dumps(result.to_dict(), indent=2)

    elif format == OutputFormat.TSV:
        return _format_tsv(result)

    else:
        raise ValueError(f"Unknown format: {format}")


def _format_tsv(result: TranslationResult | TranslationComparison) -> str:
    """Format results as tab-separated values."""
    if isinstance(result, TranslationResult):
        header = "translation\tconceptual_translation\tcodons\ttrailing_bases\tfixes\terrors"
        values = (
            f"{result.translation}\t{result.conceptual_translation}\t{len(result.codons)}\t"
            f"{result.trailing_bases or 'NA'}\t{','.join(result.fixes) or 'NA'}\t"
            f"{'; '.join(result.errors) or 'NA'}"
        )
        return f"{header}\n{values}"

    elif isinstance(result, TranslationComparison):
        header = "matches\tx_mismatch_count"
        return f"{header}\n{str(result.matches).lower()}\t{result.x_mismatch_count}"

    else:
        raise TypeError(f"Unknown result type: {type(result)}")
