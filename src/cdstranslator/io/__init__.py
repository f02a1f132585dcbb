"""Input/output utilities."""

from cdstranslator.io.output import format_result, OutputFormat

__all__ = ["format_result", "OutputFormat"]
