"""Exceptions raised while configuring a translation."""

from __future__ import annotations


class TranslationError(Exception):
    """Malformed translation input: attribute syntax, amino acid name or table id."""


# Name used by callers that follow the GFF3 tooling conventions
TranslationException = TranslationError


class UnknownTableError(TranslationError, LookupError):
    """Raised when a genetic code table id is not registered."""

    def __init__(self, table_id: object):
        self.table_id = table_id
        super().__init__(f"Unknown translation table: {table_id}")
