"""Static data for genetic codes and amino acid names."""

from cdstranslator.data.genetic_codes import (
    AMINO_ACID_NAMES,
    DEFAULT_TABLE_ID,
    GENETIC_CODES,
    IUPAC_BASES,
)

__all__ = ["AMINO_ACID_NAMES", "DEFAULT_TABLE_ID", "GENETIC_CODES", "IUPAC_BASES"]
