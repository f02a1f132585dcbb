"""Codon resolution against a genetic code, including IUPAC ambiguity codes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from itertools import product

from cdstranslator.core.tables import GeneticCodeTable, get_table
from cdstranslator.data.genetic_codes import (
    AMBIGUOUS_AMINO_ACIDS,
    IUPAC_BASES,
    NUCLEOTIDES,
    START,
    STOP,
    UNKNOWN,
)

logger = logging.getLogger(__name__)

# Amino acid -> ambiguous group letter (the group letters map to themselves)
_AMINO_ACID_GROUPS: dict[str, str] = {
    member: group
    for group, members in AMBIGUOUS_AMINO_ACIDS.items()
    for member in members + group
}


@lru_cache(maxsize=4096)
def _expand(codon: str) -> tuple[str, ...]:
    try:
        choices = [IUPAC_BASES[base] for base in codon]
    except KeyError:
        return ()
    return tuple("".join(bases) for bases in product(*choices))


def expand_codon(codon: str) -> list[str]:
    """Expand a codon into every unambiguous codon it may stand for.

    Args:
        codon: Three-letter codon, may contain IUPAC ambiguity codes

    Returns:
        List of concrete upper-case codons (the Cartesian product of the bases
        allowed at each position). Empty if the codon is not three letters long
        or holds a character outside the IUPAC nucleotide alphabet.
    """
    if len(codon) != 3:
        return []
    return list(_expand(codon.upper()))


def is_ambiguous(codon: str) -> bool:
    """Check whether a codon contains anything other than A, C, G or T."""
    return any(base not in NUCLEOTIDES for base in codon.upper())


def consensus(amino_acids: Iterable[str]) -> str:
    """Reduce candidate amino acids to one letter.

    Identical candidates give that amino acid. Candidates that all belong to
    one ambiguous group (B = D/N, Z = E/Q, J = I/L) give the group letter.
    Anything else, including no candidates, gives X.
    """
    result: str | None = None
    for aa in amino_acids:
        if result is None or result == aa:
            result = aa
            continue
        group = _AMINO_ACID_GROUPS.get(result)
        if group is not None and group == _AMINO_ACID_GROUPS.get(aa):
            result = group
        else:
            return UNKNOWN
    return result if result is not None else UNKNOWN


@dataclass(frozen=True)
class Codon:
    """A translated codon."""

    bases: str
    position: int  # 1-based offset of the first base
    amino_acid: str
    is_exception: bool = False

    def __str__(self) -> str:
        return f"{self.bases}({self.position})={self.amino_acid}"


class CodonTranslator:
    """Translates single codons with one genetic code table.

    Codon exceptions registered with ``add_codon_exception`` override the table
    for every occurrence of that codon, at the start position as well.
    """

    def __init__(self, table_id: int):
        """Bind the translator to a genetic code.

        Args:
            table_id: NCBI translation table number

        Raises:
            UnknownTableError: if the table is not registered (a TranslationError)
        """
        self._table = get_table(table_id)
        self._codon_exceptions: dict[str, str] = {}

    @property
    def table(self) -> GeneticCodeTable:
        return self._table

    @property
    def codon_exceptions(self) -> Mapping[str, str]:
        return dict(self._codon_exceptions)

    def add_codon_exception(self, codon: str, amino_acid: str) -> None:
        """Force every occurrence of a codon to translate to an amino acid."""
        codon = codon.upper()
        logger.debug("Codon exception %s -> %s (table %d)", codon, amino_acid, self._table.id)
        self._codon_exceptions[codon] = amino_acid

    def translate_start_codon(self, codon: str) -> str:
        """Translate a codon in the start position.

        Args:
            codon: Three-letter codon, may contain IUPAC ambiguity codes

        Returns:
            Single-letter amino acid, or 'X' if the expansions disagree
        """
        return self._translate(codon, self._table.start_codon_map)

    def translate_other_codon(self, codon: str) -> str:
        """Translate a codon outside the start position."""
        return self._translate(codon, self._table.other_codon_map)

    def is_ambiguous(self, codon: str) -> bool:
        return is_ambiguous(codon)

    def is_degenerate_start_codon(self, codon: str) -> bool:
        """Check whether any expansion of the codon is a start codon."""
        return START in self._lookup_all(codon, self._table.start_codon_map)

    def is_degenerate_stop_codon(self, codon: str) -> bool:
        """Check whether any expansion of the codon is a stop codon."""
        return STOP in self._lookup_all(codon, self._table.other_codon_map)

    def _translate(self, codon: str, codon_map: Mapping[str, str]) -> str:
        return consensus(self._lookup_all(codon, codon_map))

    def _lookup_all(self, codon: str, codon_map: Mapping[str, str]) -> list[str]:
        return [
            self._codon_exceptions.get(expanded) or codon_map[expanded]
            for expanded in expand_codon(codon)
        ]
