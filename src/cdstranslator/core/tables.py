"""Genetic code tables and the process-wide table registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cdstranslator.data.genetic_codes import (
    DEFAULT_TABLE_ID,
    GENETIC_CODES,
    NCBI_CODONS,
    START,
    STOP,
)
from cdstranslator.errors import UnknownTableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GeneticCodeTable:
    """An NCBI genetic code: codon-to-amino-acid maps for start and other codons."""

    id: int
    name: str
    other_codon_map: Mapping[str, str]
    start_codon_map: Mapping[str, str]

    @classmethod
    def from_ncbi(cls, table_id: int, name: str, amino_acids: str, starts: str) -> GeneticCodeTable:
        """Build a table from NCBI amino acid and start strings.

        Args:
            table_id: NCBI table number
            name: Human readable table name
            amino_acids: 64 amino acid letters in TCAG codon order
            starts: 64 start flags in TCAG codon order ('M' marks a start codon)

        Returns:
            Immutable GeneticCodeTable
        """
        if len(amino_acids) != 64 or len(starts) != 64:
            raise ValueError(f"Translation table {table_id} must contain exactly 64 codons")

        other_codons: dict[str, str] = {}
        start_codons: dict[str, str] = {}
        for codon, aa, start in zip(NCBI_CODONS, amino_acids, starts):
            other_codons[codon] = aa
            start_codons[codon] = START if start == START else aa

        return cls(
            id=table_id,
            name=name,
            other_codon_map=MappingProxyType(other_codons),
            start_codon_map=MappingProxyType(start_codons),
        )

    def translate_other(self, codon: str) -> str | None:
        """Amino acid for an unambiguous codon outside the start position."""
        return self.other_codon_map.get(codon.upper())

    def translate_start(self, codon: str) -> str | None:
        """Amino acid for an unambiguous codon at the start position."""
        return self.start_codon_map.get(codon.upper())

    def start_codons(self) -> list[str]:
        return [codon for codon in NCBI_CODONS if self.start_codon_map[codon] == START]

    def stop_codons(self) -> list[str]:
        return [codon for codon in NCBI_CODONS if self.other_codon_map[codon] == STOP]


class GeneticCodeTableRegistry:
    """Read-only registry of all NCBI genetic code tables, keyed by table id.

    Use ``GeneticCodeTableRegistry.instance()``; the tables are built once on
    first access and never modified afterwards.
    """

    _instance: GeneticCodeTableRegistry | None = None
    _lock = threading.Lock()

    def __init__(self, tables: Mapping[int, GeneticCodeTable]):
        self._tables: Mapping[int, GeneticCodeTable] = MappingProxyType(dict(tables))

    @classmethod
    def instance(cls) -> GeneticCodeTableRegistry:
        """Return the shared registry, building it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls.load()
        return cls._instance

    @classmethod
    def load(cls) -> GeneticCodeTableRegistry:
        """Build a registry from the bundled NCBI genetic code definitions."""
        tables = {
            table_id: GeneticCodeTable.from_ncbi(table_id, name, amino_acids, starts)
            for table_id, (name, amino_acids, starts) in GENETIC_CODES.items()
        }
        logger.debug("Loaded %d genetic code tables", len(tables))
        return cls(tables)

    def get(self, table_id: int) -> GeneticCodeTable:
        """Get a table by its NCBI number.

        Raises:
            UnknownTableError: if the id is not registered
        """
        try:
            return self._tables[table_id]
        except (KeyError, TypeError):
            raise UnknownTableError(table_id) from None

    def all(self) -> Mapping[int, GeneticCodeTable]:
        return self._tables

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._tables

    def __iter__(self) -> Iterator[GeneticCodeTable]:
        return iter(self._tables[table_id] for table_id in sorted(self._tables))

    def __len__(self) -> int:
        return len(self._tables)


def get_table(table_id: int = DEFAULT_TABLE_ID) -> GeneticCodeTable:
    """Get a genetic code table from the shared registry."""
    return GeneticCodeTableRegistry.instance().get(table_id)
