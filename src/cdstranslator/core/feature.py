"""Minimal feature model read and updated by the Translator.

Any object implementing ``FeatureLike`` can configure a translation; the
``Feature`` dataclass is a concrete GFF3-flavoured implementation that also
accepts the partial-flag and pseudo updates a translation may produce.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

# Attribute names
TRANSL_TABLE = "transl_table"
CODON_START = "codon_start"
TRANSL_EXCEPT = "transl_except"
CODON = "codon"
PSEUDO = "pseudo"
PSEUDOGENE = "pseudogene"
PARTIAL = "partial"
EXCEPTION = "exception"
TRANSLATION = "translation"

# GFF3 partial attribute values, given on the forward strand
PARTIAL_START = "start"
PARTIAL_END = "end"

# Feature types that are translated without start or stop codons
PEPTIDE_TYPES = frozenset(
    {
        "propeptide",
        "mat_peptide",
        "sig_peptide",
        "transit_peptide",
        "signal_peptide",
        "mature_protein_region",
        "propeptide_region",
    }
)


@runtime_checkable
class FeatureLike(Protocol):
    """Read-only attribute access needed to configure a translation."""

    def get_attribute(self, name: str) -> str | None: ...

    def get_attribute_list(self, name: str) -> list[str] | None: ...

    def has_attribute(self, name: str) -> bool: ...


@dataclass
class Feature:
    """A sequence feature with multi-valued attributes.

    Attributes:
        type: Feature type name (e.g. 'CDS', 'mat_peptide')
        strand: '+', '-' or '.'
        attributes: Attribute name -> list of values
    """

    type: str = "CDS"
    strand: str = "+"
    attributes: dict[str, list[str]] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str | None:
        values = self.attributes.get(name)
        return values[0] if values else None

    def get_attribute_list(self, name: str) -> list[str] | None:
        values = self.attributes.get(name)
        return list(values) if values is not None else None

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def add_attribute(self, name: str, value: str) -> None:
        values = self.attributes.setdefault(name, [])
        if value not in values:
            values.append(value)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    @property
    def is_complement(self) -> bool:
        return self.strand == "-"

    @property
    def is_peptide(self) -> bool:
        return self.type.lower() in PEPTIDE_TYPES

    def is_pseudo(self) -> bool:
        return self.has_attribute(PSEUDO) or self.has_attribute(PSEUDOGENE)

    def _partial_value(self, five_prime: bool) -> str:
        # partial=start|end refers to genomic coordinates
        if five_prime != self.is_complement:
            return PARTIAL_START
        return PARTIAL_END

    def _has_partial(self, value: str) -> bool:
        return value in (self.get_attribute_list(PARTIAL) or [])

    def _set_partial(self, value: str, enabled: bool) -> None:
        if enabled:
            self.add_attribute(PARTIAL, value)
            return
        values = [v for v in self.attributes.get(PARTIAL, []) if v != value]
        if values:
            self.attributes[PARTIAL] = values
        else:
            self.remove_attribute(PARTIAL)

    def is_five_prime_partial(self) -> bool:
        return self._has_partial(self._partial_value(five_prime=True))

    def is_three_prime_partial(self) -> bool:
        return self._has_partial(self._partial_value(five_prime=False))

    def set_five_prime_partial(self, enabled: bool = True) -> None:
        self._set_partial(self._partial_value(five_prime=True), enabled)

    def set_three_prime_partial(self, enabled: bool = True) -> None:
        self._set_partial(self._partial_value(five_prime=False), enabled)


def partial_flags(feature: FeatureLike) -> tuple[bool, bool]:
    """Read the (five prime, three prime) partial flags of any feature."""
    if isinstance(feature, Feature):
        return feature.is_five_prime_partial(), feature.is_three_prime_partial()
    values = feature.get_attribute_list(PARTIAL) or []
    start, end = PARTIAL_START in values, PARTIAL_END in values
    if getattr(feature, "strand", "+") == "-":
        return end, start
    return start, end
