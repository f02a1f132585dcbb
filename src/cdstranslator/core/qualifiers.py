"""Parsers for the transl_except and codon feature attributes.

Examples of accepted values::

    transl_except=(pos:213..215,aa:Trp)
    transl_except=(pos:7,aa:TERM)
    codon=(seq:"tga",aa:Trp)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cdstranslator.data.genetic_codes import AMINO_ACID_NAMES, NUCLEOTIDES
from cdstranslator.errors import TranslationError

# Largest position representable as a signed 32-bit integer
MAX_POSITION = 2**31 - 1

_TRANSL_EXCEPT_PATTERN = re.compile(
    r"^\s*\(\s*pos\s*:\s*([^,]+?)\s*,\s*aa\s*:\s*([^\s,)]+)\s*\)\s*$", re.IGNORECASE
)
_CODON_PATTERN = re.compile(
    r'^\s*\(\s*seq\s*:\s*"?([^"\s,]+)"?\s*,\s*aa\s*:\s*([^\s,)]+)\s*\)\s*$', re.IGNORECASE
)
_POSITION_PATTERN = re.compile(r"^\s*([0-9]+)(?:\s*\.\.\s*([0-9]+))?\s*$")

# Single letter -> canonical three-letter name used when rendering attributes
_CANONICAL_NAMES: dict[str, str] = {}
for _name, _letter in AMINO_ACID_NAMES.items():
    _CANONICAL_NAMES.setdefault(_letter, _name if len(_name) > 3 else _name.capitalize())


def amino_acid_letter(name: str) -> str:
    """Convert an amino acid name to its single-letter code.

    Args:
        name: Three-letter name (e.g. 'Trp', 'Sec') or keyword ('TERM', 'OTHER'),
            case-insensitive

    Returns:
        Single-letter amino acid code

    Raises:
        TranslationError: if the name is not recognized
    """
    letter = AMINO_ACID_NAMES.get(name.strip().upper())
    if letter is None:
        raise TranslationError(f"Unknown amino acid: {name}")
    return letter


def amino_acid_name(letter: str) -> str:
    """Canonical attribute name for a single-letter amino acid code."""
    try:
        return _CANONICAL_NAMES[letter.upper()]
    except KeyError:
        raise TranslationError(f"Unknown amino acid: {letter}") from None


def _parse_position(value: str, raw: str) -> int:
    position = int(value)
    if position > MAX_POSITION:
        raise TranslationError(f"Invalid position in transl_except: {raw}")
    return position


@dataclass(frozen=True)
class PositionException:
    """Amino acid override for one nucleotide range (a transl_except attribute).

    Positions are 1-based and inclusive, relative to the translated sequence.
    """

    start: int
    end: int
    amino_acid: str

    @classmethod
    def parse(cls, value: str | None) -> PositionException:
        """Parse a transl_except attribute value.

        Args:
            value: Attribute value such as '(pos:213..215,aa:Trp)'

        Returns:
            PositionException

        Raises:
            TranslationError: if the value is blank, malformed, has an invalid
                position range or names an unknown amino acid
        """
        if value is None or not value.strip():
            raise TranslationError("transl_except value cannot be null or empty")

        match = _TRANSL_EXCEPT_PATTERN.match(value)
        if match is None:
            raise TranslationError(f"Invalid transl_except format: {value}")

        location = match.group(1)
        position = _POSITION_PATTERN.match(location)
        if position is None:
            raise TranslationError(f"Invalid position in transl_except: {location.strip()}")

        start = _parse_position(position.group(1), value)
        end = _parse_position(position.group(2), value) if position.group(2) else start
        if start > end:
            raise TranslationError(f"Invalid position range in transl_except: {start}..{end}")

        return cls(start, end, amino_acid_letter(match.group(2)))

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        location = str(self.start) if self.start == self.end else f"{self.start}..{self.end}"
        return f"(pos:{location},aa:{amino_acid_name(self.amino_acid)})"


@dataclass(frozen=True)
class CodonException:
    """Amino acid override for every occurrence of a codon (a codon attribute)."""

    triplet: str
    amino_acid: str

    @classmethod
    def parse(cls, value: str | None) -> CodonException:
        """Parse a codon attribute value.

        Args:
            value: Attribute value such as '(seq:"tga",aa:Trp)'; quotes are optional

        Returns:
            CodonException with the triplet upper-cased

        Raises:
            TranslationError: if the value is blank or malformed, the codon is not
                exactly three A/C/G/T bases, or the amino acid is unknown
        """
        if value is None or not value.strip():
            raise TranslationError("codon value cannot be null or empty")

        match = _CODON_PATTERN.match(value)
        if match is None:
            raise TranslationError(f"Invalid codon format: {value}")

        triplet = match.group(1).upper()
        if len(triplet) != 3:
            raise TranslationError(f"Codon must be exactly 3 bases: {triplet}")
        if any(base not in NUCLEOTIDES for base in triplet):
            raise TranslationError(f"Codon must only contain A, C, G or T: {triplet}")

        return cls(triplet, amino_acid_letter(match.group(2)))

    def __str__(self) -> str:
        return f'(seq:"{self.triplet.lower()}",aa:{amino_acid_name(self.amino_acid)})'


def parse_transl_except(value: str | None) -> PositionException:
    return PositionException.parse(value)


def parse_codon(value: str | None) -> CodonException:
    return CodonException.parse(value)
