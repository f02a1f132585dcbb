"""Translation of coding sequences into proteins.

This module contains the Translator, which walks a nucleotide sequence codon
by codon, applies transl_except and codon overrides, validates start and stop
codons according to the partial flags of the feature, and optionally repairs
common annotation problems.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from cdstranslator.core.codons import Codon, CodonTranslator
from cdstranslator.core.feature import (
    CODON,
    CODON_START,
    EXCEPTION,
    PEPTIDE_TYPES,
    PSEUDO,
    PSEUDOGENE,
    TRANSL_EXCEPT,
    TRANSL_TABLE,
    TRANSLATION,
    FeatureLike,
    partial_flags,
)
from cdstranslator.core.qualifiers import CodonException, PositionException
from cdstranslator.core.result import TranslationComparison, TranslationResult
from cdstranslator.data.genetic_codes import DEFAULT_TABLE_ID, IUPAC_BASES, START, STOP, UNKNOWN
from cdstranslator.errors import TranslationError

logger = logging.getLogger(__name__)


@dataclass
class FixOptions:
    """Automatic corrections applied instead of reporting an error.

    Attributes:
        degenerate_start_codon: Translate an ambiguous first codon that could
            be a start codon as methionine
        no_start_codon_make_5_partial: Mark the feature 5' partial when it does
            not start with methionine
        codon_start_not_one_make_5_partial: Mark the feature 5' partial when
            codon_start is 2 or 3
        no_stop_codon_make_3_partial: Mark the feature 3' partial when it does
            not end with a stop codon
        valid_stop_codon_remove_3_partial: Clear the 3' partial flag when the
            translation ends with a stop codon
        non_multiple_of_three_make_3_and_5_partial: Mark the feature 5' and 3'
            partial when its length is not a multiple of three
        internal_stop_codon_make_pseudo: Mark the feature pseudo when the
            translation contains internal stop codons
        delete_trailing_bases_after_stop_codon: Drop a partial codon that
            follows the final stop codon
    """

    degenerate_start_codon: bool = False
    no_start_codon_make_5_partial: bool = False
    codon_start_not_one_make_5_partial: bool = False
    no_stop_codon_make_3_partial: bool = False
    valid_stop_codon_remove_3_partial: bool = False
    non_multiple_of_three_make_3_and_5_partial: bool = False
    internal_stop_codon_make_pseudo: bool = False
    delete_trailing_bases_after_stop_codon: bool = False

    @classmethod
    def all(cls) -> FixOptions:
        return cls(**{f.name: True for f in fields(cls)})

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def enabled(self) -> list[str]:
        return [name for name in self.names() if getattr(self, name)]


def _int_attribute(feature: FeatureLike, name: str, default: int) -> int:
    value = feature.get_attribute(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise TranslationError(f"Invalid {name}: {value}") from None


class Translator:
    """Translates the coding sequence of one feature.

    The translator is configured from the feature attributes (transl_table,
    codon_start, pseudo/pseudogene, partial, exception, transl_except and
    codon). Every flag is a plain attribute and may be changed before calling
    ``translate``.

    Example:
        >>> translator = Translator(table_id=11)
        >>> translator.translate("ATGAAATAG").conceptual_translation
        'MK'
    """

    def __init__(
        self,
        feature: FeatureLike | None = None,
        *,
        table_id: int | None = None,
        fixes: FixOptions | None = None,
    ):
        """Create a translator.

        Args:
            feature: Feature whose attributes configure the translation
            table_id: Genetic code; overrides the feature's transl_table
            fixes: Automatic corrections to apply (none by default)

        Raises:
            TranslationError: if an attribute is malformed or the table is unknown
        """
        self.feature = feature
        self.fixes = fixes if fixes is not None else FixOptions()
        self.applied_fixes: set[str] = set()

        self.codon_start = 1
        self.five_prime_partial = False
        self.three_prime_partial = False
        self.non_translating = False
        self.peptide_feature = False
        self.exception = False
        self._position_exceptions: dict[int, PositionException] = {}

        if feature is not None and table_id is None:
            table_id = _int_attribute(feature, TRANSL_TABLE, DEFAULT_TABLE_ID)
        self._codon_translator = CodonTranslator(
            table_id if table_id is not None else DEFAULT_TABLE_ID
        )

        if feature is not None:
            self._configure(feature)

    def _configure(self, feature: FeatureLike) -> None:
        self.codon_start = _int_attribute(feature, CODON_START, 1)
        self.five_prime_partial, self.three_prime_partial = partial_flags(feature)
        self.non_translating = feature.has_attribute(PSEUDO) or feature.has_attribute(PSEUDOGENE)
        self.exception = feature.has_attribute(EXCEPTION)
        self.peptide_feature = str(getattr(feature, "type", "")).lower() in PEPTIDE_TYPES

        for value in feature.get_attribute_list(TRANSL_EXCEPT) or []:
            override = PositionException.parse(value)
            self.add_position_exception(override.start, override.end, override.amino_acid)
        for value in feature.get_attribute_list(CODON) or []:
            override = CodonException.parse(value)
            self.add_codon_exception(override.triplet, override.amino_acid)

    @property
    def codon_translator(self) -> CodonTranslator:
        return self._codon_translator

    @property
    def position_exceptions(self) -> list[PositionException]:
        return [self._position_exceptions[start] for start in sorted(self._position_exceptions)]

    def enable_all_fixes(self) -> None:
        self.fixes = FixOptions.all()

    def add_position_exception(self, start: int, end: int | None, amino_acid: str) -> None:
        """Override the amino acid of the codon starting at a position.

        Args:
            start: 1-based position of the first base
            end: 1-based position of the last base (defaults to start)
            amino_acid: Single-letter amino acid code
        """
        end = start if end is None else end
        logger.debug("Position exception %d..%d -> %s", start, end, amino_acid)
        self._position_exceptions[start] = PositionException(start, end, amino_acid)

    def add_codon_exception(self, codon: str, amino_acid: str) -> None:
        """Override the amino acid of every occurrence of a codon."""
        self._codon_translator.add_codon_exception(codon, amino_acid)

    def _record_fix(self, name: str) -> None:
        logger.info("Applied fix %s", name)
        self.applied_fixes.add(name)

    def translate(self, sequence: bytes | bytearray | str | None) -> TranslationResult:
        """Translate a coding sequence.

        Problems with the sequence are reported in ``TranslationResult.errors``;
        this method does not raise for them.

        Args:
            sequence: Nucleotides, upper or lower case, IUPAC codes allowed

        Returns:
            TranslationResult with codons, translations, errors and fix flags
        """
        result = TranslationResult()

        if self.non_translating:
            return result

        if sequence is None:
            result.add_error("Sequence is null")
            return result

        if isinstance(sequence, (bytes, bytearray)):
            sequence = sequence.decode("ascii", errors="replace")
        sequence = sequence.upper()

        if any(base not in IUPAC_BASES for base in sequence):
            result.add_error("Invalid base character in sequence")
            return result

        if not self._validate_codon_start(len(sequence), result):
            return result

        sequence = self._apply_position_exceptions(sequence, result)
        if sequence is None:
            return result

        if not self._validate_length(len(sequence), result):
            return result

        self._translate_codons(sequence, result)

        if not result.codons:
            if not self.exception:
                result.add_error("No translation produced")
            return result

        self._validate_translation(result)
        self._update_feature(result)

        logger.debug(
            "Translated %d codons: %s (%d errors)",
            len(result.codons),
            result.translation,
            len(result.errors),
        )
        return result

    def _validate_codon_start(self, length: int, result: TranslationResult) -> bool:
        if self.codon_start not in (1, 2, 3):
            result.add_error(f"Invalid codon start: {self.codon_start}. Must be 1, 2, or 3")
            return False

        if self.codon_start != 1 and not self.five_prime_partial:
            if self.fixes.codon_start_not_one_make_5_partial:
                self.five_prime_partial = True
                result.fixed_five_prime_partial = True
                self._record_fix("codon_start_not_one_make_5_partial")
            else:
                result.add_error(
                    f"Codon start is {self.codon_start} but feature is not 5' partial"
                )

        if length < 3 and self.codon_start != 1:
            result.add_error("Sequence too short for translation with current codon start")
            return False
        return True

    def _apply_position_exceptions(self, sequence: str, result: TranslationResult) -> str | None:
        """Validate position exceptions and pad a partial stop codon at the 3' end.

        Returns:
            The sequence, padded with N if needed, or None if an exception is invalid
        """
        length = len(sequence)
        for override in self.position_exceptions:
            error = self._position_exception_error(override, length)
            if error is not None:
                result.add_error(error)
                return None

            missing = 2 - (override.end - override.start)
            if override.amino_acid == STOP and missing > 0 and override.end == len(sequence):
                sequence += "N" * missing
        return sequence

    def _position_exception_error(self, override: PositionException, length: int) -> str | None:
        start, end = override.start, override.end
        if start < self.codon_start:
            return "Translation exception outside frame on the 5' end"
        if start > length or end > length:
            return "Translation exception outside frame on the 3' end"
        if end < start:
            return "Invalid translation exception range"

        span = end - start
        partial_stop = override.amino_acid == STOP and end == length and span in (0, 1)
        if span != 2 and not partial_stop:
            return "Translation exception must span 3 bases or be a partial stop codon at 3' end"

        frame = start % 3 or 3
        if frame != self.codon_start:
            return (
                f"Translation exception at position {start} is in frame {frame} "
                f"but codon start is {self.codon_start}"
            )
        return None

    def _validate_length(self, length: int, result: TranslationResult) -> bool:
        if length < 3:
            result.translation_base_count = length
            if not self.five_prime_partial and not self.three_prime_partial:
                result.add_error("CDS feature with less than 3 bases must be 3' or 5' partial")
                return False
            return True

        coding_length = length - self.codon_start + 1
        if coding_length % 3 == 0:
            return True

        result.translation_length = coding_length
        if self.three_prime_partial or self.peptide_feature or self.exception:
            return True

        if self.fixes.non_multiple_of_three_make_3_and_5_partial:
            self.five_prime_partial = True
            self.three_prime_partial = True
            result.fixed_five_prime_partial = True
            result.fixed_three_prime_partial = True
            self._record_fix("non_multiple_of_three_make_3_and_5_partial")
        else:
            result.add_error(
                "CDS feature length must be a multiple of 3. Consider 5' or 3' partial location"
            )
        return True

    def _translate_codons(self, sequence: str, result: TranslationResult) -> None:
        codons: list[Codon] = []
        i = self.codon_start - 1
        while i + 3 <= len(sequence):
            codons.append(self._translate_codon_at(sequence[i : i + 3], i, result))
            i += 3

        unknown = sum(1 for codon in codons if codon.amino_acid == UNKNOWN)
        if unknown > len(codons) // 2:
            result.add_error("Translation has more than 50% unknown amino acids (X)")

        trailing = sequence[i:]
        if (
            trailing
            and codons
            and codons[-1].amino_acid == STOP
            and self.fixes.delete_trailing_bases_after_stop_codon
        ):
            trailing = ""
            self._record_fix("delete_trailing_bases_after_stop_codon")

        if trailing:
            # Pad the partial codon and keep it if it still resolves
            codon = self._translate_codon_at((trailing + "NN")[:3], i, result)
            if codon.amino_acid != UNKNOWN:
                codons.append(codon)
                trailing = ""

        result.codons = codons
        result.trailing_bases = trailing

    def _translate_codon_at(self, bases: str, index: int, result: TranslationResult) -> Codon:
        position = index + 1
        override = self._position_exceptions.get(position)
        if override is not None:
            return Codon(bases, position, override.amino_acid, is_exception=True)

        if index != self.codon_start - 1 or self.five_prime_partial:
            return Codon(bases, position, self._codon_translator.translate_other_codon(bases))

        amino_acid = self._codon_translator.translate_start_codon(bases)
        if (
            self.fixes.degenerate_start_codon
            and amino_acid != START
            and self._codon_translator.is_ambiguous(bases)
            and self._codon_translator.is_degenerate_start_codon(bases)
        ):
            result.fixed_degenerate_start_codon = True
            self._record_fix("degenerate_start_codon")
            return Codon(bases, position, START, is_exception=True)
        return Codon(bases, position, amino_acid)

    def _validate_translation(self, result: TranslationResult) -> None:
        codons = result.codons
        trailing_stops = 0
        while trailing_stops < len(codons) and codons[-1 - trailing_stops].amino_acid == STOP:
            trailing_stops += 1

        conceptual_codons = len(codons) - trailing_stops
        result.conceptual_translation_codons = conceptual_codons

        if conceptual_codons == 0:
            self._validate_stop_codon_only(result)
            self._validate_trailing_stop_codons(trailing_stops, result)
            return

        internal_stops = sum(
            1 for codon in codons[:conceptual_codons] if codon.amino_acid == STOP
        )
        # Every check runs so that all errors are reported
        valid = self._validate_internal_stop_codons(internal_stops, result)
        valid = self._validate_start_codon(result) and valid
        valid = self._validate_trailing_stop_codons(trailing_stops, result) and valid
        if not valid:
            result.conceptual_translation_codons = 0

    def _validate_stop_codon_only(self, result: TranslationResult) -> None:
        if self.exception or self.non_translating:
            return
        if not (len(result.codons) == 1 and not result.trailing_bases and self.five_prime_partial):
            result.add_error(
                "CDS feature can have a single stop codon only if it has 3 bases and is 5' partial"
            )

    def _validate_trailing_stop_codons(self, trailing_stops: int, result: TranslationResult) -> bool:
        """Check the 3' end of the translation.

        Returns:
            False if the feature turned out to be non-translating
        """
        if self.exception:
            return True

        if trailing_stops > 1:
            if self.non_translating:
                return False
            result.add_error("More than one stop codon at the 3' end")

        if trailing_stops == 1 and self.three_prime_partial:
            if self.non_translating:
                return False
            if self.fixes.valid_stop_codon_remove_3_partial:
                self.three_prime_partial = False
                result.fixed_three_prime_partial = True
                self._record_fix("valid_stop_codon_remove_3_partial")
            else:
                result.add_error(
                    "Stop codon found at 3' partial end. Consider removing 3' partial location"
                )

        if trailing_stops == 0 and not self.three_prime_partial:
            if self.non_translating:
                return False
            if not self.peptide_feature:
                if self.fixes.no_stop_codon_make_3_partial:
                    self.three_prime_partial = True
                    result.fixed_three_prime_partial = True
                    self._record_fix("no_stop_codon_make_3_partial")
                else:
                    result.add_error("No stop codon at the 3' end")

        if trailing_stops == 1 and result.trailing_bases:
            if self.non_translating:
                return False
            result.add_error("A partial codon appears after the stop codon")

        return True

    def _validate_internal_stop_codons(self, internal_stops: int, result: TranslationResult) -> bool:
        if internal_stops == 0:
            return True
        if self.exception or self.non_translating:
            return False
        if self.fixes.internal_stop_codon_make_pseudo:
            self.non_translating = True
            result.fixed_pseudo = True
            self._record_fix("internal_stop_codon_make_pseudo")
            return False
        result.add_error("The protein translation contains internal stop codons")
        return True

    def _validate_start_codon(self, result: TranslationResult) -> bool:
        if self.five_prime_partial or self.exception or self.peptide_feature:
            return True
        if result.codons[0].amino_acid == START:
            return True
        if self.non_translating:
            return False
        if self.fixes.no_start_codon_make_5_partial:
            self.five_prime_partial = True
            result.fixed_five_prime_partial = True
            self._record_fix("no_start_codon_make_5_partial")
        else:
            result.add_error("The protein translation does not start with methionine")
        return True

    def _update_feature(self, result: TranslationResult) -> None:
        """Write fixes back to the bound feature."""
        feature = self.feature
        if feature is None:
            return
        if result.fixed_five_prime_partial and hasattr(feature, "set_five_prime_partial"):
            feature.set_five_prime_partial(self.five_prime_partial)
        if result.fixed_three_prime_partial and hasattr(feature, "set_three_prime_partial"):
            feature.set_three_prime_partial(self.three_prime_partial)
        if result.fixed_pseudo and hasattr(feature, "add_attribute"):
            feature.add_attribute(PSEUDO, "true")
            feature.remove_attribute(TRANSLATION)

    def equals_translation(self, expected: str, actual: str) -> TranslationComparison:
        """Compare an expected translation with a computed one.

        An X in the expected translation opposite any other residue, or beyond the
        end of the computed one, is counted in ``x_mismatch_count``. Any other
        difference is a mismatch.

        Args:
            expected: Translation given in the annotation
            actual: Conceptual translation produced by ``translate``

        Returns:
            TranslationComparison; ``matches`` is True only for identical strings
        """
        if len(expected) < len(actual):
            return TranslationComparison(matches=False, x_mismatch_count=0)

        x_mismatches = 0
        for i, residue in enumerate(expected):
            if i < len(actual) and residue == actual[i]:
                continue
            if residue != UNKNOWN:
                return TranslationComparison(matches=False, x_mismatch_count=0)
            x_mismatches += 1

        return TranslationComparison(matches=x_mismatches == 0, x_mismatch_count=x_mismatches)
