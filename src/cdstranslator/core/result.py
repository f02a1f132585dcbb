"""Translation result containers."""

from __future__ import annotations

from dataclasses import dataclass, field

from cdstranslator.core.codons import Codon


@dataclass
class TranslationResult:
    """Outcome of translating one sequence.

    Errors are collected here rather than raised, so many features can be
    translated and their problems reported together.
    """

    codons: list[Codon] = field(default_factory=list)
    trailing_bases: str = ""
    conceptual_translation_codons: int = 0  # Codons before any trailing stop
    translation_length: int = 0  # Bases after codon_start when not a multiple of 3
    translation_base_count: int = 0  # Bases in a sequence shorter than one codon
    fixed_five_prime_partial: bool = False
    fixed_three_prime_partial: bool = False
    fixed_pseudo: bool = False
    fixed_degenerate_start_codon: bool = False
    _errors: list[str] = field(default_factory=list, repr=False)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(self._errors)

    def add_error(self, error: str | None) -> None:
        """Record an error message; None and blank messages are ignored."""
        if error is not None and error.strip():
            self._errors.append(error)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def is_valid(self) -> bool:
        return not self._errors

    def error_messages(self) -> str:
        return "\n".join(self._errors)

    @property
    def translation(self) -> str:
        """Amino acids of every codon, stop codons included."""
        return "".join(codon.amino_acid for codon in self.codons)

    @property
    def conceptual_translation(self) -> str:
        """Amino acids without the trailing stop codons."""
        return "".join(
            codon.amino_acid for codon in self.codons[: self.conceptual_translation_codons]
        )

    @property
    def sequence(self) -> str:
        """Bases covered by the codons, followed by any trailing bases."""
        return "".join(codon.bases for codon in self.codons) + self.trailing_bases

    @property
    def fixes(self) -> list[str]:
        flags = {
            "five_prime_partial": self.fixed_five_prime_partial,
            "three_prime_partial": self.fixed_three_prime_partial,
            "pseudo": self.fixed_pseudo,
            "degenerate_start_codon": self.fixed_degenerate_start_codon,
        }
        return [name for name, fixed in flags.items() if fixed]

    def __str__(self) -> str:
        fixes = ", ".join(self.fixes) or "none"
        lines = [
            "Translation Result:",
            f"  Translation:            {self.translation}",
            f"  Conceptual translation: {self.conceptual_translation}",
            f"  Codons:                 {len(self.codons)}",
            f"  Trailing bases:         {self.trailing_bases or '-'}",
            f"  Fixes:                  {fixes}",
        ]
        if self._errors:
            lines.append("  Errors:")
            lines.extend(f"    - {error}" for error in self._errors)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert results to a dictionary."""
        return {
            "translation": self.translation,
            "conceptual_translation": self.conceptual_translation,
            "conceptual_translation_codons": self.conceptual_translation_codons,
            "codons": [
                {
                    "bases": codon.bases,
                    "position": codon.position,
                    "amino_acid": codon.amino_acid,
                    "is_exception": codon.is_exception,
                }
                for codon in self.codons
            ],
            "trailing_bases": self.trailing_bases,
            "translation_length": self.translation_length,
            "translation_base_count": self.translation_base_count,
            "fixed_five_prime_partial": self.fixed_five_prime_partial,
            "fixed_three_prime_partial": self.fixed_three_prime_partial,
            "fixed_pseudo": self.fixed_pseudo,
            "fixed_degenerate_start_codon": self.fixed_degenerate_start_codon,
            "fixes": self.fixes,
            "errors": list(self._errors),
            "valid": self.is_valid(),
        }


@dataclass(frozen=True)
class TranslationComparison:
    """Result of comparing an expected translation with a computed one."""

    matches: bool
    x_mismatch_count: int  # Positions where the expected translation has X

    def __str__(self) -> str:
        return (
            f"Translation Comparison:\n"
            f"  Matches:        {'yes' if self.matches else 'no'}\n"
            f"  X mismatches:   {self.x_mismatch_count}"
        )

    def to_dict(self) -> dict:
        """Convert results to a dictionary."""
        return {"matches": self.matches, "x_mismatch_count": self.x_mismatch_count}
