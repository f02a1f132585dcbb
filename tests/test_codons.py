"""Tests for codon expansion, consensus and CodonTranslator."""

import pytest

from cdstranslator.core.codons import (
    Codon,
    CodonTranslator,
    consensus,
    expand_codon,
    is_ambiguous,
)
from cdstranslator.errors import TranslationError, UnknownTableError


class TestExpandCodon:
    """Tests for IUPAC expansion."""

    def test_unambiguous(self) -> None:
        """Test that a plain codon expands to itself."""
        assert expand_codon("ATG") == ["ATG"]
        assert expand_codon("atg") == ["ATG"]

    def test_two_fold(self) -> None:
        """Test two-fold degenerate positions."""
        assert sorted(expand_codon("TTY")) == ["TTC", "TTT"]
        assert sorted(expand_codon("RTG")) == ["ATG", "GTG"]

    def test_cartesian_product(self) -> None:
        """Test that every position is expanded."""
        assert sorted(expand_codon("RAR")) == ["AAA", "AAG", "GAA", "GAG"]
        assert len(expand_codon("NNN")) == 64
        assert len(set(expand_codon("NNN"))) == 64
        assert len(expand_codon("BDH")) == 27

    def test_invalid(self) -> None:
        """Test that non-IUPAC characters and wrong lengths give no expansion."""
        assert expand_codon("AZG") == []
        assert expand_codon("---") == []
        assert expand_codon("AT") == []
        assert expand_codon("ATGA") == []

    def test_is_ambiguous(self) -> None:
        """Test ambiguity detection."""
        assert not is_ambiguous("ATG")
        assert not is_ambiguous("atg")
        assert is_ambiguous("ATN")
        assert is_ambiguous("RTG")


class TestConsensus:
    """Tests for amino acid consensus."""

    def test_agreement(self) -> None:
        """Test that identical residues resolve to themselves."""
        assert consensus(["F", "F"]) == "F"

    def test_disagreement(self) -> None:
        """Test that unrelated residues resolve to X."""
        assert consensus(["K", "E"]) == "X"

    @pytest.mark.parametrize(
        "amino_acids,expected",
        [
            (["D", "N"], "B"),
            (["N", "D", "D"], "B"),
            (["E", "Q"], "Z"),
            (["I", "L"], "J"),
            (["I", "L", "M"], "X"),
            (["D", "E"], "X"),
        ],
    )
    def test_ambiguous_groups(self, amino_acids: list[str], expected: str) -> None:
        """Test resolution to B, Z and J."""
        assert consensus(amino_acids) == expected

    def test_empty(self) -> None:
        """Test that no residues resolve to X."""
        assert consensus([]) == "X"


class TestCodon:
    """Tests for the Codon value type."""

    def test_fields(self) -> None:
        """Test Codon fields and defaults."""
        codon = Codon("ATG", 1, "M")

        assert codon.bases == "ATG"
        assert codon.position == 1
        assert codon.amino_acid == "M"
        assert codon.is_exception is False

    def test_immutable(self) -> None:
        """Test that Codon is frozen."""
        codon = Codon("ATG", 1, "M")

        with pytest.raises(AttributeError):
            codon.amino_acid = "W"  # type: ignore[misc]


class TestCodonTranslator:
    """Tests for CodonTranslator."""

    def test_unknown_table(self) -> None:
        """Test that an unknown table id raises TranslationError."""
        with pytest.raises(TranslationError):
            CodonTranslator(7)
        with pytest.raises(UnknownTableError):
            CodonTranslator(1000)

    def test_table_property(self) -> None:
        """Test the bound table."""
        assert CodonTranslator(2).table.id == 2

    def test_start_and_other(self) -> None:
        """Test start versus other codon lookups."""
        translator = CodonTranslator(11)

        assert translator.translate_start_codon("GTG") == "M"
        assert translator.translate_other_codon("GTG") == "V"
        assert translator.translate_start_codon("ATG") == "M"
        assert translator.translate_other_codon("TAG") == "*"

    def test_lowercase(self) -> None:
        """Test that lookups are case-insensitive."""
        assert CodonTranslator(1).translate_other_codon("tgg") == "W"

    def test_vertebrate_mitochondrial(self) -> None:
        """Test that TGA is tryptophan in table 2."""
        assert CodonTranslator(2).translate_other_codon("TGA") == "W"
        assert CodonTranslator(1).translate_other_codon("TGA") == "*"

    def test_consensus(self) -> None:
        """Test translation of ambiguous codons."""
        translator = CodonTranslator(1)

        assert translator.translate_other_codon("TTY") == "F"  # TTC and TTT
        assert translator.translate_other_codon("GCN") == "A"  # Fourfold degenerate site
        assert translator.translate_other_codon("RAY") == "B"  # AAC/AAT=N, GAC/GAT=D
        assert translator.translate_other_codon("SAR") == "Z"  # CAA/CAG=Q, GAA/GAG=E
        assert translator.translate_other_codon("MTT") == "J"  # ATT=I, CTT=L
        assert translator.translate_other_codon("RAR") == "X"  # AAA/AAG=K, GAA/GAG=E
        assert translator.translate_other_codon("NNN") == "X"

    def test_invalid_characters_translate_to_x(self) -> None:
        """Test that non-IUPAC characters do not raise."""
        assert CodonTranslator(1).translate_other_codon("A-G") == "X"

    def test_is_ambiguous(self) -> None:
        """Test ambiguity detection through the translator."""
        translator = CodonTranslator(1)

        assert translator.is_ambiguous("NTG")
        assert not translator.is_ambiguous("ATG")

    def test_degenerate_start_codon(self) -> None:
        """Test codons that could be start codons."""
        translator = CodonTranslator(1)

        assert translator.translate_start_codon("RTG") == "X"  # ATG=M, GTG=V
        assert translator.is_degenerate_start_codon("RTG")
        assert translator.is_degenerate_start_codon("ATG")
        assert not translator.is_degenerate_start_codon("GTG")
        assert not translator.is_degenerate_start_codon("AAR")

    def test_degenerate_stop_codon(self) -> None:
        """Test codons that could be stop codons."""
        translator = CodonTranslator(1)

        assert translator.is_degenerate_stop_codon("TAN")
        assert translator.is_degenerate_stop_codon("TRA")  # TAA or TGA
        assert translator.is_degenerate_stop_codon("TAA")
        assert not translator.is_degenerate_stop_codon("TGG")
        assert not CodonTranslator(2).is_degenerate_stop_codon("TGR")  # TGA=W, TGG=W

    def test_codon_exception(self) -> None:
        """Test that codon exceptions override the table."""
        translator = CodonTranslator(1)
        translator.add_codon_exception("tga", "W")

        assert translator.translate_other_codon("TGA") == "W"
        assert translator.translate_start_codon("TGA") == "W"
        assert translator.translate_other_codon("TAA") == "*"
        assert translator.codon_exceptions == {"TGA": "W"}

    def test_codon_exception_in_consensus(self) -> None:
        """Test that codon exceptions apply to each expansion."""
        translator = CodonTranslator(1)
        translator.add_codon_exception("TGA", "W")

        assert translator.translate_other_codon("TGR") == "W"  # TGA and TGG
        assert not translator.is_degenerate_stop_codon("TGA")

    def test_codon_exception_per_instance(self) -> None:
        """Test that exceptions are not shared between translators."""
        first = CodonTranslator(1)
        first.add_codon_exception("TGA", "W")

        assert CodonTranslator(1).translate_other_codon("TGA") == "*"
