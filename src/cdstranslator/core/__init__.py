"""Core translation engine."""

from cdstranslator.core.tables import GeneticCodeTable, GeneticCodeTableRegistry, get_table
from cdstranslator.core.codons import Codon, CodonTranslator, expand_codon
from cdstranslator.core.qualifiers import CodonException, PositionException
from cdstranslator.core.feature import Feature, FeatureLike
from cdstranslator.core.result import TranslationComparison, TranslationResult
from cdstranslator.core.translator import FixOptions, Translator

__all__ = [
    "GeneticCodeTable",
    "GeneticCodeTableRegistry",
    "get_table",
    "Codon",
    "CodonTranslator",
    "expand_codon",
    "CodonException",
    "PositionException",
    "Feature",
    "FeatureLike",
    "TranslationComparison",
    "TranslationResult",
    "FixOptions",
    "Translator",
]
