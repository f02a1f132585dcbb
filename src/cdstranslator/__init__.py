"""cdstranslator: translation of coding sequences with NCBI genetic codes."""

__version__ = "0.1.0"

from cdstranslator.errors import TranslationError, TranslationException, UnknownTableError
from cdstranslator.core.tables import GeneticCodeTable, GeneticCodeTableRegistry
from cdstranslator.core.codons import Codon, CodonTranslator
from cdstranslator.core.qualifiers import CodonException, PositionException
from cdstranslator.core.feature import Feature
from cdstranslator.core.result import TranslationComparison, TranslationResult
from cdstranslator.core.translator import FixOptions, Translator

__all__ = [
    "TranslationError",
    "TranslationException",
    "UnknownTableError",
    "GeneticCodeTable",
    "GeneticCodeTableRegistry",
    "Codon",
    "CodonTranslator",
    "CodonException",
    "PositionException",
    "Feature",
    "TranslationComparison",
    "TranslationResult",
    "FixOptions",
    "Translator",
]
