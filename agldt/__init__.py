"""
agldt - reader and lexical tools for the Ancient Greek and Latin Dependency Treebank.
"""

__version__ = "0.1.0"

from .doc import Body, Document, Sentence, Token, Treebank
from .errors import AggregationPreconditionError, AgldtError, DefinitionFault, StructuralError
from .features import AGLDT_TAGSET, FeatureType, PosFeature, Tagset, define_feature
from .lexicon import ConcordanceEntry, build_concordance, build_lexicon, concordance_entries, lemmata, merge
from .normalization import normalize
from .treebank import load_treebank, parse_treebank, read_treebank

__all__ = [
    "AGLDT_TAGSET",
    "AggregationPreconditionError",
    "AgldtError",
    "Body",
    "ConcordanceEntry",
    "DefinitionFault",
    "Document",
    "FeatureType",
    "PosFeature",
    "Sentence",
    "StructuralError",
    "Tagset",
    "Token",
    "Treebank",
    "build_concordance",
    "build_lexicon",
    "concordance_entries",
    "define_feature",
    "lemmata",
    "load_treebank",
    "merge",
    "normalize",
    "parse_treebank",
    "read_treebank",
]
