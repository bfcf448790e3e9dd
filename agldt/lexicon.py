"""
Lexical aggregation over parsed treebanks.

All functions accept anything with ``iter_tokens()``: a :class:`Treebank`,
its :class:`Body` or a single :class:`Sentence`. Only real words (tokens whose
tag is not punctuation) are considered.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .collation import Comparator, codepoint_compare
from .doc import Sentence, Token, TokenContainer
from .errors import AggregationPreconditionError

logger = logging.getLogger(__name__)


def _words(source: TokenContainer) -> Iterator[Token]:
    return (token for token in source.iter_tokens() if token.is_word())


def lemmata(source: TokenContainer) -> List[str]:
    """Lemmas of all real words that have one, in document order.

    Duplicates are kept; an unknown lemma is returned as ``""``.
    """
    return [token.lemma for token in _words(source) if token.lemma is not None]


def forms(source: TokenContainer) -> List[str]:
    """Surface forms of all real words, in document order."""
    return [token.form for token in _words(source)]


def lexicon_items(source: TokenContainer) -> List[Tuple[str, str]]:
    """``(lemma, form)`` pairs for real words that have a lemma."""
    return [(token.lemma, token.form) for token in _words(source) if token.lemma is not None]


def build_lexicon(source: TokenContainer, compare: Optional[Comparator] = None) -> List[str]:
    """
    Distinct lemmas of ``source`` in collation order.

    Args:
        source: Treebank, body or sentence
        compare: Three-way comparator (negative, zero, positive). Code point
            order when omitted.

    Returns:
        Sorted list of lemmas without duplicates (exact string equality).
    """
    unique = list(dict.fromkeys(lemmata(source)))
    entries = sorted(unique, key=cmp_to_key(compare or codepoint_compare))
    logger.debug("Built lexicon with %d entries", len(entries))
    return entries


def frequencies(items: Iterable[str]) -> List[Tuple[str, int]]:
    """Count ``items``; most frequent first, ties in first-occurrence order."""
    return Counter(items).most_common()


@dataclass(frozen=True)
class ConcordanceEntry:
    """A lemma and the ids of the sentences it occurs in."""

    lemma: str
    sentence_ids: FrozenSet[int]

    def __str__(self) -> str:
        ids = ", ".join(str(sid) for sid in sorted(self.sentence_ids))
        return f"{self.lemma}: {ids}"


def concordance_entries(sentence: Sentence) -> List[ConcordanceEntry]:
    """One entry per distinct lemma of the sentence's real words.

    An unknown lemma gets its own entry under ``""``, distinct from words
    that carry no lemma at all (those have no entry).
    """
    ids = frozenset({sentence.id})
    seen = dict.fromkeys(lemmata(sentence))
    return [ConcordanceEntry(lemma, ids) for lemma in seen]


def merge(a: ConcordanceEntry, b: ConcordanceEntry) -> ConcordanceEntry:
    """
    Combine two entries for the same lemma.

    Raises:
        AggregationPreconditionError: if the lemmas differ.
    """
    if a.lemma != b.lemma:
        raise AggregationPreconditionError(f"Cannot merge entries for different lemmas: '{a.lemma}' and '{b.lemma}'")
    return ConcordanceEntry(a.lemma, a.sentence_ids | b.sentence_ids)


def build_concordance(source: Iterable[Sentence]) -> List[ConcordanceEntry]:
    """Concordance of every sentence in ``source``, one entry per lemma.

    ``source`` is a treebank, a body, or any iterable of sentences. Entries
    are in order of the lemma's first occurrence.
    """
    sentences = source.sentences() if hasattr(source, "sentences") and callable(source.sentences) else source
    merged: Dict[str, ConcordanceEntry] = {}
    for sentence in sentences:
        for entry in concordance_entries(sentence):
            previous = merged.get(entry.lemma)
            merged[entry.lemma] = entry if previous is None else merge(previous, entry)
    return list(merged.values())
