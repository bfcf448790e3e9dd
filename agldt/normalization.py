"""
Markup normalization for AGLDT treebank files.

AGLDT files were produced over many years by different tools, and a few
structural positions are inconsistent across them. The main oddity is inside
``<respStmt>``, where ``<persName>`` holds either a bare string or a series of
tags::

    <respStmt>
      <persName>Bridget Almas</persName>
      <resp>responsible for the annotation environment and cts:urn technology</resp>
      <address>Tufts University</address>
    </respStmt>
    <respStmt>
      <persName>
        <short>Vanessa Gorman</short>
        <name>Vanessa Gorman</name>
        <address>vbgorman@gmail.com</address>
        <uri>http://data.perseus.org/sosol/users/Vanessa%20Gorman</uri>
      </persName>
      <resp>annotator of the text</resp>
    </respStmt>

The rewrites below turn the first form into the second, so the structural
parser only ever sees one shape. They are plain text transformations, applied
in the order of :data:`REWRITES`; later rewrites rely on earlier ones.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Tuple

logger = logging.getLogger(__name__)

Rewrite = Callable[[str], str]

_XML_COLON = re.compile(r"xml:")
# Bare-string bodies only; nested bodies start with "<" or a newline
_BARE_PERSNAME = re.compile(r"<persName>([^<\r\n]*)</persName>\r?\n")
_ADDRESS_AFTER_RESP = re.compile(r"(<resp>.*</resp>)\r?\n\s*(<address>.*</address>)")
_ADDRESS_AFTER_PERSNAME = re.compile(r"(</persName>)\s*(<address>.*</address>)")
_SENTENCE_BLOCK = re.compile(r"<sentence\b[^>]*(?<!/)>.*?</sentence>", re.DOTALL)
_PROVENANCE = re.compile(
    r"\s*(?:<(primary|secondary|annotator)\b[^>]*/>|<(primary|secondary|annotator)\b[^>]*>.*?</\2\s*>)",
    re.DOTALL,
)
_EMPTY_HEAD = re.compile(r"""\bhead=(["'])\1""")


def neutralize_namespace_colon(src: str) -> str:
    """Replace ``xml:`` attribute prefixes (``xml:lang``) with ``xml_``."""
    return _XML_COLON.sub("xml_", src)


def unwrap_person_names(src: str) -> str:
    """Wrap a bare ``<persName>`` string into a nested ``<name>`` element."""
    return _BARE_PERSNAME.sub(r"<persName><name>\1</name></persName>", src)


def reposition_addresses(src: str) -> str:
    """Move ``<address>`` siblings into the preceding ``<persName>``.

    First an address following a ``<resp>`` is moved before it, then an
    address directly following ``</persName>`` is moved inside it.
    """
    src = _ADDRESS_AFTER_RESP.sub(r"\2\1", src)
    return _ADDRESS_AFTER_PERSNAME.sub(r"\2\1", src)


def _strip_sentence_provenance(match: "re.Match[str]") -> str:
    return _PROVENANCE.sub("", match.group(0))


def strip_provenance(src: str) -> str:
    """Drop ``<primary>``, ``<secondary>`` and ``<annotator>`` from sentences."""
    return _SENTENCE_BLOCK.sub(_strip_sentence_provenance, src)


def fill_empty_heads(src: str) -> str:
    """Rewrite ``head=""`` to the ``head="0"`` sentinel."""
    return _EMPTY_HEAD.sub('head="0"', src)


REWRITES: Tuple[Rewrite, ...] = (
    neutralize_namespace_colon,
    unwrap_person_names,
    reposition_addresses,
    strip_provenance,
    fill_empty_heads,
)


def normalize(raw: str) -> str:
    """Apply every rewrite of :data:`REWRITES` to ``raw`` in order."""
    src = raw
    for rewrite in REWRITES:
        rewritten = rewrite(src)
        if rewritten != src:
            logger.debug("%s changed %d characters", rewrite.__name__, abs(len(rewritten) - len(src)))
        src = rewritten
    return src
