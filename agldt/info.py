"""Human-readable summaries of parsed treebanks."""

from __future__ import annotations

from typing import List, Optional

import pycountry
from tabulate import tabulate

from .doc import Treebank


def language_name(code: Optional[str]) -> Optional[str]:
    """Resolve an ISO 639 code (``grc``, ``lat``) to a language name."""
    if not code:
        return None
    try:
        return pycountry.languages.lookup(code.strip()).name
    except LookupError:
        return None


def attribution_rows(treebank: Treebank) -> List[List[str]]:
    rows = []
    for stmt in treebank.header.attributions():
        person = stmt.pers_name
        rows.append(
            [
                person.name if person else "",
                (person.short or "") if person else "",
                (person.address or "") if person else "",
                stmt.resp,
            ]
        )
    return rows


def describe(treebank: Treebank) -> str:
    """Describe ``treebank``: identity, dates, counts and attributions."""
    header = treebank.header
    language = language_name(treebank.xml_lang)
    lines = [
        f"Treebank: {treebank.cts}",
        f"Language: {treebank.xml_lang}" + (f" ({language})" if language else ""),
        f"Version: {treebank.version}",
        f"Release date: {header.release_date}",
        f"Annotation date: {header.annotation_date}",
        f"Annotation scheme: {header.annotation_scheme}",
    ]
    title_stmt = header.file_desc.title_stmt
    if title_stmt is not None:
        if title_stmt.author:
            lines.append(f"Author: {title_stmt.author}")
        if title_stmt.title:
            lines.append(f"Title: {title_stmt.title}")
    lines.append(
        f"Sentences: {treebank.count_sentences()}, tokens: {treebank.count_tokens()}, "
        f"words: {treebank.count_words()}"
    )
    rows = attribution_rows(treebank)
    if rows:
        lines.append("")
        lines.append(tabulate(rows, headers=["Name", "Short", "Address", "Responsibility"]))
    return "\n".join(lines)
