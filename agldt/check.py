"""Unicode normalization audit of treebank forms."""

from __future__ import annotations

import json
import logging
import unicodedata
from dataclasses import dataclass, field
from itertools import groupby
from typing import List

from .doc import Treebank
from .lexicon import forms

logger = logging.getLogger(__name__)

UNICODE_FORMS = ("NFC", "NFD", "NFKC", "NFKD")


@dataclass
class UnicodeReport:
    """Result of :func:`check_unicode` for one treebank."""

    description: str
    form: str = "NFKC"
    normalized: int = 0
    not_normalized: int = 0
    offending: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.normalized + self.not_normalized

    @property
    def ok(self) -> bool:
        return self.not_normalized == 0

    def render(self) -> str:
        counts = sorted(
            [("True", self.normalized), ("False", self.not_normalized)],
            key=lambda item: item[1],
            reverse=True,
        )
        lines = [self.description, f"{self.form} frequency (tokens):"]
        lines.extend(f'"{label}",{count}' for label, count in counts if count)
        lines.append("")
        lines.append(f"Non-{self.form} unique tokens: {json.dumps(self.offending, ensure_ascii=False)}")
        return "\n".join(lines) + "\n"


def check_unicode(treebank: Treebank, form: str = "NFKC") -> UnicodeReport:
    """
    Count the word forms of ``treebank`` that are (not) in normalization ``form``.

    Runs of identical consecutive forms count once. Forms failing the check
    are collected once each, in order of first occurrence.

    Raises:
        ValueError: if ``form`` is not a Unicode normalization form.
    """
    form = form.upper()
    if form not in UNICODE_FORMS:
        raise ValueError(f"Unknown Unicode normalization form '{form}'. Choose from: {', '.join(UNICODE_FORMS)}")

    report = UnicodeReport(description=str(treebank), form=form)
    offending = {}
    for token_form, _ in groupby(forms(treebank)):
        if unicodedata.is_normalized(form, token_form):
            report.normalized += 1
        else:
            report.not_normalized += 1
            offending.setdefault(token_form, None)
    report.offending = list(offending)
    logger.info(
        "%s: %d forms in %s, %d not in %s", treebank.cts, report.normalized, form, report.not_normalized, form
    )
    return report
