import json

import pytest

from agldt.check import check_unicode
from agldt.treebank import load_treebank

LIGATURE = "\ufb01le"
OXIA_ALPHA = "\u1f71"


@pytest.fixture
def mixed_treebank(make_treebank_xml):
    forms = ["logos", "logos", LIGATURE, "logos", OXIA_ALPHA, LIGATURE]
    words = "".join(
        f'<word id="{i}" form="{form}" lemma="x" postag="n-s---mn-" relation="X" head="0"/>'
        for i, form in enumerate(forms, start=1)
    )
    words += '<word id="7" form="," lemma="punc1" postag="u--------" relation="AuxX" head="0"/>'
    return load_treebank(make_treebank_xml(f'<sentence id="1" document_id="d" subdoc="s">{words}</sentence>'))


def test_counts_collapse_consecutive_duplicates(mixed_treebank):
    report = check_unicode(mixed_treebank)
    assert report.normalized == 2
    assert report.not_normalized == 3
    assert report.total == 5
    assert report.offending == [LIGATURE, OXIA_ALPHA]
    assert not report.ok


def test_other_normalization_form(mixed_treebank):
    report = check_unicode(mixed_treebank, form="nfc")
    assert report.form == "NFC"
    assert report.not_normalized == 1
    assert report.offending == [OXIA_ALPHA]


def test_render(mixed_treebank):
    text = check_unicode(mixed_treebank).render()
    lines = text.splitlines()
    assert lines[0] == str(mixed_treebank)
    assert lines[1] == "NFKC frequency (tokens):"
    assert lines.index('"False",3') < lines.index('"True",2')
    assert lines[-1] == 'Non-NFKC unique tokens: ["\ufb01le", "\u1f71"]'


def test_render_quotes_forms(make_treebank_xml):
    tb = load_treebank(
        make_treebank_xml(
            '<sentence id="1" document_id="d" subdoc="s">'
            '<word id="1" form="a, \ufb01" lemma="x" postag="n-s---mn-" relation="X" head="0"/>'
            "</sentence>"
        )
    )
    last = check_unicode(tb).render().splitlines()[-1]
    label, listed = last.split(": ", 1)
    assert label == "Non-NFKC unique tokens"
    assert json.loads(listed) == ["a, \ufb01"]


def test_clean_sample(sample_treebank):
    report = check_unicode(sample_treebank)
    assert report.total == 8


def test_unknown_form(sample_treebank):
    with pytest.raises(ValueError):
        check_unicode(sample_treebank, form="NFX")
