from agldt.normalization import (
    REWRITES,
    fill_empty_heads,
    neutralize_namespace_colon,
    normalize,
    reposition_addresses,
    strip_provenance,
    unwrap_person_names,
)

BARE_PERSNAME = """<respStmt>
<persName>Bridget Almas</persName>
<resp>responsible for the annotation environment</resp>
<address>Tufts University</address>
</respStmt>"""

NESTED_PERSNAME = """<respStmt>
<persName>
<short>Vanessa Gorman</short>
<name>Vanessa Gorman</name>
<address>vbgorman@gmail.com</address>
</persName>
<resp>annotator of the text</resp>
</respStmt>"""


def test_rewrite_order():
    assert [rewrite.__name__ for rewrite in REWRITES] == [
        "neutralize_namespace_colon",
        "unwrap_person_names",
        "reposition_addresses",
        "strip_provenance",
        "fill_empty_heads",
    ]


def test_namespace_colon():
    assert neutralize_namespace_colon('<treebank xml:lang="grc">') == '<treebank xml_lang="grc">'
    assert neutralize_namespace_colon('xmlns:saxon="x"') == 'xmlns:saxon="x"'


def test_bare_persname_is_wrapped():
    assert unwrap_person_names("<persName>Bridget Almas</persName>\n<resp>") == (
        "<persName><name>Bridget Almas</name></persName><resp>"
    )


def test_bare_persname_with_crlf_is_wrapped():
    assert unwrap_person_names("<persName>Bridget Almas</persName>\r\n<resp>") == (
        "<persName><name>Bridget Almas</name></persName><resp>"
    )


def test_crlf_matches_lf(sample_raw):
    crlf = sample_raw.replace("\n", "\r\n")
    assert normalize(crlf).replace("\r\n", "\n") == normalize(sample_raw)


def test_nested_persname_is_untouched():
    assert unwrap_person_names(NESTED_PERSNAME) == NESTED_PERSNAME
    assert normalize(NESTED_PERSNAME) == NESTED_PERSNAME


def test_bare_persname_with_address():
    assert normalize(BARE_PERSNAME) == (
        "<respStmt>\n"
        "<persName><name>Bridget Almas</name><address>Tufts University</address></persName>"
        "<resp>responsible for the annotation environment</resp>\n"
        "</respStmt>"
    )


def test_address_after_persname_moves_inside():
    src = "<persName><name>A</name></persName>\n  <address>B</address>"
    assert reposition_addresses(src) == "<persName><name>A</name><address>B</address></persName>"


def test_provenance_stripped_inside_sentences_only():
    src = (
        '<primary>kept</primary><sentence id="1">\n'
        "  <primary>vgorman1</primary>\n"
        '  <secondary name="x"/>\n'
        "  <annotator>\n    <short>s</short>\n  </annotator>\n"
        '  <word id="1" form="a" relation="PRED" head="0"/>\n'
        "</sentence>"
    )
    result = strip_provenance(src)
    assert result.startswith("<primary>kept</primary>")
    assert "vgorman1" not in result
    assert "<secondary" not in result
    assert "<annotator" not in result
    assert '<word id="1"' in result


def test_self_closing_sentence_left_alone():
    src = '<sentence id="3" subdoc="x"/><primary>kept</primary>'
    assert strip_provenance(src) == src


def test_empty_head_becomes_root_sentinel():
    assert fill_empty_heads('<word id="3" head=""/>') == '<word id="3" head="0"/>'
    assert fill_empty_heads('<word id="3" head="2"/>') == '<word id="3" head="2"/>'
    assert fill_empty_heads('<word id="3" overhead=""/>') == '<word id="3" overhead=""/>'


def test_normalize_is_idempotent(sample_raw):
    once = normalize(sample_raw)
    assert normalize(once) == once
    assert normalize(normalize(BARE_PERSNAME)) == normalize(BARE_PERSNAME)


def test_normalize_sample(sample_raw):
    result = normalize(sample_raw)
    assert 'xml_lang="grc"' in result
    assert "<persName><name>Bridget Almas</name><address>Tufts University</address></persName>" in result
    assert 'head=""' not in result
    assert "<primary>" not in result
    assert "<annotator>" not in result
