from pathlib import Path

import pytest

from agldt.treebank import read_treebank

DATA_DIR = Path(__file__).parent / "data"

MINIMAL_HEADER = """<header>
<releaseDate>2020-01-01</releaseDate>
<annotationDate>2020-01-01</annotationDate>
<annotationScheme>aldt</annotationScheme>
<fileDesc><editionStmt></editionStmt></fileDesc>
</header>"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config directory and treebank path."""
    config_dir = tmp_path / "agldt-config"
    monkeypatch.setenv("AGLDT_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("AGLDT_PATH", raising=False)
    return config_dir


@pytest.fixture
def sample_path():
    return DATA_DIR / "sample.tb.xml"


@pytest.fixture
def sample_raw(sample_path):
    return sample_path.read_text(encoding="utf-8")


@pytest.fixture
def sample_treebank(sample_path):
    return read_treebank(sample_path)


@pytest.fixture
def make_treebank_xml():
    """Build a small treebank document around the given body markup."""

    def _make(body: str, header: str = MINIMAL_HEADER, root_attrs: str = 'xml:lang="grc" version="1.5" cts="urn:test"'):
        return f"<treebank {root_attrs}>{header}<body>{body}</body></treebank>"

    return _make
