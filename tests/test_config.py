import json

from agldt.config import AgldtConfig, get_config_dir, get_config_file, read_config, resolve_treebank_path, write_config


def test_config_dir_from_env(isolated_config):
    assert get_config_dir() == isolated_config
    assert get_config_file() == isolated_config / "config.json"


def test_config_dir_from_xdg(tmp_path, monkeypatch):
    monkeypatch.delenv("AGLDT_CONFIG_DIR")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert get_config_dir() == tmp_path / "xdg" / "agldt"


def test_read_missing_config():
    assert read_config() == {}


def test_write_config_merges(isolated_config):
    write_config({"treebank_dir": "/data/agldt"})
    write_config({"lexicon_collation": "codepoint"})
    assert read_config() == {"treebank_dir": "/data/agldt", "lexicon_collation": "codepoint"}
    assert json.loads((isolated_config / "config.json").read_text(encoding="utf-8"))["treebank_dir"] == "/data/agldt"


def test_corrupt_config_is_ignored(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "config.json").write_text("{not json", encoding="utf-8")
    assert read_config() == {}
    (isolated_config / "config.json").write_text("[1, 2]", encoding="utf-8")
    assert read_config() == {}


def test_load_defaults():
    config = AgldtConfig.load()
    assert config == AgldtConfig()
    assert config.treebank_dir is None
    assert config.lexicon_collation == "primary"
    assert config.unicode_form == "NFKC"
    assert config.report_file == "report.txt"


def test_load_file_then_env(monkeypatch, tmp_path):
    write_config({"treebank_dir": "/from/file", "unicode_form": "NFC", "unknown_key": 1})
    config = AgldtConfig.load()
    assert config.treebank_dir == "/from/file"
    assert config.unicode_form == "NFC"
    assert not hasattr(config, "unknown_key")

    monkeypatch.setenv("AGLDT_PATH", str(tmp_path))
    assert AgldtConfig.load().treebank_dir == str(tmp_path)


def test_resolve_treebank_path(monkeypatch, tmp_path):
    (tmp_path / "found.xml").write_text("<treebank/>", encoding="utf-8")
    monkeypatch.setenv("AGLDT_PATH", str(tmp_path))
    assert resolve_treebank_path("found.xml") == tmp_path / "found.xml"
    assert resolve_treebank_path("elsewhere/other.xml").as_posix() == "elsewhere/other.xml"


def test_resolve_without_directory():
    assert AgldtConfig().resolve_treebank_path("plain.xml").name == "plain.xml"


def test_load_canonicalizes_choices():
    write_config({"unicode_form": "nfc", "lexicon_collation": "CodePoint"})
    config = AgldtConfig.load()
    assert config.unicode_form == "NFC"
    assert config.lexicon_collation == "codepoint"


def test_load_rejects_invalid_choices(caplog):
    write_config({"unicode_form": "NFX", "lexicon_collation": "icu", "report_file": "out.txt"})
    config = AgldtConfig.load()
    assert config.unicode_form == "NFKC"
    assert config.lexicon_collation == "primary"
    assert config.report_file == "out.txt"
    assert "unicode_form" in caplog.text
    assert "lexicon_collation" in caplog.text


def test_load_rejects_non_string_choice():
    write_config({"unicode_form": 3})
    assert AgldtConfig.load().unicode_form == "NFKC"
