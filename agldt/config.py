"""
Configuration for agldt.

Settings are read from, in order of precedence:
  - Environment variables (AGLDT_PATH for the treebank directory)
  - Config file: ~/.agldt/config.json
  - Built-in defaults

The config directory itself can be moved with AGLDT_CONFIG_DIR, or follows
XDG_CONFIG_HOME when that is set.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

from .check import UNICODE_FORMS
from .collation import COMPARATORS

logger = logging.getLogger(__name__)

TREEBANK_DIR_ENV = "AGLDT_PATH"
CONFIG_DIR_ENV = "AGLDT_CONFIG_DIR"


def get_config_dir(create: bool = False) -> Path:
    """
    Get the agldt configuration directory.

    Checks in order:
    1. AGLDT_CONFIG_DIR environment variable
    2. XDG_CONFIG_HOME environment variable (``$XDG_CONFIG_HOME/agldt``)
    3. ~/.agldt/

    Args:
        create: If True, create the directory if it doesn't exist.
    """
    if CONFIG_DIR_ENV in os.environ:
        base = Path(os.environ[CONFIG_DIR_ENV])
    elif "XDG_CONFIG_HOME" in os.environ:
        base = Path(os.environ["XDG_CONFIG_HOME"]) / "agldt"
    else:
        base = Path.home() / ".agldt"
    if create:
        base.mkdir(parents=True, exist_ok=True)
    return base


def get_config_file(create_dir: bool = False) -> Path:
    return get_config_dir(create=create_dir) / "config.json"


def read_config() -> dict:
    """
    Read the agldt configuration file.

    Returns:
        Dictionary with configuration values (empty dict if the file doesn't
        exist or cannot be read)
    """
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", config_file)
        return {}
    return data


def write_config(config: dict) -> None:
    """Merge ``config`` into the config file, keeping other settings."""
    config_file = get_config_file(create_dir=True)
    existing_config = read_config()
    existing_config.update(config)
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(existing_config, f, indent=2, ensure_ascii=False)


# Settings with a closed set of values, and how each is canonicalized
_CHOICES = {
    "unicode_form": (UNICODE_FORMS, str.upper),
    "lexicon_collation": (tuple(COMPARATORS), str.lower),
}


def _checked_choice(key: str, value, default: str) -> str:
    choices, canonical = _CHOICES[key]
    if isinstance(value, str) and canonical(value) in choices:
        return canonical(value)
    logger.warning(
        "Ignoring invalid %s %r in config file (choose from: %s); using %s",
        key,
        value,
        ", ".join(choices),
        default,
    )
    return default


@dataclass
class AgldtConfig:
    treebank_dir: Optional[str] = None
    lexicon_collation: str = "primary"
    unicode_form: str = "NFKC"
    report_file: str = "report.txt"

    @classmethod
    def load(cls) -> "AgldtConfig":
        """Defaults, overridden by the config file, overridden by the environment."""
        config = cls()
        for key, value in read_config().items():
            if not hasattr(config, key):
                logger.debug("Ignoring unknown config key %s", key)
                continue
            if key in _CHOICES:
                value = _checked_choice(key, value, getattr(config, key))
            setattr(config, key, value)
        if os.environ.get(TREEBANK_DIR_ENV):
            config.treebank_dir = os.environ[TREEBANK_DIR_ENV]
        return config

    def to_dict(self) -> dict:
        return asdict(self)

    def resolve_treebank_path(self, name: Union[str, Path]) -> Path:
        """
        Locate a treebank file.

        ``name`` is looked up in :attr:`treebank_dir` first; when no such file
        exists there (or no directory is configured) it is used as given.
        """
        if self.treebank_dir:
            candidate = Path(self.treebank_dir).expanduser() / name
            if candidate.exists():
                logger.info("Using treebank %s", candidate)
                return candidate
        return Path(name)


def resolve_treebank_path(name: Union[str, Path]) -> Path:
    return AgldtConfig.load().resolve_treebank_path(name)
