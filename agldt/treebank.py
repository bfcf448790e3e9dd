"""Loading AGLDT treebank XML into the document model."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from .doc import Treebank, XmlField
from .errors import StructuralError
from .normalization import normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROOT_ELEMENT = "treebank"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_children(elem: ET.Element) -> List[ET.Element]:
    # Comments and processing instructions have non-string tags
    return [child for child in elem if isinstance(child.tag, str)]


def _find_child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for child in _element_children(elem):
        if _local_name(child.tag) == name:
            return child
    return None


def _convert(spec: XmlField, raw: str, path: str) -> Any:
    try:
        return spec.type(raw)
    except ValueError as exc:
        raise StructuralError(f"invalid value {raw!r} for '{spec.field}': {exc}", path=path) from exc


def _bind_field(elem: ET.Element, spec: XmlField, path: str) -> Any:
    if spec.kind == "attr":
        attr_path = f"{path}@{spec.xml_name}"
        raw = elem.get(spec.xml_name)
        if raw is None:
            if spec.optional:
                return None
            raise StructuralError(f"missing required attribute '{spec.xml_name}'", path=attr_path)
        return _convert(spec, raw, attr_path)

    if spec.kind in ("text", "child"):
        child_path = f"{path}/{spec.xml_name}"
        child = _find_child(elem, spec.xml_name)
        if child is None:
            if spec.optional:
                return None
            raise StructuralError(f"missing required element <{spec.xml_name}>", path=child_path)
        if spec.kind == "text":
            return _convert(spec, "".join(child.itertext()).strip(), child_path)
        return bind_element(child, spec.type, child_path)

    if spec.kind == "sequence":
        items = []
        for position, child in enumerate(_element_children(elem), start=1):
            child_path = f"{path}/{_local_name(child.tag)}[{position}]"
            if _local_name(child.tag) != spec.xml_name:
                raise StructuralError(
                    f"unexpected element <{_local_name(child.tag)}>, expected <{spec.xml_name}>",
                    path=child_path,
                )
            items.append(bind_element(child, spec.type, child_path))
        return tuple(items)

    raise ValueError(f"Unknown XML field kind '{spec.kind}'")


def bind_element(elem: ET.Element, cls: Type[T], path: Optional[str] = None) -> T:
    """
    Build an instance of ``cls`` from ``elem`` using the class' ``XML`` mapping.

    Args:
        elem: Element to read from
        cls: Model class declaring an ``XML`` tuple of :class:`XmlField`
        path: Location of ``elem`` used in error messages

    Returns:
        The bound instance.

    Raises:
        StructuralError: if a required field is missing, a value does not
            convert, or a sequence holds an element of the wrong kind.
    """
    path = path or _local_name(elem.tag)
    values: Dict[str, Any] = {}
    for spec in cls.XML:  # type: ignore[attr-defined]
        values[spec.field] = _bind_field(elem, spec, path)
    return cls(**values)


def parse_treebank(normalized: str) -> Treebank:
    """
    Parse normalized treebank markup.

    The whole document is bound before anything is returned; a malformed
    document never yields a partial treebank.

    Raises:
        StructuralError: if the text is not well-formed XML or does not have
            the treebank shape.
    """
    try:
        root = ET.fromstring(normalized)
    except ET.ParseError as exc:
        line, column = getattr(exc, "position", (0, 0))
        raise StructuralError(f"Invalid XML at line {line}, column {column}: {exc}") from exc

    root_name = _local_name(root.tag)
    if root_name != ROOT_ELEMENT:
        raise StructuralError(f"expected <{ROOT_ELEMENT}> root element, got <{root_name}>", path=root_name)

    treebank = bind_element(root, Treebank, ROOT_ELEMENT)
    logger.debug(
        "Parsed treebank %s: %d sentences, %d tokens",
        treebank.cts,
        treebank.count_sentences(),
        treebank.count_tokens(),
    )
    return treebank


def load_treebank(raw: str) -> Treebank:
    """Normalize raw treebank markup and parse it."""
    return parse_treebank(normalize(raw))


def read_treebank(path: Union[str, Path]) -> Treebank:
    """Read and parse a treebank file (UTF-8)."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        return load_treebank(text)
    except StructuralError as exc:
        error = StructuralError(f"Error reading {path}: {exc}")
        error.path = exc.path
        raise error from exc
