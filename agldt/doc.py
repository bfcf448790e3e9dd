"""
Document model for AGLDT treebanks.

The model mirrors the treebank markup: a ``<treebank>`` root with one
``<header>`` and one ``<body>``, sentences, and ``<word>`` tokens. Every class
is a frozen dataclass and every sequence a tuple, so a parsed treebank can be
shared freely; accessors that hand out sequences return new lists.

Each class lists its markup mapping in ``XML``: which attribute or child
element fills which field. :mod:`agldt.treebank` binds elements to classes
from these declarations.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Optional, Tuple

from .features import AGLDT_TAGSET, PUNCTUATION_CODE, Tagset

# Token id used by ``head`` for the sentence root (and for repaired empty heads)
ROOT_HEAD = 0


@dataclass(frozen=True)
class XmlField:
    """Correspondence between a dataclass field and the markup.

    ``kind`` is one of ``attr`` (attribute), ``text`` (text of a child
    element), ``child`` (child element bound to a model class) or
    ``sequence`` (every element child, in order, bound to a model class).
    """

    field: str
    xml_name: str
    kind: str
    type: Any = str
    optional: bool = False


def attr(
    field: str, xml_name: Optional[str] = None, type: Callable[[str], Any] = str, optional: bool = False
) -> XmlField:
    return XmlField(field, xml_name or field, "attr", type, optional)


def text(field: str, xml_name: Optional[str] = None, optional: bool = False) -> XmlField:
    return XmlField(field, xml_name or field, "text", str, optional)


def child(field: str, xml_name: str, type: Any, optional: bool = False) -> XmlField:
    return XmlField(field, xml_name, "child", type, optional)


def sequence(field: str, xml_name: str, type: Any) -> XmlField:
    return XmlField(field, xml_name, "sequence", type)


def non_negative_int(value: str) -> int:
    number = int(value.strip())
    if number < 0:
        raise ValueError(f"expected a non-negative integer, got {value!r}")
    return number


def non_empty_str(value: str) -> str:
    if not value:
        raise ValueError("must not be empty")
    return value


class TokenContainer:
    """Counting helpers shared by everything that holds tokens."""

    def iter_tokens(self) -> Iterator["Token"]:
        raise NotImplementedError

    def count_tokens(self) -> int:
        return sum(1 for _ in self.iter_tokens())

    def count_words(self) -> int:
        """Number of real words (tokens not tagged as punctuation)."""
        return sum(1 for token in self.iter_tokens() if token.is_word())

    def token_count(self) -> int:
        return self.count_tokens()

    def word_count(self) -> int:
        return self.count_words()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]


@dataclass(frozen=True)
class Token:
    id: int
    form: str
    relation: str
    head: int
    lemma: Optional[str] = None
    postag: Optional[str] = None
    artificial: Optional[str] = None

    XML: ClassVar[Tuple[XmlField, ...]] = (
        attr("id", type=non_negative_int),
        attr("form", type=non_empty_str),
        attr("lemma", optional=True),
        attr("postag", optional=True),
        attr("artificial", optional=True),
        attr("relation"),
        attr("head", type=non_negative_int),
    )

    def is_word(self) -> bool:
        """True if the token carries a tag that does not mark punctuation."""
        return bool(self.postag) and self.postag[0] != PUNCTUATION_CODE

    def is_root(self) -> bool:
        return self.head == ROOT_HEAD

    def has_unknown_lemma(self) -> bool:
        """True if the lemma is annotated, but annotated as unknown (empty)."""
        return self.lemma == ""

    def features(self, tagset: Tagset = AGLDT_TAGSET) -> Dict[str, Optional[str]]:
        return tagset.decode_tag(self.postag)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Sentence(TokenContainer):
    id: int
    document_id: str
    subdoc: str
    words: Tuple[Token, ...] = ()

    XML: ClassVar[Tuple[XmlField, ...]] = (
        attr("id", type=non_negative_int),
        attr("document_id"),
        attr("subdoc"),
        sequence("words", "word", Token),
    )

    def __iter__(self) -> Iterator[Token]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def iter_tokens(self) -> Iterator[Token]:
        return iter(self.words)

    def tokens(self) -> List[Token]:
        return list(self.words)

    def get_token(self, token_id: int) -> Optional[Token]:
        """Return the token with ``token_id``, or None if the sentence has none."""
        if token_id == ROOT_HEAD:
            return None
        for token in self.words:
            if token.id == token_id:
                return token
        return None

    def head_of(self, token: Token) -> Optional[Token]:
        """Resolve ``token.head`` within this sentence.

        Returns None for the root sentinel and for heads that point outside
        the sentence; dangling references are reported as-is, never repaired.
        """
        return self.get_token(token.head)


@dataclass(frozen=True)
class Body(TokenContainer):
    sentences: Tuple[Sentence, ...] = ()

    XML: ClassVar[Tuple[XmlField, ...]] = (sequence("sentences", "sentence", Sentence),)

    def __iter__(self) -> Iterator[Sentence]:
        return iter(self.sentences)

    def __len__(self) -> int:
        return len(self.sentences)

    def iter_tokens(self) -> Iterator[Token]:
        for sentence in self.sentences:
            yield from sentence.words

    def count_sentences(self) -> int:
        return len(self.sentences)


@dataclass(frozen=True)
class PersInfo:
    name: str
    short: Optional[str] = None
    uri: Optional[str] = None
    address: Optional[str] = None

    XML: ClassVar[Tuple[XmlField, ...]] = (
        text("name"),
        text("short", optional=True),
        text("uri", optional=True),
        text("address", optional=True),
    )


@dataclass(frozen=True)
class RespStmt:
    """One attribution: who did what."""

    resp: str
    pers_name: Optional[PersInfo] = None

    XML: ClassVar[Tuple[XmlField, ...]] = (
        child("pers_name", "persName", PersInfo, optional=True),
        text("resp"),
    )


@dataclass(frozen=True)
class EditionStmt:
    resp_stmts: Tuple[RespStmt, ...] = ()

    XML: ClassVar[Tuple[XmlField, ...]] = (sequence("resp_stmts", "respStmt", RespStmt),)


@dataclass(frozen=True)
class TitleStmt:
    title: Optional[str] = None
    author: Optional[str] = None

    XML: ClassVar[Tuple[XmlField, ...]] = (
        text("title", optional=True),
        text("author", optional=True),
    )


@dataclass(frozen=True)
class FileDesc:
    edition_stmt: EditionStmt
    title_stmt: Optional[TitleStmt] = None

    XML: ClassVar[Tuple[XmlField, ...]] = (
        child("title_stmt", "titleStmt", TitleStmt, optional=True),
        child("edition_stmt", "editionStmt", EditionStmt),
    )


@dataclass(frozen=True)
class Header:
    release_date: str
    annotation_date: str
    annotation_scheme: str
    file_desc: FileDesc

    XML: ClassVar[Tuple[XmlField, ...]] = (
        text("release_date", "releaseDate"),
        text("annotation_date", "annotationDate"),
        text("annotation_scheme", "annotationScheme"),
        child("file_desc", "fileDesc", FileDesc),
    )

    def attributions(self) -> List[RespStmt]:
        return list(self.file_desc.edition_stmt.resp_stmts)


@dataclass(frozen=True)
class Treebank(TokenContainer):
    """A parsed AGLDT treebank document."""

    version: str
    xml_lang: str
    cts: str
    header: Header
    body: Body

    XML: ClassVar[Tuple[XmlField, ...]] = (
        attr("version"),
        attr("xml_lang"),
        attr("cts"),
        child("header", "header", Header),
        child("body", "body", Body),
    )

    @classmethod
    def from_str(cls, raw: str) -> "Treebank":
        """Normalize and parse raw treebank markup."""
        from .treebank import load_treebank

        return load_treebank(raw)

    def sentences(self) -> List[Sentence]:
        return list(self.body.sentences)

    def iter_tokens(self) -> Iterator[Token]:
        return self.body.iter_tokens()

    def count_sentences(self) -> int:
        return self.body.count_sentences()

    def __str__(self) -> str:
        return (
            f"{self.cts} ({self.xml_lang}, version {self.version}): "
            f"{self.count_sentences()} sentences, {self.count_tokens()} tokens, {self.count_words()} words"
        )


Document = Treebank
