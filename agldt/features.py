"""
Positional tag features for AGLDT postags.

An AGLDT ``postag`` is a 9-character string where each position encodes one
grammatical category::

    <word id="43" form="λεγομένης" lemma="λέγω" postag="v-sppmfg-" relation="ATR" head="40"/>

Position 0 is the part of speech, then person, number, tense, mood, voice,
gender, case and degree. ``-`` marks a position that does not apply.

Each category is described by a :class:`FeatureType`, built with
:func:`define_feature`. By default a category value is encoded by the first
letter of its (lowercased) name; values whose first letters clash need an
explicit character::

    TENSE = define_feature("TenseAspect", 3, [
        "Future", ("FuturePerfect", "t"), "Aorist", "Imperfect",
        ("Perfect", "r"), "Present", ("PlusPerfect", "l"), "EMPTY",
    ])
    TENSE.encode("Perfect")          # PosFeature(index=3, char='r')
    TENSE.decode("v3sria---")        # 'Perfect'

Two values resolving to the same character is a :class:`DefinitionFault`,
raised when the feature is defined.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .errors import DefinitionFault

logger = logging.getLogger(__name__)

TAG_WIDTH = 9
PLACEHOLDER = "-"
EMPTY = "EMPTY"

CategorySpec = Union[str, Tuple[str, Optional[str]]]


@dataclass(frozen=True)
class PosFeature:
    """A single encoded feature: the slot it occupies and its character."""

    index: int
    char: str

    def __str__(self) -> str:
        return self.char


def default_code(category: str) -> str:
    """Character used for ``category`` when no explicit one is given."""
    if category == EMPTY:
        return PLACEHOLDER
    if not category:
        raise DefinitionFault("Category names must not be empty")
    return category.lower()[0]


@dataclass(frozen=True)
class FeatureType:
    """A categorical feature bound to one slot of the positional tag.

    ``codes`` holds ``(category, char)`` pairs in definition order. The
    mapping is validated on construction: the slot must be within the tag and
    no two categories may share a character.
    """

    name: str
    index: int
    codes: Tuple[Tuple[str, str], ...]
    _by_value: Dict[str, str] = field(init=False, repr=False, compare=False)
    _by_char: Dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.index < TAG_WIDTH:
            raise DefinitionFault(
                f"Feature '{self.name}': index {self.index} out of bounds, max = {TAG_WIDTH - 1}"
            )
        by_value: Dict[str, str] = {}
        by_char: Dict[str, str] = {}
        for category, char in self.codes:
            if len(char) != 1:
                raise DefinitionFault(
                    f"Feature '{self.name}': code for '{category}' must be a single character, got {char!r}"
                )
            if category in by_value:
                raise DefinitionFault(f"Feature '{self.name}': category '{category}' defined twice")
            if char in by_char:
                raise DefinitionFault(
                    f"Feature '{self.name}': two variants tried to use the same postag value: "
                    f"'{char}' ({by_char[char]}, {category})"
                )
            by_value[category] = char
            by_char[char] = category
        object.__setattr__(self, "_by_value", by_value)
        object.__setattr__(self, "_by_char", by_char)

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(category for category, _ in self.codes)

    def __contains__(self, category: object) -> bool:
        return category in self._by_value

    def encode(self, category: str) -> PosFeature:
        """Return the slot and character for ``category``.

        Raises:
            KeyError: if ``category`` is not a value of this feature.
        """
        try:
            char = self._by_value[category]
        except KeyError:
            raise KeyError(f"'{category}' is not a value of feature '{self.name}'") from None
        return PosFeature(self.index, char)

    def decode(self, tag: Optional[str], slot_index: Optional[int] = None) -> Optional[str]:
        """Return the category encoded in ``tag``, or None if nothing matches.

        The feature's own slot is read unless ``slot_index`` is given. A
        missing tag, a tag too short to reach the slot, or a character that is
        not registered all give None.
        """
        index = self.index if slot_index is None else slot_index
        if not tag or not 0 <= index < len(tag):
            return None
        return self._by_char.get(tag[index])


def define_feature(name: str, slot_index: int, categories: Iterable[CategorySpec]) -> FeatureType:
    """
    Build a validated feature type.

    Args:
        name: Feature name (e.g. "Gender")
        slot_index: Position of the feature in the tag (0-8)
        categories: Ordered category values. Each item is either a name, which
            is encoded by its first lowercase letter (``EMPTY`` is always ``-``),
            or a ``(name, char)`` pair giving the character explicitly.

    Returns:
        The feature type.

    Raises:
        DefinitionFault: if two categories share a character, a name is
            repeated, an explicit code is not one character, or the slot is
            outside the tag.
    """
    codes = []
    for spec in categories:
        if isinstance(spec, str):
            category, explicit = spec, None
        else:
            category, explicit = spec
        char = explicit if explicit is not None else default_code(category)
        codes.append((category, char))
    feature = FeatureType(name=name, index=slot_index, codes=tuple(codes))
    logger.debug("Defined feature %s at slot %d with %d values", name, slot_index, len(codes))
    return feature


@dataclass(frozen=True)
class Tagset:
    """A set of feature types which together make up a positional tag."""

    features: Tuple[FeatureType, ...]
    width: int = TAG_WIDTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(sorted(self.features, key=lambda f: f.index)))
        slots: Dict[int, str] = {}
        names = set()
        for feature in self.features:
            if feature.index >= self.width:
                raise DefinitionFault(f"Feature '{feature.name}' does not fit in a tag of width {self.width}")
            if feature.index in slots:
                raise DefinitionFault(
                    f"Features '{slots[feature.index]}' and '{feature.name}' both use slot {feature.index}"
                )
            if feature.name in names:
                raise DefinitionFault(f"Feature '{feature.name}' defined twice")
            slots[feature.index] = feature.name
            names.add(feature.name)

    def feature(self, name: str) -> FeatureType:
        for feature in self.features:
            if feature.name == name:
                return feature
        raise KeyError(f"Unknown feature '{name}'")

    def is_well_formed(self, tag: Optional[str]) -> bool:
        return isinstance(tag, str) and len(tag) == self.width

    def decode_tag(self, tag: Optional[str]) -> Dict[str, Optional[str]]:
        """Decode every feature of ``tag``; unrecognized slots map to None."""
        return {feature.name: feature.decode(tag) for feature in self.features}

    def encode_tag(self, values: Mapping[str, str]) -> str:
        """Build a tag from ``{feature name: category}``; other slots get ``-``."""
        chars = [PLACEHOLDER] * self.width
        for name, category in values.items():
            encoded = self.feature(name).encode(category)
            chars[encoded.index] = encoded.char
        return "".join(chars)


PART_OF_SPEECH = define_feature(
    "PartOfSpeech",
    0,
    [
        "Noun",
        "Verb",
        ("Participle", "t"),
        "Adjective",
        ("Adverb", "d"),
        ("Article", "l"),
        ("Particle", "g"),
        "Conjunction",
        ("Preposition", "r"),
        "Pronoun",
        ("Numeral", "m"),
        "Interjection",
        "Exclamation",
        ("Punctuation", "u"),
        ("Irregular", "x"),
        EMPTY,
    ],
)

PERSON = define_feature("Person", 1, [("First", "1"), ("Second", "2"), ("Third", "3"), EMPTY])

NUMBER = define_feature("Number", 2, ["Singular", "Plural", "Dual", EMPTY])

TENSE_ASPECT = define_feature(
    "TenseAspect",
    3,
    [
        "Future",
        ("FuturePerfect", "t"),
        "Aorist",
        "Imperfect",
        ("Perfect", "r"),
        "Present",
        ("PlusPerfect", "l"),
        EMPTY,
    ],
)

MOOD = define_feature(
    "Mood",
    4,
    [
        "Indicative",
        "Subjunctive",
        "Optative",
        ("Infinitive", "n"),
        ("Imperative", "m"),
        "Participle",
        "Gerundive",
        ("Gerund", "d"),
        ("Supine", "u"),
        EMPTY,
    ],
)

VOICE = define_feature("Voice", 5, ["Active", "Passive", "Middle", ("MedioPassive", "e"), EMPTY])

GENDER = define_feature("Gender", 6, ["Masculine", "Feminine", "Neuter", EMPTY])

CASE = define_feature(
    "Case",
    7,
    ["Nominative", "Genitive", "Dative", "Accusative", ("Ablative", "b"), "Vocative", "Locative", EMPTY],
)

DEGREE = define_feature("Degree", 8, ["Comparative", "Superlative", EMPTY])

AGLDT_FEATURES: Sequence[FeatureType] = (
    PART_OF_SPEECH,
    PERSON,
    NUMBER,
    TENSE_ASPECT,
    MOOD,
    VOICE,
    GENDER,
    CASE,
    DEGREE,
)

AGLDT_TAGSET = Tagset(tuple(AGLDT_FEATURES))

# First tag character of punctuation and other non-word tokens
PUNCTUATION_CODE = PART_OF_SPEECH.encode("Punctuation").char
