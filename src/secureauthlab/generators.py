"""
SecureAuth Lab Candidate Generators
Dictionary, hybrid and adaptive brute-force candidate sequences.

The corpus (word lists, transformations, frequency strings) is plain
immutable data owned by a Corpus instance so alternate corpora can be
substituted.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum


class CharClass(Enum):
    """Character classes, in canonical search order."""
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGIT = "digit"
    SYMBOL = "symbol"


def classify_char(char: str) -> CharClass:
    """Return the class of a single character (anything not ASCII alphanumeric is a symbol)."""
    if "a" <= char <= "z":
        return CharClass.LOWERCASE
    if "A" <= char <= "Z":
        return CharClass.UPPERCASE
    if "0" <= char <= "9":
        return CharClass.DIGIT
    return CharClass.SYMBOL


def is_symbol(char: str) -> bool:
    return classify_char(char) is CharClass.SYMBOL


def _capitalize(word: str) -> str:
    # Only the first letter changes; str.capitalize() would lowercase the rest
    return word[:1].upper() + word[1:]


@dataclass(frozen=True)
class Transformation:
    """A named hybrid-attack mutation of a base word."""
    name: str
    apply: Callable[[str], str]

    def __call__(self, word: str) -> str:
        return self.apply(word)


COMMON_PASSWORDS: tuple[str, ...] = (
    "password", "123456", "12345678", "qwerty", "abc123", "monkey", "1234567",
    "letmein", "trustno1", "dragon", "baseball", "iloveyou", "master", "sunshine",
    "ashley", "bailey", "shadow", "123123", "654321", "superman", "password1",
    "qwerty123", "welcome", "admin", "login", "Password", "password123", "111111",
    "admin123", "root", "pass", "test", "guest", "user", "1234", "12345",
    "secret", "passw0rd", "Password1", "football", "michael", "jordan", "princess",
    "charlie", "aa123456", "donald", "password!", "solo", "starwars", "qwertyuiop",
    "liverpool", "cheese", "soccer", "purple", "london", "computer", "12341234",
)

BASE_WORDS: tuple[str, ...] = (
    "password", "admin", "user", "login", "welcome", "hello", "secret",
    "love", "summer", "winter", "spring", "fall", "dragon", "tiger",
    "master", "super", "test", "demo", "temp", "guest",
)

# Leet substitutions replace the first occurrence of each letter only
HYBRID_TRANSFORMATIONS: tuple[Transformation, ...] = (
    Transformation("original", lambda w: w),
    Transformation("capitalize", _capitalize),
    Transformation("uppercase", lambda w: w.upper()),
    Transformation("append 123", lambda w: w + "123"),
    Transformation("append !", lambda w: w + "!"),
    Transformation("append 2024", lambda w: w + "2024"),
    Transformation("append 2023", lambda w: w + "2023"),
    Transformation("capitalize + append 1", lambda w: _capitalize(w) + "1"),
    Transformation("capitalize + append 123", lambda w: _capitalize(w) + "123"),
    Transformation("capitalize + append !", lambda w: _capitalize(w) + "!"),
    Transformation("append @123", lambda w: w + "@123"),
    Transformation("prepend 123", lambda w: "123" + w),
    Transformation("leet a->@ o->0", lambda w: w.replace("a", "@", 1).replace("o", "0", 1)),
    Transformation("leet e->3 a->@", lambda w: w.replace("e", "3", 1).replace("a", "@", 1)),
    Transformation("capitalize + append 2024", lambda w: _capitalize(w) + "2024"),
)

# Most common characters first, based on leaked-password frequency
CHAR_FREQUENCY: dict[CharClass, str] = {
    CharClass.LOWERCASE: "eatoinshrdlcumwfgypbvkjxqz",
    CharClass.UPPERCASE: "EATOINSHRDLCUMWFGYPBVKJXQZ",
    CharClass.DIGIT: "1234567890",
    CharClass.SYMBOL: "!@#$%^&*()_+-=[]{}|;:,.<>?",
}


@dataclass(frozen=True)
class Corpus:
    """Initialization data for the candidate generators."""
    common_passwords: tuple[str, ...] = COMMON_PASSWORDS
    base_words: tuple[str, ...] = BASE_WORDS
    transformations: tuple[Transformation, ...] = HYBRID_TRANSFORMATIONS
    char_frequency: dict[CharClass, str] = field(default_factory=lambda: dict(CHAR_FREQUENCY))

    @classmethod
    def default(cls) -> "Corpus":
        return cls()

    @property
    def hybrid_size(self) -> int:
        return len(self.base_words) * len(self.transformations)


def dictionary_candidates(corpus: Corpus) -> Iterator[str]:
    """Common passwords in list order."""
    yield from corpus.common_passwords


def hybrid_candidates(corpus: Corpus) -> Iterator[tuple[str, str, Transformation]]:
    """
    Word-major, transform-minor mutations of the base words.

    Yields:
        (candidate, base_word, transformation)
    """
    for word in corpus.base_words:
        for transform in corpus.transformations:
            yield transform(word), word, transform


def adaptive_charset(
    discovered: Sequence[str],
    char_frequency: dict[CharClass, str] | None = None,
) -> str:
    """
    Ordered search alphabet for the next brute-force position.

    Classes already seen in the discovered prefix are tried first, in
    canonical order (lowercase, uppercase, digit, symbol); the remaining
    classes follow in the same order, so the alphabet always covers every
    supported character. With nothing discovered this is the plain
    canonical concatenation.
    """
    frequency = CHAR_FREQUENCY if char_frequency is None else char_frequency
    observed = {classify_char(c) for c in discovered}

    preferred = [char_class for char_class in CharClass if char_class in observed]
    remaining = [char_class for char_class in CharClass if char_class not in observed]
    return "".join(frequency.get(char_class, "") for char_class in preferred + remaining)


def position_candidates(discovered: Sequence[str], corpus: Corpus) -> Iterator[str]:
    """Characters to try at the next position, in adaptive order."""
    yield from adaptive_charset(discovered, corpus.char_frequency)
