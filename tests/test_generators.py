"""
Tests for SecureAuth Lab Candidate Generators.
"""

from secureauthlab.generators import (
    BASE_WORDS,
    CHAR_FREQUENCY,
    COMMON_PASSWORDS,
    HYBRID_TRANSFORMATIONS,
    CharClass,
    Corpus,
    Transformation,
    adaptive_charset,
    classify_char,
    dictionary_candidates,
    hybrid_candidates,
    position_candidates,
)


LOWER = CHAR_FREQUENCY[CharClass.LOWERCASE]
UPPER = CHAR_FREQUENCY[CharClass.UPPERCASE]
DIGITS = CHAR_FREQUENCY[CharClass.DIGIT]
SYMBOLS = CHAR_FREQUENCY[CharClass.SYMBOL]


class TestClassifyChar:
    """Tests for character classification."""

    def test_classes(self):
        assert classify_char("q") == CharClass.LOWERCASE
        assert classify_char("Q") == CharClass.UPPERCASE
        assert classify_char("7") == CharClass.DIGIT
        assert classify_char("#") == CharClass.SYMBOL
        assert classify_char(" ") == CharClass.SYMBOL
        assert classify_char("é") == CharClass.SYMBOL


class TestDictionary:
    """Tests for the dictionary phase source."""

    def test_order_starts_with_password(self):
        candidates = list(dictionary_candidates(Corpus.default()))

        assert candidates[0] == "password"
        assert candidates == list(COMMON_PASSWORDS)

    def test_substitute_corpus(self):
        corpus = Corpus(common_passwords=("hunter2", "letmein"))
        assert list(dictionary_candidates(corpus)) == ["hunter2", "letmein"]


class TestHybrid:
    """Tests for hybrid candidates."""

    def test_word_major_order(self):
        candidates = list(hybrid_candidates(Corpus.default()))
        per_word = len(HYBRID_TRANSFORMATIONS)

        assert len(candidates) == len(BASE_WORDS) * per_word
        assert all(word == BASE_WORDS[0] for _, word, _ in candidates[:per_word])
        assert candidates[per_word][1] == BASE_WORDS[1]

    def test_transform_order_for_first_word(self):
        values = [candidate for candidate, word, _ in hybrid_candidates(Corpus.default()) if word == "password"]

        assert values[:12] == [
            "password", "Password", "PASSWORD", "password123", "password!",
            "password2024", "password2023", "Password1", "Password123",
            "Password!", "password@123", "123password",
        ]
        assert values[12] == "p@ssw0rd"
        assert values[13] == "p@ssword"

    def test_tiger2024_is_generated(self):
        matches = [
            (word, transform.name)
            for candidate, word, transform in hybrid_candidates(Corpus.default())
            if candidate == "Tiger2024"
        ]
        assert matches == [("tiger", "capitalize + append 2024")]

    def test_leet_replaces_first_occurrence_only(self):
        leet_ao = HYBRID_TRANSFORMATIONS[12]
        leet_ea = HYBRID_TRANSFORMATIONS[13]

        assert leet_ao("banana") == "b@nana"
        assert leet_ao("foobar") == "f0ob@r"
        assert leet_ea("eagle") == "3@gle"
        assert leet_ea("welcome") == "w3lcome"

    def test_capitalize_keeps_rest(self):
        capitalize = HYBRID_TRANSFORMATIONS[1]
        assert capitalize("mcDonald") == "McDonald"
        assert capitalize("") == ""

    def test_custom_transformations(self):
        corpus = Corpus(
            base_words=("cat", "dog"),
            transformations=(Transformation("reverse", lambda w: w[::-1]),),
        )
        assert [c for c, _, _ in hybrid_candidates(corpus)] == ["tac", "god"]
        assert corpus.hybrid_size == 2


class TestAdaptiveCharset:
    """Tests for the adaptive brute-force ordering."""

    def test_default_order(self):
        assert adaptive_charset([]) == LOWER + UPPER + DIGITS + SYMBOLS

    def test_observed_uppercase_first(self):
        assert adaptive_charset(["X"]) == UPPER + LOWER + DIGITS + SYMBOLS

    def test_observed_classes_in_canonical_order(self):
        assert adaptive_charset(["9", "k"]) == LOWER + DIGITS + UPPER + SYMBOLS
        assert adaptive_charset(["#", "X", "k", "9"]) == LOWER + UPPER + DIGITS + SYMBOLS

    def test_always_covers_every_class(self):
        full = set(LOWER + UPPER + DIGITS + SYMBOLS)
        for prefix in ([], ["a"], ["A", "1"], ["!"], list("Xk9#")):
            charset = adaptive_charset(prefix)
            assert set(charset) == full
            assert len(charset) == len(full)

    def test_frequency_order_not_alphabetical(self):
        assert adaptive_charset([])[:3] == "eat"

    def test_pure(self):
        prefix = ["a", "B"]
        first = adaptive_charset(prefix)
        second = adaptive_charset(prefix)

        assert first == second
        assert prefix == ["a", "B"]

    def test_position_candidates_use_corpus_frequency(self):
        corpus = Corpus(char_frequency={
            CharClass.LOWERCASE: "ab",
            CharClass.UPPERCASE: "AB",
            CharClass.DIGIT: "01",
            CharClass.SYMBOL: "!",
        })
        assert "".join(position_candidates(["0"], corpus)) == "01abAB!"
