"""
Unit tests for text normalization helpers.
"""

import pytest

from hobbytags.agents.normalization import (
    TextNormalizer,
    clean_about,
    normalize_for_lookup,
    normalize_hobby_text,
    strip_noise_phrases,
)


@pytest.fixture
def normalizer():
    return TextNormalizer()


def test_empty_and_none_input(normalizer):
    assert normalizer.normalize(None) == ""
    assert normalizer.normalize("") == ""


def test_symbols_only_input(normalizer):
    assert normalizer.normalize("!!! ??? ...") == ""


def test_lowercases_and_applies_phrase_corrections(normalizer):
    text = "I love playing Video Games & reading!"
    assert normalizer.normalize(text) == "i love playing videogame and reading"


def test_separators_collapse_to_space(normalizer):
    assert normalizer.normalize("3D Modelling / Photography") == "3dmodeling photography"
    assert normalizer.normalize("Working out;TV series") == "workout series"


def test_emoji_removed(normalizer):
    assert normalizer.normalize("Gaming 🎮 and hiking ☀") == "gaming and hiking"


def test_counter_strike_variants(normalizer):
    assert normalizer.normalize("Counter-Strike") == "counterstrike"
    assert normalizer.normalize("counterstrike") == "counterstrike"


@pytest.mark.parametrize("text", [
    "I love playing video games and reading sci-fi novels",
    "3D printing & board games; TV series\nworking out",
    "Counter Strike, data analysis, Photos!!",
    "none",
])
def test_normalize_is_idempotent(normalizer, text):
    once = normalizer.normalize(text)
    assert normalizer.normalize(once) == once


def test_without_phrase_corrections():
    normalizer = TextNormalizer(phrase_corrections=())
    assert normalizer.normalize("Video Games") == "video games"


def test_normalize_for_lookup_keeps_unicode_letters():
    assert normalize_for_lookup("  Café_Crème!! ") == "café crème"
    assert normalize_for_lookup(None) == ""


def test_normalize_hobby_text_uses_comma_delimiter():
    text = "Hiking; cooking / photography\nreading"
    assert normalize_hobby_text(text) == "hiking,cooking,photography,reading"


def test_normalize_hobby_text_trims_commas():
    assert normalize_hobby_text(",, art & music ,") == "art & music"


def test_strip_noise_phrases():
    assert strip_noise_phrases("i like hiking in my free time") == "hiking"


def test_clean_about():
    text = "I like hiking ;  cooking |music and art ."
    assert clean_about(text) == "I like hiking, cooking, music and art."
    assert clean_about("hiking, cooking, ") == "hiking, cooking"
    assert clean_about("") == ""
