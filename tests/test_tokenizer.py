import pytest

from regdiff.core.tokenizer import tokenize


def test_tokenize_splits_words_spaces_and_punctuation():
    assert tokenize("Pasal 1 (ayat 2).") == [
        "Pasal", " ", "1", " ", "(", "ayat", " ", "2", ")", ".",
    ]


def test_each_whitespace_character_is_its_own_token():
    assert tokenize("a  b\n\tc") == ["a", " ", " ", "b", "\n", "\t", "c"]
    assert tokenize("a\u00a0b") == ["a", "\u00a0", "b"]


def test_other_symbols_stay_inside_words():
    assert tokenize("Rp1.000-an/bulan") == ["Rp1", ".", "000-an/bulan"]
    assert tokenize("huruf \"a\";") == ["huruf", " ", "\"a\"", ";"]


def test_tokenize_empty_text():
    assert tokenize("") == []


def test_tokens_join_back_to_the_input():
    text = "  Setiap orang, tanpa kecuali: wajib {membayar} [iuran]!?\r\n"
    assert "".join(tokenize(text)) == text


@pytest.mark.parametrize(
    "text",
    [
        "",
        " ",
        "Pasal 1",
        "Ketentuan sebagaimana dimaksud dalam Pasal 5 ayat (1) huruf a.",
        "line one\r\nline two\n\n",
        "a\u00a0b c\td",
        ".,;:!?()[]{}",
        "((()))...!!",
        "naïve résumé Größe 東京 «ok»",
        "  leading and trailing  ",
        "émoji 🙂, tab\tend",
    ],
)
def test_tokenize_round_trip_and_idempotence(text):
    tokens = tokenize(text)

    assert "".join(tokens) == text
    assert tokenize("".join(tokens)) == tokens
    assert all(tokens)


def test_tokenize_rejects_non_strings():
    with pytest.raises(TypeError, match="text must be a str"):
        tokenize(None)
    with pytest.raises(TypeError):
        tokenize(["a"])
