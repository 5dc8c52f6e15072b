import pytest

import transcode_engine as te
from transcode_engine import morse_decode, morse_encode


def test_symbol_table_is_injective_and_inverted():
    assert len(te.REVERSE_MORSE_CODE) == len(te.MORSE_CODE)
    for char, signal in te.MORSE_CODE.items():
        assert set(signal) <= {".", "-"}
        assert te.REVERSE_MORSE_CODE[signal] == char


def test_symbol_table_is_read_only():
    with pytest.raises(TypeError):
        te.MORSE_CODE["A"] = "..."
    with pytest.raises(TypeError):
        te.REVERSE_MORSE_CODE[".-"] = "B"


def test_invert_rejects_duplicate_signals():
    with pytest.raises(ValueError):
        te._invert({"A": ".-", "B": ".-"})


def test_encode_default_separators():
    assert morse_encode("SOS help!") == "... --- ... / .... . .-.. .--. -.-.--"


def test_encode_drops_unknown_by_default():
    assert morse_encode("a#b") == ".- -..."
    assert morse_encode("###") == ""
    assert morse_encode("a ### b") == ".- /  / -..."


def test_encode_keep_unknown_passes_through():
    assert morse_encode("a#b", keep_unknown=True) == ".- # -..."
    assert morse_encode("é", keep_unknown=True) == "É"


def test_encode_custom_separators():
    assert morse_encode("hi yo", "|", "  ") == "....|..  -.--|---"


def test_encode_empty():
    assert morse_encode("") == ""


def test_decode_mixed_word_separators():
    code = "... --- ... / .... . .-.. .--. -.-.--"
    assert morse_decode(code, " ", " / ").lower() == "sos help!"


def test_decode_slash_without_padding_and_long_spaces():
    assert morse_decode("...---.../.-", "", "") == " A"
    assert morse_decode("... --- .../.-") == "SOS A"
    assert morse_decode(".... ..   .-") == "HI A"


def test_decode_normalizes_lookalikes():
    code = "••• —–− ·∙·"
    assert morse_decode(code) == "SOS"


def test_decode_strips_zero_width_and_outer_whitespace():
    assert morse_decode("  .\u200b- \ufeff-...\u200d  ") == "AB"


def test_decode_unknown_token_dropped_by_default():
    assert morse_decode("-.-.-. garbage") == ";"


def test_decode_strict_substitutes_placeholder():
    result = morse_decode("-.-.-. garbage", " ", " / ", True)
    assert te.UNKNOWN_PLACEHOLDER in result
    assert result == ";\ufffd"


def test_decode_separators_are_literal_not_patterns():
    assert morse_decode(".-.-...", ".", "*") == "TT"
    assert morse_decode(".-+-...*..", "+", "*") == "AB I"
    assert morse_decode(".-|-...", "|", "") == "AB"


def test_decode_empty_letter_separator_splits_on_whitespace():
    assert morse_decode(".- \t-...", "", " / ") == "AB"


def test_decode_word_split_takes_precedence():
    # letter separator " " is part of the word separator " / "
    assert morse_decode(".- / -...", " ", " / ") == "A B"


def test_decode_empty_and_blank():
    assert morse_decode("") == ""
    assert morse_decode("   \u200b ") == ""


@pytest.mark.parametrize("text", ["SOS", "hello world", "Call me at 555-0100.", "a/b (c)"])
@pytest.mark.parametrize("letter_sep,word_sep", [(" ", " / "), ("|", "  #  "), (",", "   ")])
def test_round_trip(text, letter_sep, word_sep):
    encoded = morse_encode(text, letter_sep, word_sep)
    assert morse_decode(encoded, letter_sep, word_sep) == text.upper()


def test_lookup_raises_unknown_symbol():
    morse = te.TRANSCODER_REGISTRY["morse"]
    with pytest.raises(te.UnknownSymbol):
        morse.char_for("......-")
    with pytest.raises(te.UnknownSymbol):
        morse.signal_for("#")
