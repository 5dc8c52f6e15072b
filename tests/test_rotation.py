import pytest

import transcode_engine as te
from transcode_engine import rotate


def test_rot13_fixed_example():
    assert rotate("Attack At Dawn", 13) == "Nggnpx Ng Qnja"


def test_case_preserved_and_non_letters_pass_through():
    assert rotate("abc XYZ 123 !?", 3) == "def ABC 123 !?"
    assert rotate("Ünïcödé", 5) == "Üsïhödé"


def test_shift_normalization():
    assert rotate("abc", 26) == "abc"
    assert rotate("abc", 27) == "bcd"
    assert rotate("abc", -1) == "zab"
    assert rotate("abc", -27) == "zab"
    assert rotate("Hello", 0) == "Hello"


@pytest.mark.parametrize("shift", [-53, -13, -1, 0, 1, 7, 13, 25, 26, 100])
def test_inverse_shift_restores_text(shift):
    text = "The Quick Brown Fox, 42 jumps!"
    assert rotate(rotate(text, shift), 26 - (shift % 26)) == text


def test_rot13_is_an_involution():
    text = "Why did the chicken cross the road?"
    assert rotate(rotate(text, 13), 13) == text


def test_strategy_decode_applies_inverse_shift():
    rot = te.TRANSCODER_REGISTRY["rot"]
    options = te.RotationOptions(shift=3)
    assert rot.encode("abc", options) == "def"
    assert rot.decode("def", options) == "abc"
    assert rot.decode(rot.encode("Attack At Dawn")) == "Attack At Dawn"
