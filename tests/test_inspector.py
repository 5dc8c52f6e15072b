from transcode_engine import CodepointRecord, format_records, inspect_unicode


def test_astral_character_is_one_record():
    records = inspect_unicode("😀")
    assert records == [CodepointRecord("😀", 128512, "U+1F600")]


def test_records_in_input_order_with_padded_labels():
    records = inspect_unicode("Hi é")
    assert [r.character for r in records] == ["H", "i", " ", "é"]
    assert [r.codepoint for r in records] == [72, 105, 32, 233]
    assert [r.hex_label for r in records] == ["U+0048", "U+0069", "U+0020", "U+00E9"]


def test_empty_input():
    assert inspect_unicode("") == []


def test_max_code_point_label():
    assert inspect_unicode("\U0010FFFF")[0].hex_label == "U+10FFFF"


def test_format_records_includes_names():
    table = format_records(inspect_unicode("A😀"))
    lines = table.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("U+0041")
    assert "LATIN CAPITAL LETTER A" in lines[0]
    assert "128512" in lines[1]
    assert "GRINNING FACE" in lines[1]
