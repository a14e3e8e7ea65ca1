import json
import math

import pytest

from jutland.jsonfile import Json5Error, load_json5, parse_json5


def test_plain_json_matches_standard_parser():
    doc = '{"name": "Jutland", "ships": [1, 2.5, -3], "ok": true, "none": null}'
    assert parse_json5(doc) == json.loads(doc)


def test_round_trip_through_json_dumps():
    data = {"a": [1, {"b": "c\nd"}], "e": False, "f": -0.25, "g": "\u4e2d"}
    assert parse_json5(json.dumps(data)) == data


def test_comments_and_trailing_commas():
    doc = """
    // leading comment
    {
      a: 1, /* inline */
      b: [1, 2,],
    }
    """
    assert parse_json5(doc) == {"a": 1, "b": [1, 2]}


def test_unquoted_keys_and_single_quotes():
    assert parse_json5("{name: 'it\\'s', $x_1: \"q\"}") == {"name": "it's", "$x_1": "q"}


def test_number_forms():
    assert parse_json5("0x1F") == 0x1F
    assert parse_json5(".5") == 0.5
    assert parse_json5("5.") == 5.0
    assert parse_json5("+3") == 3
    assert parse_json5("-Infinity") == -math.inf
    assert math.isnan(parse_json5("NaN"))
    assert isinstance(parse_json5("42"), int)
    assert isinstance(parse_json5("4e2"), float)


def test_string_escapes():
    assert parse_json5(r"'a\tb\u0041\x42'") == "a\tbAB"
    assert parse_json5("'ab\\\ncd'") == "abcd"
    assert parse_json5('"\\ud83d\\ude00"') == "\U0001F600"


def test_duplicate_keys_last_wins():
    assert parse_json5("{a: 1, a: 2}") == {"a": 2}


@pytest.mark.parametrize(
    "doc",
    ["{a: }", "[1, 2", "'abc", "/* open", "1 2", "{1: 2}", "", '"a\nb"', "{a 1}", "'\\1'"],
)
def test_invalid_documents_raise(doc):
    with pytest.raises(Json5Error):
        parse_json5(doc)


def test_error_reports_line():
    with pytest.raises(ValueError) as excinfo:
        parse_json5("{\n  a: ?\n}")
    assert excinfo.value.line == 2


def test_load_json5_reads_file(tmp_path):
    path = tmp_path / "ships.json5"
    path.write_text("[{name: 'Hood', totalHP: 1000,},]", encoding="utf-8")
    assert load_json5(path) == [{"name": "Hood", "totalHP": 1000}]


def test_load_json5_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json5(tmp_path / "absent.json5")