import pytest

from obvtools.confparse import DEFAULT_CONF, Confparse


def _make(tmp_path, text, name="obv.conf"):
    path = tmp_path / name
    path.write_bytes(text.encode())
    conf = Confparse()
    conf.load(path)
    return conf, path


def test_save_default_creates_file_with_defaults(tmp_path):
    path = tmp_path / "obv.conf"
    conf = Confparse()
    conf.load(path, True)
    assert path.read_bytes().decode() == DEFAULT_CONF
    assert conf.parse_int("windowX", 0) == 1200
    assert conf.parse_int("windowY", 0) == 700
    assert conf.parse_str("pdfSoftwarePath", "") == "SumatraPDF.exe"
    assert conf.parse_hex("pinHaloColor", 0) == 0x22FF2288
    assert conf.parse_double("pinHaloDiameter", 0.0) == 1.1
    assert conf.parse_bool("showPins", False) is True
    assert conf.parse_bool("pinShapeSquare", True) is False


def test_empty_value_is_returned_as_empty_string(tmp_path):
    conf = Confparse()
    conf.load(tmp_path / "obv.conf", True)
    assert conf.parse_str("fontName", "fallback") == ""


def test_missing_file_without_default_creates_empty_file(tmp_path):
    path = tmp_path / "obv.conf"
    conf = Confparse()
    conf.load(path)
    assert path.read_bytes() == b""
    assert conf.parse("anything") is None


def test_key_must_start_a_line(tmp_path):
    conf, _ = _make(tmp_path, "# windowX = 5\r\nwindowX = 7\r\n")
    assert conf.parse_int("windowX", 0) == 7


def test_key_followed_by_alnum_is_skipped(tmp_path):
    conf, _ = _make(tmp_path, "fontSizeX = 3\nfontSize = 9\n")
    assert conf.parse_int("fontSize", 0) == 9


def test_missing_key_gives_default(tmp_path):
    conf, _ = _make(tmp_path, "a = 1\n")
    assert conf.parse_int("nothere", 42) == 42
    assert conf.parse_str("nothere", "dflt") == "dflt"


def test_empty_key_gives_none(tmp_path):
    conf, _ = _make(tmp_path, "a = 1\n")
    assert conf.parse("") is None


def test_parse_bool_requires_exact_true(tmp_path):
    conf, _ = _make(tmp_path, "a = True\nb = true\n")
    assert conf.parse_bool("a", True) is False
    assert conf.parse_bool("b", False) is True


def test_parse_int_out_of_range_gives_default(tmp_path):
    conf, _ = _make(tmp_path, "big = 99999999999\n")
    assert conf.parse_int("big", 5) == 5


def test_parse_int_reads_leading_number(tmp_path):
    conf, _ = _make(tmp_path, "n = 12abc\n")
    assert conf.parse_int("n", 0) == 12


def test_parse_hex_with_and_without_prefix(tmp_path):
    conf, _ = _make(tmp_path, "c = ff\nd = 0xff\n")
    assert conf.parse_hex("c", 0) == 0xFF
    assert conf.parse_hex("d", 0) == 0xFF


def test_parse_double_overflow_gives_default(tmp_path):
    conf, _ = _make(tmp_path, "d = 1e999\n")
    assert conf.parse_double("d", 2.5) == 2.5


def test_write_str_replaces_value_and_keeps_backup(tmp_path):
    original = "a = 1\r\nb = 2\r\n"
    conf, path = _make(tmp_path, original)
    assert conf.write_str("a", "hello") is True
    assert conf.parse_str("a", "") == "hello"
    assert conf.parse_int("b", 0) == 2
    assert path.read_bytes() == original.replace("1", "hello").encode()
    assert (tmp_path / "obv.conf~").read_bytes() == original.encode()


def test_write_str_adds_missing_key(tmp_path):
    conf, path = _make(tmp_path, "a = 1")
    assert conf.write_str("z", "v") is True
    assert path.read_bytes() == b"a = 1\r\nz = v"
    assert conf.parse_str("z", "") == "v"
    assert conf.parse_int("a", 0) == 1


def test_write_without_load_fails():
    conf = Confparse()
    assert conf.write_str("a", "b") is False


def test_write_typed_values_round_trip(tmp_path):
    conf, _ = _make(tmp_path, "x = 0\n")
    conf.write_int("count", -17)
    conf.write_hex("col", 0xFF)
    conf.write_float("ratio", 0.25)
    conf.write_bool("flag", True)
    assert conf.parse_int("count", 0) == -17
    assert conf.parse_hex("col", 0) == 0xFF
    assert conf.parse_str("col", "") == "0x000000ff"
    assert conf.parse_double("ratio", 0.0) == pytest.approx(0.25)
    assert conf.parse_bool("flag", False) is True


def test_repeated_writes_keep_single_entry(tmp_path):
    conf, path = _make(tmp_path, "k = 1\r\n")
    conf.write_int("k", 2)
    conf.write_int("k", 3)
    assert conf.parse_int("k", 0) == 3
    assert path.read_bytes().count(b"k =") == 1