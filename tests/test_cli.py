import math

import pytest

from obvtools.cli import (
    FALLBACK_FONTS,
    Options,
    PREFERRED_RENDERER,
    Renderer,
    UsageError,
    get_renderer,
    large_font_scale,
    main,
    parse_parameters,
    renderer_order,
    resolve_startup,
)
from obvtools.confparse import Confparse


def _config(tmp_path, text):
    path = tmp_path / "obv.conf"
    path.write_bytes(text.encode())
    conf = Confparse()
    conf.load(path)
    return conf


def test_get_renderer_known_numbers():
    assert get_renderer(1) is Renderer.OPENGL1
    assert get_renderer(2) is Renderer.OPENGL3
    assert get_renderer(3) is Renderer.DEFAULT


def test_get_renderer_unknown_is_default():
    assert get_renderer(99) is Renderer.DEFAULT


@pytest.mark.parametrize("preferred", list(Renderer))
def test_renderer_order_covers_every_real_renderer(preferred):
    order = renderer_order(preferred)
    assert set(order) == {Renderer.OPENGL1, Renderer.OPENGL3}
    assert len(order) == 2
    if preferred is not Renderer.DEFAULT:
        assert order[0] is preferred


def test_renderer_order_from_default_starts_at_first():
    assert renderer_order(Renderer.DEFAULT) == [Renderer.OPENGL1, Renderer.OPENGL3]


def test_parse_input_and_config():
    opts = parse_parameters(["-i", "board.brd", "-c", "my.conf"])
    assert opts.input_file == "board.brd"
    assert opts.config_file == "my.conf"


def test_parse_lone_argument_is_input_file():
    assert parse_parameters(["board.brd"]).input_file == "board.brd"


def test_parse_numbers():
    opts = parse_parameters(["-x", "800", "-y", "600", "-z", "12.5", "-p", "150.7", "-r", "1"])
    assert (opts.width, opts.height) == (800, 600)
    assert opts.font_size == 12.5
    assert opts.dpi == 150
    assert opts.renderer is Renderer.OPENGL1


def test_parse_invalid_number_gives_zero():
    assert parse_parameters(["-x", "abc"]).width == 0


def test_parse_flags():
    opts = parse_parameters(["-l", "-d"])
    assert opts.slow_cpu is True
    assert opts.debug is True


def test_parse_skips_process_serial_number():
    assert parse_parameters(["-psn_0_123"]) == Options()


def test_parse_help_and_version():
    assert parse_parameters(["-h", "-x"]).show_help is True
    assert parse_parameters(["-V"]).show_version is True


@pytest.mark.parametrize("argv", [["-c"], ["-x", "-y", "5"], ["-i", "-d"]])
def test_parse_missing_value(argv):
    with pytest.raises(UsageError):
        parse_parameters(argv)


def test_parse_unknown_parameter():
    with pytest.raises(UsageError):
        parse_parameters(["one", "two"])


def test_large_font_scale_capped():
    assert large_font_scale(5.0) == 8.0
    assert large_font_scale(0.0) == 8.0


def test_large_font_scale_fits_atlas():
    size = 20.0
    scale = large_font_scale(size)
    assert scale < 8.0
    total = (size * scale) ** 2 + size ** 2 + (size / 2) ** 2
    assert total == pytest.approx(72.0 * 72.0)


def test_large_font_scale_floor():
    assert large_font_scale(100.0) == pytest.approx(1.0 / 100.0)


def test_resolve_from_empty_config(tmp_path):
    settings = resolve_startup(Options(), _config(tmp_path, ""))
    assert (settings.width, settings.height) == (1100, 700)
    assert settings.renderer is PREFERRED_RENDERER
    assert settings.font_size == pytest.approx(20.0)
    assert settings.font_candidates == list(FALLBACK_FONTS)


def test_resolve_from_config_values(tmp_path):
    conf = _config(
        tmp_path,
        "windowX=1300\r\nwindowY=900\r\nrenderer=1\r\ndpi=200\r\nfontSize=10\r\nfontName=Foo\r\n",
    )
    settings = resolve_startup(Options(), conf)
    assert (settings.width, settings.height) == (1300, 900)
    assert settings.renderer is Renderer.OPENGL1
    assert settings.dpi == 200
    assert settings.font_size == pytest.approx(10 * 200 / 100)
    assert settings.font_candidates[0] == "Foo"
    assert settings.font_candidates[-1] == ""
    assert settings.large_font_scale == large_font_scale(settings.font_size)


def test_resolve_options_override_config(tmp_path):
    conf = _config(tmp_path, "windowX=1300\r\nrenderer=1\r\n")
    opts = Options(width=640, renderer=Renderer.OPENGL3, dpi=100, font_size=14.0)
    settings = resolve_startup(opts, conf)
    assert settings.width == 640
    assert settings.renderer is Renderer.OPENGL3
    assert settings.font_size == pytest.approx(14.0)


def test_resolve_default_config_file(tmp_path):
    conf = Confparse()
    conf.load(tmp_path / "new.conf", True)
    settings = resolve_startup(Options(), conf)
    assert (settings.width, settings.height) == (1200, 700)
    assert settings.renderer is Renderer.OPENGL3


def test_main_help(capsys):
    assert main(["-h"]) == 0
    assert "-h : This help" in capsys.readouterr().out


def test_main_usage_error(capsys):
    assert main(["-x"]) == 1
    assert "-x <window width>" in capsys.readouterr().err


def test_main_reports_settings(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    custom = tmp_path / "custom.conf"
    custom.write_bytes(b"windowX=1500\r\nwindowY=800\r\n")
    assert main(["-c", str(custom), "-i", "board.brd"]) == 0
    out = capsys.readouterr().out
    assert "window: 1500x800" in out
    assert "input: board.brd" in out
    assert (tmp_path / "cfg" / "OpenBoardView" / "obv.conf").is_file()
    assert math.isfinite(1.0)