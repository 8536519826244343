"""
Tests for the command line entry point and the PNG rasterizer.

cairosvg needs the native cairo library, so the rasterizer is exercised with
a stand-in module injected into sys.modules; it produces a real PNG via Pillow.
"""

import sys
import types
from io import BytesIO

import pytest
from PIL import Image

from chart_plotter import cli, output


@pytest.fixture
def fake_cairosvg(monkeypatch):
    calls = []

    def svg2png(url=None, output_width=None, output_height=None, **kwargs):
        calls.append({"url": url, "output_width": output_width, "output_height": output_height})
        buf = BytesIO()
        Image.new("RGBA", (output_width, output_height), (255, 255, 255, 255)).save(buf, format="PNG")
        return buf.getvalue()

    module = types.ModuleType("cairosvg")
    module.svg2png = svg2png
    monkeypatch.setitem(sys.modules, "cairosvg", module)
    return calls


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("A,B\n1,2\n3,4\n", encoding="utf-8")
    return path


def test_bar_chart_to_svg(tmp_path, csv_file, capsys):
    out = tmp_path / "bars.svg"
    code = cli.main(["-d", str(csv_file), "-t", "bar", "-c", "-m", "-o", str(out), "--title", "Sales"])

    assert code == 0
    assert out.exists()
    assert "Sales" in out.read_text(encoding="utf-8")
    assert not (tmp_path / "bars.png").exists()
    assert "Saved" in capsys.readouterr().out


def test_png_requested(tmp_path, csv_file, fake_cairosvg):
    out = tmp_path / "pie.svg"
    code = cli.main(["-d", str(csv_file), "-t", "pie", "-c", "-m", "-p", "-s", "320", "200", "-o", str(out)])

    assert code == 0
    png = tmp_path / "pie.png"
    with Image.open(png) as im:
        assert im.size == (320, 200)
    assert fake_cairosvg[0]["url"] == str(out)


def test_output_extension_is_replaced(tmp_path, csv_file):
    code = cli.main(["-d", str(csv_file), "-t", "histogram", "-c", "-m", "-b", "3", "-o", str(tmp_path / "hist.out")])
    assert code == 0
    assert (tmp_path / "hist.svg").exists()


def test_malformed_input_writes_nothing(tmp_path, capsys):
    data = tmp_path / "bad.csv"
    data.write_text("1,2\n3\n", encoding="utf-8")
    out = tmp_path / "bad.svg"

    code = cli.main(["-d", str(data), "-t", "scatter", "-m", "-o", str(out)])

    assert code == 1
    assert "Malformed input file." in capsys.readouterr().out
    assert not out.exists()


def test_non_utf8_input_is_malformed(tmp_path, capsys):
    data = tmp_path / "latin1.csv"
    data.write_bytes(b"caf\xe9,B\n1,2\n")
    out = tmp_path / "latin1.svg"

    code = cli.main(["-d", str(data), "-t", "bar", "-c", "-m", "-o", str(out)])

    assert code == 1
    assert "Malformed input file." in capsys.readouterr().out
    assert not out.exists()


def test_byte_order_mark_is_accepted(tmp_path):
    data = tmp_path / "bom.csv"
    data.write_bytes(b"\xef\xbb\xbf1,2\n3,4\n")
    out = tmp_path / "bom.svg"

    assert cli.main(["-d", str(data), "-t", "bar", "-m", "-o", str(out)]) == 0
    assert out.exists()


def test_scatter_needs_two_columns(tmp_path, capsys):
    data = tmp_path / "one.csv"
    data.write_text("1\n3\n", encoding="utf-8")

    code = cli.main(["-d", str(data), "-t", "scatter", "-m", "-o", str(tmp_path / "s.svg")])

    assert code == 1
    assert "Malformed input file." in capsys.readouterr().out


def test_zero_pie_reports_error(tmp_path, capsys):
    data = tmp_path / "zero.csv"
    data.write_text("0,0\n", encoding="utf-8")

    code = cli.main(["-d", str(data), "-t", "pie", "-m", "-o", str(tmp_path / "p.svg")])

    assert code == 1
    assert "Cannot render chart" in capsys.readouterr().out


def test_preview_shown_unless_minimized(tmp_path, csv_file, monkeypatch):
    shown = []
    monkeypatch.setattr(cli, "show_preview", lambda path, size: shown.append((path, size)))

    code = cli.main(["-d", str(csv_file), "-t", "bar", "-c", "-o", str(tmp_path / "w.svg")])

    assert code == 0
    assert shown == [(tmp_path / "w.svg", (800, 600))]


@pytest.mark.parametrize(
    "argv",
    [
        ["-t", "bar"],                               # missing --data
        ["-d", "missing.csv", "-t", "bar"],          # file does not exist
        ["-d", "{csv}", "-t", "donut"],              # unknown type
        ["-d", "{csv}", "-t", "bar", "-s", "0", "10"],  # bad size
    ],
)
def test_usage_errors(argv, csv_file):
    argv = [a.replace("{csv}", str(csv_file)) for a in argv]
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2


def test_rasterize_warns_on_size_mismatch(tmp_path, monkeypatch, caplog):
    def svg2png(url=None, output_width=None, output_height=None, **kwargs):
        buf = BytesIO()
        Image.new("RGB", (10, 10)).save(buf, format="PNG")
        return buf.getvalue()

    module = types.ModuleType("cairosvg")
    module.svg2png = svg2png
    monkeypatch.setitem(sys.modules, "cairosvg", module)

    svg = tmp_path / "c.svg"
    svg.write_text("<svg/>", encoding="utf-8")
    png = output.rasterize(svg, tmp_path / "c.png", (100, 50))

    assert png.exists()
    assert "expected 100x50" in caplog.text
