import pytest
from PIL import Image

from qrstr.cli import main
from qrstr.encoder import new_encoder
from qrstr.grid import ErrorCorrectionLevel
from qrstr.render import RenderMode


def test_encode_prints_rendering(capsys: pytest.CaptureFixture[str]) -> None:
    main(["encode", "HI", "-m", "light", "-e", "M"])
    out = capsys.readouterr().out
    expected = new_encoder(RenderMode.TEXT_LIGHT, ErrorCorrectionLevel.PERCENT_15).encode("HI")
    assert out == expected


def test_encode_with_headers_to_file(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "out" / "code.html"
    main(["encode", "A", "-m", "html", "-H", "Scan me", "-H", "twice", "-o", str(target)])
    text = target.read_text(encoding="utf-8")
    assert "<p>Scan me</p>\n<p>twice</p>\n<hr>" in text
    assert str(target) in capsys.readouterr().out


def test_encode_overflow_exits_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["encode", "x" * 3000, "-e", "H"])
    assert exc.value.code == 2
    assert "qrstr: error" in capsys.readouterr().err


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "usage" in capsys.readouterr().out


def test_show_renders_image(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    img = Image.new("L", (4, 2), 255)
    img.putpixel((0, 0), 0)
    img.putpixel((3, 1), 0)
    path = tmp_path / "tiny.png"
    img.save(path)

    main(["show", str(path), "-m", "light"])
    assert capsys.readouterr().out == "      \n ▀  ▄ \n      \n"


def test_show_missing_file(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["show", str(tmp_path / "nope.png")])
    assert exc.value.code == 2


def test_verbose_error_logs_traceback(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-V", "encode", "x" * 3000, "-e", "H"])
    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "command failed" in err
    assert "Traceback" in err


def test_quiet_error_has_no_traceback(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main(["encode", "x" * 3000, "-e", "H"])
    assert "command failed" not in capsys.readouterr().err
