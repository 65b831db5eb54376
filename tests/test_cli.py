from pathlib import Path

import pytest

from cssmatrix.cli import main


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, list[str], str]:
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out.splitlines(), captured.err


def test_parse_prints_one_line_per_function(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "parse", "scale(2) translate(3px)")
    assert code == 0
    assert lines == [
        "scale matrix(2, 0, 0, 2, 0, 0)",
        "translate matrix(1, 0, 0, 1, 3, 0)",
    ]


def test_compose(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "compose", "scale(2) translate(3px)")
    assert code == 0
    assert lines == ["composite matrix(2, 0, 0, 2, 6, 0)"]


def test_decompose(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "decompose", "matrix(0.825, 0, 0, 0.5775, 10.89, -17.71)")
    assert code == 0
    assert lines == [
        "translate matrix(1, 0, 0, 1, 10.89, -17.71)",
        "scale matrix(0.825, 0, 0, 0.5775, 0, 0)",
    ]


def test_invert(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "invert", "matrix(1, 2, 3, 4, 5, 6)")
    assert code == 0
    assert lines == ["composite matrix(-2, 1, 1.5, -0.5, 1, -2)"]


def test_apply(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "apply", "translate(10px, 5px) scale(2)", "1", "1")
    assert code == 0
    assert lines == ["12 7"]

    code, lines, _ = _run(capsys, "apply", "translate(10px, 5px) scale(2)", "12", "7", "--inverse")
    assert code == 0
    assert lines == ["1 1"]


def test_precision(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, _ = _run(capsys, "parse", "rotate(30deg)", "--precision", "3")
    assert code == 0
    assert lines == ["rotate matrix(0.866, 0.5, -0.5, 0.866, 0, 0)"]


def test_errors_exit_nonzero(capsys: pytest.CaptureFixture[str]) -> None:
    code, lines, err = _run(capsys, "parse", "foo(1)")
    assert code == 1
    assert lines == []
    assert "foo()" in err

    code, _, err = _run(capsys, "invert", "scale(0)")
    assert code == 1
    assert "not invertible" in err


def test_safe_3d_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "settings.yaml"
    config.write_text("safe_3d: true\n", encoding="utf-8")

    code, _, err = _run(capsys, "parse", "perspective(10px)", "--config", str(config))
    assert code == 1
    assert "3D" in err

    with pytest.warns(UserWarning):
        code, lines, _ = _run(capsys, "parse", "perspective(10px) scale(2)")
    assert code == 0
    assert lines == ["scale matrix(2, 0, 0, 2, 0, 0)"]


def test_bad_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, _, err = _run(capsys, "parse", "scale(2)", "--config", str(tmp_path / "nope.yaml"))
    assert code == 1
    assert "Invalid configuration" in err
