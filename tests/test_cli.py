import logging

from snapsurf.__main__ import main


def test_cli_smooths_and_writes(tmp_path, capsys):
    src = tmp_path / "in.obj"
    src.write_text("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n")
    out = tmp_path / "out.obj"

    assert main([str(src), "--smooth", "--report", "-o", str(out)]) == 0

    printed = capsys.readouterr().out
    assert "faces: 2" in printed
    assert "Mesh Quality Report" in printed
    text = out.read_text()
    assert text.count("\nf ") == 2
    assert "vn 0 0 1" in text


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.obj")]) == 1


def test_cli_bad_file(tmp_path):
    src = tmp_path / "bad.obj"
    src.write_text("v 0 0\n")
    assert main([str(src)]) == 2


def teardown_function(_):
    logging.getLogger("snapsurf").handlers.clear()
