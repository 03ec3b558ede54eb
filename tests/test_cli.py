from reachmap.cli import build_parser, config_from_args, main

CSV = "sep=,\nContent\nPost time,Reach\n2024-01-01 09:00:00,10\n2024-01-01 09:30:00,20\n2024-01-03 18:15:00,300\n"


def _write(tmp_path, text=CSV):
    path = tmp_path / "export.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_writes_png(tmp_path, capsys):
    out = tmp_path / "heat.png"
    code = main([str(_write(tmp_path)), "--output", str(out), "--width", "300", "--height", "300"])
    assert code == 0
    assert out.read_bytes().startswith(b"\x89PNG")
    assert "3 posts, 0 skipped" in capsys.readouterr().out


def test_matrix_csv_and_top(tmp_path, capsys):
    matrix_csv = tmp_path / "matrix.csv"
    code = main([
        str(_write(tmp_path)), "-o", str(tmp_path / "h.png"),
        "--matrix-csv", str(matrix_csv), "--top", "1", "--cap", "100",
    ])
    assert code == 0
    assert matrix_csv.read_text().splitlines()[0] == "hour,SUN,MON,TUE,WED,THU,FRI,SAT"
    out = capsys.readouterr().out
    assert "THU 10:00 AM" in out
    assert "100" in out


def test_missing_columns_exit_code(tmp_path, capsys):
    path = _write(tmp_path, "Date,Reach\n2024-01-01 09:00:00,1\n")
    code = main([str(path), "-o", str(tmp_path / "h.png")])
    assert code == 2
    assert '"Post time"/"Publish time"' in capsys.readouterr().err
    assert not (tmp_path / "h.png").exists()


def test_empty_data_exit_code(tmp_path, capsys):
    code = main([str(_write(tmp_path, "Post time,Reach\n")), "-o", str(tmp_path / "h.png")])
    assert code == 2
    assert "nothing to plot" in capsys.readouterr().err


def test_bad_config_exit_code(tmp_path, capsys):
    code = main([str(_write(tmp_path)), "--width", "50"])
    assert code == 2
    assert "width" in capsys.readouterr().err


def test_unreadable_file_exit_code(tmp_path, capsys):
    code = main([str(tmp_path / "missing.csv")])
    assert code == 1
    assert "Could not read" in capsys.readouterr().err


def test_list_fonts(capsys):
    assert main(["--list-fonts"]) == 0
    assert capsys.readouterr().out.strip()


def test_border_width_flag_reaches_config():
    args = build_parser().parse_args(["export.csv", "--border-width", "3"])
    assert config_from_args(args).border_width == 3


def test_negative_border_width_exit_code(tmp_path, capsys):
    code = main([str(_write(tmp_path)), "--border-width", "-1", "-o", str(tmp_path / "h.png")])
    assert code == 2
    assert "border_width" in capsys.readouterr().err
