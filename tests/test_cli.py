import json

import pytest

import minkowski_conv.__main__ as cli


def write_input(tmp_path, p, q):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({"P": p, "Q": q}), encoding="utf-8")
    return path


def test_main_writes_result_document(tmp_path):
    input_path = write_input(tmp_path, [[0, 0], [1, 0], [1, 1], [0, 1]], [[0, 0], [1, 0], [0, 1]])
    output_path = tmp_path / "out" / "sum.json"

    cli.main([str(input_path), "--output", str(output_path)])

    document = json.loads(output_path.read_text(encoding="utf-8"))
    assert document["boundary"] == [[0, 0], [2, 0], [2, 1], [1, 2], [0, 2]]
    assert document["holes"] == []
    assert document["stats"]["cycles"] == 1
    assert "segments" not in document


def test_main_prints_segments_and_fractions(tmp_path, capsys):
    input_path = write_input(tmp_path, [[0, 0], ["1/2", 0], [0, "1/2"]], [[0, 0], [1, 0], [1, 1], [0, 1]])

    cli.main([str(input_path), "--segments", "--log-level", "WARNING"])

    document = json.loads(capsys.readouterr().out)
    assert document["boundary"] == [[0, 0], ["3/2", 0], ["3/2", 1], [1, "3/2"], [0, "3/2"]]
    segments = document["segments"]
    assert segments
    assert {seg["move_on"] for seg in segments} <= {"ON_P", "ON_Q"}
    assert sum(1 for seg in segments if seg["is_last"]) >= 1
    assert all(seg["cycle"] >= 1 for seg in segments)


def test_main_keep_collinear(tmp_path):
    square = [[0, 0], [1, 0], [1, 1], [0, 1]]
    input_path = write_input(tmp_path, square, square)
    output_path = tmp_path / "sum.json"

    cli.main([str(input_path), "--keep-collinear", "--output", str(output_path)])

    document = json.loads(output_path.read_text(encoding="utf-8"))
    assert len(document["boundary"]) == 8


def test_main_exits_on_invalid_polygon(tmp_path):
    input_path = write_input(tmp_path, [[0, 0], [1, 1], [1, 0], [0, 1]], [[0, 0], [1, 0], [0, 1]])

    with pytest.raises(SystemExit) as exc:
        cli.main([str(input_path)])

    assert exc.value.code == 1


def test_main_rejects_malformed_document(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps([[0, 0], [1, 0]]), encoding="utf-8")

    with pytest.raises(ValueError):
        cli.main([str(path)])
