import zipfile

import pytest

import main
from conftest import build_docx


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "_setup_logging", lambda verbose: None)


def test_format_single_file(tmp_path):
    src = tmp_path / "a.docx"
    src.write_bytes(build_docx(["Hello"]))
    out = tmp_path / "out"
    assert main._cli(["format", str(src), "--out", str(out), "--indent-mode", "configurable"]) == 0
    assert (out / "formatted_a.docx").read_bytes()[:2] == b"PK"


def test_format_reports_failures_with_exit_code(tmp_path):
    good = tmp_path / "a.docx"
    good.write_bytes(build_docx(["A"]))
    bad = tmp_path / "b.doc"
    bad.write_bytes(b"legacy")
    out = tmp_path / "out"
    assert main._cli(["format", str(good), str(bad), "--out", str(out)]) == 1
    with zipfile.ZipFile(out / "formatted_documents.zip") as zf:
        assert zf.namelist() == ["formatted_a.docx"]


def test_format_missing_input(tmp_path, capsys):
    assert main._cli(["format", str(tmp_path / "missing.docx")]) == 2
    assert "File not found" in capsys.readouterr().out


def test_compare_prints_differences(tmp_path, capsys):
    list1 = tmp_path / "1.txt"
    list1.write_text("Alice\nBob\nAlice\n", encoding="utf-8")
    list2 = tmp_path / "2.txt"
    list2.write_text("Bob\nCarol\n", encoding="utf-8")
    assert main._cli(["compare", str(list1), str(list2)]) == 0
    out = capsys.readouterr().out
    assert "Carol" in out
    assert "Alice: 2" in out


def test_compare_missing_list(tmp_path):
    assert main._cli(["compare", str(tmp_path / "x.txt"), str(tmp_path / "y.txt")]) == 2


def test_chat_without_model_config(tmp_path, capsys):
    assert main._cli(["chat", "--models", str(tmp_path / "models.json")]) == 2
    assert "Could not load chat model config" in capsys.readouterr().out
