from __future__ import annotations

import json
from pathlib import Path

import pytest

from ethical_shopping.scripts import analyze_wishlist


def test_search_prints_ranked_retailers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    summary_path = tmp_path / "out" / "summary.md"
    json_path = tmp_path / "out" / "result.json"
    exit_code = analyze_wishlist.main(
        ["--output", str(summary_path), "--json", str(json_path), "search", "board game"]
    )
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "## Toys (1)" in out
    assert "| Local Shops | 80/100 | Community support |" in out
    assert summary_path.read_text(encoding="utf-8") in out
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["type"] == "search"
    assert payload["search_term"] == "board game"


def test_url_command_prints_notice(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = analyze_wishlist.main(["url", "https://www.amazon.co.uk/hz/wishlist/ls/X1"])
    assert exit_code == 1
    assert "PDF upload option" in capsys.readouterr().out


def test_upload_rejects_other_documents(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "wishlist.txt"
    path.write_text("The Hobbit by J.R.R. Tolkien (Paperback)", encoding="utf-8")
    assert analyze_wishlist.main(["upload", str(path)]) == 1
    assert "Please upload a PDF file." in capsys.readouterr().out


def test_upload_missing_pdf_reports_read_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert analyze_wishlist.main(["upload", str(tmp_path / "missing.pdf")]) == 1
    assert "Error reading PDF." in capsys.readouterr().out


def test_upload_missing_other_document_is_unsupported(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert analyze_wishlist.main(["upload", str(tmp_path / "notes.txt")]) == 1
    out = capsys.readouterr().out
    assert "Please upload a PDF file." in out
    assert "Error reading PDF." not in out


def test_catalog_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog = tmp_path / "catalog.json"
    catalog.write_text(
        json.dumps({"retailers": {"general": ["Repair Cafe", "Amazon"]}}), encoding="utf-8"
    )
    assert analyze_wishlist.main(["--catalog", str(catalog), "search", "drill"]) == 0
    out = capsys.readouterr().out
    assert "| Repair Cafe | 50/100 | No data |" in out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert analyze_wishlist.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_parse_backend_list() -> None:
    assert analyze_wishlist.parse_backend_list(None) is None
    assert analyze_wishlist.parse_backend_list("pypdf, pdfminer") == ["pypdf", "pdfminer"]
    assert analyze_wishlist.parse_backend_list(" , ") is None
