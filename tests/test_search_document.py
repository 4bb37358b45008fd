"""Tests for the search_document command-line script."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from unittest.mock import AsyncMock, patch
import search_document
from models.document import DocumentIndex, PageRecord
from services.text_extractor import TextExtractor, ExtractionError


INDEX = DocumentIndex(
    source="handbuch.pdf",
    pages=(
        PageRecord(page_number=1, text="Einleitung"),
        PageRecord(page_number=2, text="Die Frequenz wird gemessen"),
    )
)


def test_prints_matching_pages(capsys):
    with patch.object(TextExtractor, "load", new=AsyncMock(return_value=INDEX)):
        exit_code = search_document.main(["handbuch.pdf", "frequenz"])
    
    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Results (1 pages found):" in output
    assert "--- Page 2 ---" in output
    assert "Die [Frequenz] wird gemessen" in output


def test_no_matches(capsys):
    with patch.object(TextExtractor, "load", new=AsyncMock(return_value=INDEX)):
        exit_code = search_document.main(["handbuch.pdf", "Spannung"])
    
    assert exit_code == 0
    assert 'No matches for "Spannung"' in capsys.readouterr().out


def test_extraction_error_exits_nonzero():
    with patch.object(TextExtractor, "load", new=AsyncMock(side_effect=ExtractionError("boom"))):
        assert search_document.main(["kaputt.pdf", "frequenz"]) == 1
