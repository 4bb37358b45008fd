"""
Document Search Script for PDF page search.

This script:
1. Opens a PDF from a path or URL
2. Extracts the text of every page
3. Prints each page that contains the search term, with matches marked

Usage:
    python search_document.py handbook.pdf frequenz
    python search_document.py https://example.com/handbook.pdf frequenz --expand
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from models.search import DisplayMode
from services.search_index import SearchIndex
from services.snippet_builder import SnippetBuilder
from services.text_extractor import TextExtractor, ExtractionError

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search the pages of a PDF document")
    parser.add_argument("source", help="Path or http(s) URL of the PDF")
    parser.add_argument("term", help="Text to search for (case-insensitive)")
    parser.add_argument(
        "--expand",
        action="store_true",
        help="Print whole pages instead of snippets"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Search a document and print the matching pages."""
    args = parse_args(argv)

    try:
        index = asyncio.run(TextExtractor().load(args.source))
    except ExtractionError as e:
        logger.error(f"Could not index {args.source}: {e}")
        return 1

    search_index = SearchIndex(index)
    snippet_builder = SnippetBuilder()
    mode = DisplayMode.EXPANDED if args.expand else DisplayMode.COLLAPSED

    matches = search_index.query(args.term)
    if not matches:
        print(f'No matches for "{args.term}" in {index.page_count} pages.')
        return 0

    print(f"Results ({len(matches)} pages found):")
    for page in matches:
        snippet = snippet_builder.render(page.text, args.term, mode)
        print(f"\n--- Page {page.page_number} ---")
        print(snippet.to_markup())

    return 0


if __name__ == "__main__":
    sys.exit(main())
