"""In-memory substring search over extracted pages."""
import logging
import re
from typing import List, Optional

from models.document import DocumentIndex, PageRecord

logger = logging.getLogger(__name__)


def compile_term(term: str) -> Optional["re.Pattern[str]"]:
    """
    Case-insensitive literal pattern for term, or None for a blank term.
    
    Filtering, snippet anchoring and highlighting all use this pattern so
    they agree on what counts as an occurrence.
    """
    if not term.strip():
        return None
    return re.compile(re.escape(term), re.IGNORECASE)


def query(index: DocumentIndex, term: str) -> List[PageRecord]:
    """
    Find the pages whose text contains term, ignoring case.
    
    A blank term means no query is in flight and matches nothing.
    
    Args:
        index: Pages to search
        term: Search term, matched literally as a substring
        
    Returns:
        Matching pages in page order
    """
    pattern = compile_term(term)
    if pattern is None:
        return []
    
    return [page for page in index.pages if pattern.search(page.text)]


class SearchIndex:
    """Holds the pages of the loaded document for querying."""
    
    def __init__(self, index: DocumentIndex):
        self.index = index
        logger.info(f"Initialized SearchIndex with {index.page_count} pages")
    
    @property
    def page_count(self) -> int:
        return self.index.page_count
    
    def query(self, term: str) -> List[PageRecord]:
        results = query(self.index, term)
        logger.debug(f"Query {term!r} matched {len(results)} pages")
        return results
