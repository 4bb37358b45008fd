"""Per-page plain text extraction."""
import logging
import time
from typing import Iterable, List, Optional

from models.document import DocumentIndex, PageRecord, TextFragment
from services.document_source import DocumentHandle, DocumentSource

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a document cannot be opened or one of its pages cannot be decoded."""
    
    def __init__(self, message: str, source: Optional[str] = None, page_number: Optional[int] = None):
        self.source = source
        self.page_number = page_number
        super().__init__(message)


def build_page_text(fragments: Iterable[TextFragment]) -> str:
    """
    Join a page's fragments into plain text.
    
    Fragments are separated by a single space. A line break is inserted before
    every fragment whose vertical coordinate differs from the one before it,
    since PDFs carry no explicit line breaks.
    
    Args:
        fragments: Page fragments in decoder order
        
    Returns:
        Page text with leading/trailing whitespace removed
    """
    parts: List[str] = []
    last_y = None
    
    for fragment in fragments:
        if last_y is not None and fragment.y != last_y:
            parts.append("\n")
        parts.append(fragment.text)
        parts.append(" ")
        last_y = fragment.y
    
    return "".join(parts).strip()


class TextExtractor:
    """Builds a DocumentIndex from an opened document, all or nothing."""
    
    def __init__(self, document_source: Optional[DocumentSource] = None):
        """
        Initialize TextExtractor.
        
        Args:
            document_source: Opener used by load() (defaults to DocumentSource())
        """
        self.document_source = document_source or DocumentSource()
    
    async def extract(self, document: DocumentHandle, source: str = "") -> DocumentIndex:
        """
        Extract the text of every page, in page order.
        
        Pages are decoded strictly one after another.
        
        Args:
            document: Opened document handle
            source: Reference the document was opened from
            
        Returns:
            DocumentIndex with one PageRecord per page
            
        Raises:
            ExtractionError: If any page fails to decode
        """
        start_time = time.time()
        pages: List[PageRecord] = []
        
        for page_number in range(1, document.page_count + 1):
            try:
                fragments = await document.get_text_fragments(page_number)
            except Exception as e:
                raise ExtractionError(
                    f"Failed to decode page {page_number} of {source or 'document'}: {e}",
                    source=source,
                    page_number=page_number
                ) from e
            
            pages.append(PageRecord(page_number=page_number, text=build_page_text(fragments)))
        
        elapsed = time.time() - start_time
        logger.info(
            f"Extracted {len(pages)} pages in {elapsed:.2f}s",
            extra={"extra": {"source": source, "page_count": len(pages), "elapsed": round(elapsed, 3)}}
        )
        return DocumentIndex(source=source, pages=tuple(pages))
    
    async def load(self, reference: str) -> DocumentIndex:
        """
        Open a document by reference and extract it.
        
        Args:
            reference: Path or http(s) URL of the document
            
        Returns:
            DocumentIndex of the document
            
        Raises:
            ExtractionError: If the document cannot be opened or extracted
        """
        try:
            document = await self.document_source.open(reference)
        except Exception as e:
            raise ExtractionError(f"Failed to open {reference}: {e}", source=reference) from e
        
        try:
            return await self.extract(document, source=reference)
        finally:
            await document.close()
