"""Services for PDF page search."""
from .document_source import DocumentSource, DocumentHandle, PyMuPDFDocument
from .text_extractor import TextExtractor, ExtractionError, build_page_text
from .search_index import SearchIndex
from .snippet_builder import SnippetBuilder
from .interaction_controller import InteractionController, ControllerState

__all__ = ['DocumentSource', 'DocumentHandle', 'PyMuPDFDocument', 'TextExtractor', 'ExtractionError', 'build_page_text', 'SearchIndex', 'SnippetBuilder', 'InteractionController', 'ControllerState']
