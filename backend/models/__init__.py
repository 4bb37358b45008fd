"""Data models for PDF page search."""
from .document import TextFragment, PageRecord, DocumentIndex
from .search import DisplayMode, HighlightSegment, Snippet, PageView, SearchView
from .api import LoadRequest, QueryRequest, Segment, PageResult, SearchResponse, StatusResponse

__all__ = [
    "TextFragment",
    "PageRecord",
    "DocumentIndex",
    "DisplayMode",
    "HighlightSegment",
    "Snippet",
    "PageView",
    "SearchView",
    "LoadRequest",
    "QueryRequest",
    "Segment",
    "PageResult",
    "SearchResponse",
    "StatusResponse",
]
