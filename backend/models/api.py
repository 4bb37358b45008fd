"""API request and response models."""
from typing import List, Optional
from pydantic import BaseModel, Field


class LoadRequest(BaseModel):
    """Request to load a new document."""
    source: str = Field(..., description="Filesystem path or http(s) URL of the PDF")


class QueryRequest(BaseModel):
    """Request to change the current search term."""
    query: str = ""


class Segment(BaseModel):
    """Piece of page text, highlighted when it matches the query."""
    text: str
    highlighted: bool


class PageResult(BaseModel):
    """A matching page rendered for display."""
    page_number: int
    expanded: bool
    text: str
    leading_ellipsis: bool
    trailing_ellipsis: bool
    segments: List[Segment]


class SearchResponse(BaseModel):
    """Current search state."""
    query: str
    loading: bool
    page_count: int
    match_count: int
    no_results: bool
    error: Optional[str] = None
    results: List[PageResult]


class StatusResponse(BaseModel):
    """Document loading status."""
    title: str
    source: Optional[str] = None
    loading: bool
    page_count: int
    error: Optional[str] = None
