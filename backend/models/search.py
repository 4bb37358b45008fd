"""Search and display data models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DisplayMode(str, Enum):
    """How much of a matching page is rendered."""
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class HighlightSegment:
    """A piece of rendered text, marked if it is an occurrence of the term."""
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class Snippet:
    """Rendered page text with highlight segments and window bounds."""
    mode: DisplayMode
    segments: List[HighlightSegment]
    window_start: int
    window_end: int
    match_index: int
    leading_ellipsis: bool = False
    trailing_ellipsis: bool = False

    @property
    def text(self) -> str:
        """Plain window text without markers or ellipses."""
        return "".join(segment.text for segment in self.segments)

    def to_markup(self, open_mark: str = "[", close_mark: str = "]", ellipsis: str = "...") -> str:
        """Render the snippet as a string with highlight markers and ellipses."""
        parts = [ellipsis] if self.leading_ellipsis else []
        for segment in self.segments:
            if segment.highlighted:
                parts.append(f"{open_mark}{segment.text}{close_mark}")
            else:
                parts.append(segment.text)
        if self.trailing_ellipsis:
            parts.append(ellipsis)
        return "".join(parts)


@dataclass(frozen=True)
class PageView:
    """One matching page as shown to the user."""
    page_number: int
    expanded: bool
    snippet: Snippet


@dataclass(frozen=True)
class SearchView:
    """Everything the presentation layer needs to draw the search panel."""
    loading: bool
    query: str
    page_count: int
    results: List[PageView] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def match_count(self) -> int:
        return len(self.results)

    @property
    def no_results(self) -> bool:
        """True when a query is active, loading is done, and nothing matched."""
        return bool(self.query.strip()) and not self.loading and not self.results
