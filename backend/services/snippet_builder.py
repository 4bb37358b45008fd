"""Highlighted snippets of matching pages."""
from typing import List

from models.search import DisplayMode, HighlightSegment, Snippet
from services.search_index import compile_term
from config import SNIPPET_CONTEXT_BEFORE, SNIPPET_CONTEXT_AFTER


def find_match(text: str, term: str) -> int:
    """
    Position of the first case-insensitive occurrence of term in text.
    
    Returns 0 when the term is blank or not found, so callers always get a
    usable window anchor.
    """
    pattern = compile_term(term)
    if pattern is None:
        return 0
    match = pattern.search(text)
    return match.start() if match else 0


def highlight(text: str, term: str) -> List[HighlightSegment]:
    """
    Split text into segments, marking every occurrence of term.
    
    The term is matched literally and case-insensitively; the original casing
    of the text is preserved in the segments.
    
    Args:
        text: Text to highlight
        term: Search term
        
    Returns:
        Segments whose concatenation equals text
    """
    pattern = compile_term(term)
    if pattern is None:
        return [HighlightSegment(text)] if text else []
    
    segments: List[HighlightSegment] = []
    position = 0
    for match in pattern.finditer(text):
        if match.start() > position:
            segments.append(HighlightSegment(text[position:match.start()]))
        segments.append(HighlightSegment(match.group(), highlighted=True))
        position = match.end()
    
    if position < len(text):
        segments.append(HighlightSegment(text[position:]))
    
    return segments


class SnippetBuilder:
    """Renders a page's text around the first match of the search term."""
    
    def __init__(self, context_before: int = SNIPPET_CONTEXT_BEFORE, context_after: int = SNIPPET_CONTEXT_AFTER):
        """
        Initialize SnippetBuilder.
        
        Args:
            context_before: Characters shown before the match in collapsed mode
            context_after: Characters shown from the match start in collapsed mode
        """
        self.context_before = context_before
        self.context_after = context_after
    
    def render(self, page_text: str, term: str, mode: DisplayMode = DisplayMode.COLLAPSED) -> Snippet:
        """
        Render page_text for display.
        
        Collapsed mode shows the window [match - context_before,
        match + context_after) clipped to the text, with ellipses where text
        was cut off. Expanded mode shows the whole page.
        
        Args:
            page_text: Full text of a matching page
            term: Search term to highlight
            mode: Display mode
            
        Returns:
            Snippet with highlight segments
        """
        match_index = find_match(page_text, term)
        
        if mode == DisplayMode.EXPANDED:
            return Snippet(
                mode=mode,
                segments=highlight(page_text, term),
                window_start=0,
                window_end=len(page_text),
                match_index=match_index
            )
        
        window_start = max(0, match_index - self.context_before)
        unclipped_end = match_index + self.context_after
        window_end = min(len(page_text), unclipped_end)
        
        return Snippet(
            mode=mode,
            segments=highlight(page_text[window_start:window_end], term),
            window_start=window_start,
            window_end=window_end,
            match_index=match_index,
            leading_ellipsis=window_start > 0,
            trailing_ellipsis=unclipped_end < len(page_text)
        )
