"""Search session state and its transitions."""
import logging
import time
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from models.document import DocumentIndex
from models.search import DisplayMode, PageView, SearchView
from services.search_index import query as query_pages
from services.snippet_builder import SnippetBuilder
from services.text_extractor import ExtractionError, TextExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerState:
    """Snapshot of one search session.

    `generation` identifies the most recently requested load; results of any
    other load are discarded when they arrive.
    """
    loading: bool = False
    source: Optional[str] = None
    index: DocumentIndex = field(default_factory=lambda: DocumentIndex(source=""))
    query: str = ""
    expanded: FrozenSet[int] = frozenset()
    generation: int = 0
    error: Optional[str] = None


def start_load(state: ControllerState, source: str) -> ControllerState:
    """Begin loading a new document; the previous index and expanded pages are dropped."""
    return replace(
        state,
        loading=True,
        source=source,
        index=DocumentIndex(source=source),
        expanded=frozenset(),
        generation=state.generation + 1,
        error=None
    )


def finish_load(state: ControllerState, generation: int, index: DocumentIndex) -> ControllerState:
    """Store a finished index, unless a newer load has been requested since."""
    if generation != state.generation:
        return state
    return replace(state, loading=False, index=index)


def fail_load(state: ControllerState, generation: int, error: str) -> ControllerState:
    """Record a failed load, unless a newer load has been requested since."""
    if generation != state.generation:
        return state
    return replace(
        state,
        loading=False,
        index=DocumentIndex(source=state.source or ""),
        error=error
    )


def change_query(state: ControllerState, query: str) -> ControllerState:
    return replace(state, query=query)


def toggle_page(state: ControllerState, page_number: int) -> ControllerState:
    """Flip a page between collapsed and expanded."""
    return replace(state, expanded=state.expanded ^ {page_number})


def build_view(state: ControllerState, snippet_builder: SnippetBuilder) -> SearchView:
    """
    Derive what the user sees from the current state.

    Args:
        state: Current session state
        snippet_builder: Renders each matching page

    Returns:
        SearchView with one PageView per matching page
    """
    results = []
    for page in query_pages(state.index, state.query):
        expanded = page.page_number in state.expanded
        mode = DisplayMode.EXPANDED if expanded else DisplayMode.COLLAPSED
        results.append(PageView(
            page_number=page.page_number,
            expanded=expanded,
            snippet=snippet_builder.render(page.text, state.query, mode)
        ))

    return SearchView(
        loading=state.loading,
        query=state.query,
        page_count=state.index.page_count,
        results=results,
        error=state.error
    )


class InteractionController:
    """Owns the session state and drives document loads."""

    def __init__(
        self,
        text_extractor: Optional[TextExtractor] = None,
        snippet_builder: Optional[SnippetBuilder] = None
    ):
        """
        Initialize InteractionController.

        Args:
            text_extractor: Loads documents (defaults to TextExtractor())
            snippet_builder: Renders matches (defaults to SnippetBuilder())
        """
        self.text_extractor = text_extractor or TextExtractor()
        self.snippet_builder = snippet_builder or SnippetBuilder()
        self.state = ControllerState()

    def begin_load(self, source: str) -> int:
        """
        Mark a new load as requested and return its generation.

        The previous index and expanded pages are dropped immediately, so the
        state reports the new source as loading before extraction starts.
        """
        self.state = start_load(self.state, source)
        generation = self.state.generation
        logger.info(
            f"Loading document {source} (generation {generation})",
            extra={"extra": {"source": source, "generation": generation}}
        )
        return generation

    async def run_load(self, source: str, generation: int) -> None:
        """
        Extract a document whose load was started with begin_load().

        The result is applied only if no newer load has been requested since.
        Failures are logged and leave an empty index; they are not raised or
        retried.

        Args:
            source: Path or http(s) URL of the document
            generation: Value returned by begin_load()
        """
        fields = {"source": source, "generation": generation}
        start_time = time.time()

        try:
            index = await self.text_extractor.load(source)
        except ExtractionError as e:
            if generation != self.state.generation:
                logger.info(f"Ignoring failure of superseded load {generation}: {e}", extra={"extra": fields})
                return
            logger.error(f"Failed to load {source}: {e}", extra={"extra": fields})
            self.state = fail_load(self.state, generation, str(e))
            return

        if generation != self.state.generation:
            logger.info(f"Discarding superseded load {generation} of {source}", extra={"extra": fields})
            return

        self.state = finish_load(self.state, generation, index)
        elapsed = time.time() - start_time
        logger.info(
            f"Loaded {source}: {index.page_count} pages indexed",
            extra={"extra": {**fields, "page_count": index.page_count, "elapsed": round(elapsed, 3)}}
        )

    async def load(self, source: str) -> None:
        """
        Load a document and make it searchable.

        If another load is requested before this one finishes, this one's
        result is discarded.

        Args:
            source: Path or http(s) URL of the document
        """
        await self.run_load(source, self.begin_load(source))

    def set_query(self, query: str) -> SearchView:
        self.state = change_query(self.state, query)
        return self.view()

    def toggle(self, page_number: int) -> SearchView:
        """
        Expand or collapse a page.

        Raises:
            KeyError: If the page is not part of the loaded document
        """
        self.state.index.get_page(page_number)
        self.state = toggle_page(self.state, page_number)
        return self.view()

    def view(self) -> SearchView:
        return build_view(self.state, self.snippet_builder)
