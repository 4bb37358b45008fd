"""Document data models."""
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class TextFragment:
    """A run of text emitted by the PDF decoder, positioned on its baseline."""
    text: str
    y: float


@dataclass(frozen=True)
class PageRecord:
    """Extracted plain text of a single page."""
    page_number: int  # 1-indexed
    text: str


@dataclass(frozen=True)
class DocumentIndex:
    """Ordered per-page text of one loaded document."""
    source: str
    pages: Tuple[PageRecord, ...] = ()

    def __post_init__(self):
        for expected, page in enumerate(self.pages, start=1):
            if page.page_number != expected:
                raise ValueError(
                    f"Page numbers must be contiguous from 1, "
                    f"got {page.page_number} at position {expected}"
                )

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[PageRecord]:
        return iter(self.pages)

    def get_page(self, page_number: int) -> PageRecord:
        """
        Look up a page by its 1-indexed number.

        Raises:
            KeyError: If the page does not exist in this index
        """
        if not 1 <= page_number <= len(self.pages):
            raise KeyError(page_number)
        return self.pages[page_number - 1]
