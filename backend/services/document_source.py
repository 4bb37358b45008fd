"""Document access through PyMuPDF."""
import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Protocol
import fitz  # PyMuPDF
import httpx

from models.document import TextFragment
from config import DOWNLOAD_TIMEOUT

logger = logging.getLogger(__name__)

# MuPDF is not thread-safe: every fitz call goes through this one worker,
# so overlapping loads never decode in parallel.
_mupdf_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mupdf")


async def run_in_mupdf_thread(func, *args, **kwargs):
    """Run a blocking PyMuPDF call on the shared MuPDF worker thread."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_mupdf_executor, functools.partial(func, *args, **kwargs))


class DocumentHandle(Protocol):
    """What the text extractor needs from an opened document."""

    @property
    def page_count(self) -> int:
        ...

    async def get_text_fragments(self, page_number: int) -> List[TextFragment]:
        ...

    async def close(self) -> None:
        ...


class PyMuPDFDocument:
    """Opened PDF exposing its pages as streams of positioned text fragments."""

    def __init__(self, pdf_document: fitz.Document, source: str):
        self.pdf_document = pdf_document
        self.source = source

    @property
    def page_count(self) -> int:
        return self.pdf_document.page_count

    async def get_text_fragments(self, page_number: int) -> List[TextFragment]:
        """
        Decode one page into text fragments in content-stream order.

        Args:
            page_number: 1-indexed page number

        Returns:
            List of fragments, one per text span
        """
        return await run_in_mupdf_thread(self._read_fragments, page_number)

    def _read_fragments(self, page_number: int) -> List[TextFragment]:
        page = self.pdf_document[page_number - 1]
        page_dict = page.get_text("dict")

        fragments = []
        for block in page_dict.get("blocks", []):
            # Type 1 blocks are images
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    fragments.append(TextFragment(text=span["text"], y=span["origin"][1]))

        return fragments

    async def close(self) -> None:
        await run_in_mupdf_thread(self.pdf_document.close)


class DocumentSource:
    """Opens documents from a filesystem path or an http(s) URL."""

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize DocumentSource.

        Args:
            timeout: Download timeout in seconds (defaults to DOWNLOAD_TIMEOUT)
            transport: httpx transport for downloads (defaults to the network)
        """
        self.timeout = timeout if timeout is not None else DOWNLOAD_TIMEOUT
        self.transport = transport

    @staticmethod
    def is_url(reference: str) -> bool:
        return reference.lower().startswith(("http://", "https://"))

    async def open(self, reference: str) -> PyMuPDFDocument:
        """
        Open a document by reference.

        Args:
            reference: Path to a local PDF or http(s) URL

        Returns:
            Opened document handle; caller must close it

        Raises:
            httpx.HTTPError: If the download fails
            RuntimeError: If PyMuPDF cannot open the document
        """
        if self.is_url(reference):
            data = await self._download(reference)
            pdf_document = await run_in_mupdf_thread(fitz.open, stream=data, filetype="pdf")
        else:
            pdf_document = await run_in_mupdf_thread(fitz.open, reference)

        logger.info(f"Opened {reference}: {pdf_document.page_count} pages")
        return PyMuPDFDocument(pdf_document, reference)

    async def _download(self, url: str) -> bytes:
        logger.debug(f"Downloading {url}")
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport
        ) as client:
            response = await client.get(url)
            response.raise_for_status()

        logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
        return response.content
