"""Main entry point for the PDF page search API."""
import asyncio
import logging
from typing import Optional
from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import PORT, PDF_SOURCE, PDF_TITLE, CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from logger import setup_logging
from models.api import (
    LoadRequest, QueryRequest, Segment, PageResult, SearchResponse, StatusResponse
)
from models.search import SearchView
from services.interaction_controller import InteractionController

if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL)

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="PDF Page Search",
    description="Incremental full-text search over the pages of a PDF document",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
controller: InteractionController = InteractionController()
load_task: Optional[asyncio.Task] = None


@app.on_event("startup")
async def startup_event():
    """Start indexing the configured document, if any."""
    global load_task

    if not PDF_SOURCE:
        logger.info("No PDF_SOURCE configured, waiting for POST /document")
        return

    logger.info(f"Indexing configured document {PDF_SOURCE}")
    load_task = asyncio.create_task(controller.load(PDF_SOURCE))


def _to_response(view: SearchView) -> SearchResponse:
    return SearchResponse(
        query=view.query,
        loading=view.loading,
        page_count=view.page_count,
        match_count=view.match_count,
        no_results=view.no_results,
        error=view.error,
        results=[
            PageResult(
                page_number=page.page_number,
                expanded=page.expanded,
                text=page.snippet.text,
                leading_ellipsis=page.snippet.leading_ellipsis,
                trailing_ellipsis=page.snippet.trailing_ellipsis,
                segments=[
                    Segment(text=segment.text, highlighted=segment.highlighted)
                    for segment in page.snippet.segments
                ]
            )
            for page in view.results
        ]
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "PDF Page Search API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "pdf-page-search",
        "version": "1.0.0"
    }


@app.get("/status", response_model=StatusResponse)
async def status() -> StatusResponse:
    """Loading state of the current document."""
    state = controller.state
    return StatusResponse(
        title=PDF_TITLE,
        source=state.source,
        loading=state.loading,
        page_count=state.index.page_count,
        error=state.error
    )


@app.post("/document", response_model=StatusResponse, status_code=202)
async def load_document(request: LoadRequest, background_tasks: BackgroundTasks) -> StatusResponse:
    """
    Replace the current document.

    The previous document is dropped before responding; indexing runs after
    the response is sent. Poll /status until loading is false.
    """
    if not request.source or not request.source.strip():
        raise HTTPException(status_code=400, detail="Source field is required and cannot be empty")

    source = request.source.strip()
    generation = controller.begin_load(source)
    background_tasks.add_task(controller.run_load, source, generation)
    return await status()


@app.post("/query", response_model=SearchResponse)
async def query_endpoint(request: QueryRequest) -> SearchResponse:
    """Set the search term and return the matching pages."""
    try:
        return _to_response(controller.set_query(request.query))
    except Exception as e:
        logger.error(f"Unexpected error processing query: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


@app.get("/results", response_model=SearchResponse)
async def results() -> SearchResponse:
    """Matching pages for the current search term."""
    return _to_response(controller.view())


@app.post("/pages/{page_number}/toggle", response_model=SearchResponse)
async def toggle_page(page_number: int) -> SearchResponse:
    """Switch a page between snippet and full-page display."""
    try:
        return _to_response(controller.toggle(page_number))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Page {page_number} not found")


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting PDF Page Search API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
