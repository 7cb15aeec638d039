"""
Clinical Algorithm Engine - FastAPI Application

Main application entry point with API endpoints for:
- Algorithm registry and static layout
- Interactive traversal sessions (graph view + wizard kept in sync)
- Decision summaries and PDF export
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Dict, Optional
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from algoflow import __version__
from algoflow.config import settings
from algoflow.core.graph import load_graph
from algoflow.core.layout import LayoutConfig, LayoutResult, compute_layout
from algoflow.core.reports import SummaryPDFGenerator
from algoflow.core.summary import SummaryExporter
from algoflow.data import get_definition, list_algorithms
from algoflow.models import (
    HealthResponse,
    AlgorithmInfo,
    AlgorithmListResponse,
    CreateSessionRequest,
    AdvanceRequest,
    NodeRequest,
    SessionStateResponse,
    ErrorResponse,
)
from algoflow.services import Session, SessionManager
from algoflow.utils import (
    get_logger,
    AlgorithmEngineError,
    ValidationError,
    SummaryError,
    ExportError,
)

logger = get_logger(__name__)

START_TIME = datetime.now()

# ---- In-memory storage ----
_sessions = SessionManager(get_definition)
_layouts: Dict[str, LayoutResult] = {}
_pdf_generator: Optional[SummaryPDFGenerator] = None


def get_pdf_generator() -> SummaryPDFGenerator:
    global _pdf_generator
    if _pdf_generator is None:
        _pdf_generator = SummaryPDFGenerator(output_dir=settings.report_output_dir)
    return _pdf_generator


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup → yield → shutdown."""
    logger.info(f"Clinical Algorithm Engine {__version__} starting, {len(list_algorithms())} algorithm(s) registered")
    yield
    _sessions.clear()
    logger.info("Clinical Algorithm Engine API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title="Clinical Algorithm Engine API",
    description="Interactive clinical decision algorithms with synchronised graph and wizard views",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Error Handling ----

def _status_for(exc: AlgorithmEngineError) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, SummaryError):
        return 409
    if isinstance(exc, ExportError):
        return 500
    return 400


@app.exception_handler(AlgorithmEngineError)
async def engine_error_handler(request: Request, exc: AlgorithmEngineError):
    status = _status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return JSONResponse(status_code=status, content=ErrorResponse(**exc.to_dict()).model_dump())


# ---- Utility Functions ----

def _get_session(session_id: str) -> Session:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return session


def _state(session: Session, applied: Optional[bool] = None) -> SessionStateResponse:
    return SessionStateResponse(**session.to_dict(), applied=applied)


# ---- API Endpoints ----

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        active_sessions=len(_sessions),
    )


@app.get("/api/v1/algorithms", response_model=AlgorithmListResponse, tags=["Algorithms"])
async def get_algorithms():
    """List the bundled algorithms."""
    return AlgorithmListResponse(algorithms=[AlgorithmInfo(**a) for a in list_algorithms()])


@app.get("/api/v1/algorithms/{algorithm_id}", tags=["Algorithms"])
async def get_algorithm(algorithm_id: str):
    """Full definition, including FAQ."""
    definition = get_definition(algorithm_id)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Algorithm not found: {algorithm_id}")
    return definition.to_dict()


@app.get("/api/v1/algorithms/{algorithm_id}/layout", tags=["Algorithms"])
async def get_algorithm_layout(algorithm_id: str):
    """Static node/edge geometry. Computed once per algorithm."""
    definition = get_definition(algorithm_id)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Algorithm not found: {algorithm_id}")

    if algorithm_id not in _layouts:
        _layouts[algorithm_id] = compute_layout(load_graph(definition), LayoutConfig.from_settings())
    return _layouts[algorithm_id].to_dict()


@app.post("/api/v1/sessions", response_model=SessionStateResponse, status_code=201, tags=["Sessions"])
async def create_session(request: CreateSessionRequest):
    """Start a traversal on a registered algorithm."""
    session = _sessions.create(request.algorithm_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Algorithm not found: {request.algorithm_id}")
    return _state(session)


@app.get("/api/v1/sessions/{session_id}", response_model=SessionStateResponse, tags=["Sessions"])
async def get_session(session_id: str):
    return _state(_get_session(session_id))


@app.delete("/api/v1/sessions/{session_id}", tags=["Sessions"])
async def delete_session(session_id: str):
    if not _sessions.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return {"session_id": session_id, "deleted": True}


@app.post("/api/v1/sessions/{session_id}/advance", response_model=SessionStateResponse, tags=["Traversal"])
async def advance(session_id: str, request: AdvanceRequest):
    """Follow an outgoing edge of the current node."""
    session = _get_session(session_id)
    applied = session.controller.advance(request.edge_id)
    return _state(session, applied)


@app.post("/api/v1/sessions/{session_id}/back", response_model=SessionStateResponse, tags=["Traversal"])
async def back(session_id: str):
    session = _get_session(session_id)
    applied = session.controller.back()
    return _state(session, applied)


@app.post("/api/v1/sessions/{session_id}/jump", response_model=SessionStateResponse, tags=["Traversal"])
async def jump(session_id: str, request: NodeRequest):
    """Breadcrumb click: rewind to a node on the path."""
    session = _get_session(session_id)
    applied = session.controller.jump_to(request.node_id)
    return _state(session, applied)


@app.post("/api/v1/sessions/{session_id}/select", response_model=SessionStateResponse, tags=["Traversal"])
async def select(session_id: str, request: NodeRequest):
    """Graph-view node click."""
    session = _get_session(session_id)
    applied = session.controller.graph_view.select_node(request.node_id)
    return _state(session, applied)


@app.post("/api/v1/sessions/{session_id}/reset", response_model=SessionStateResponse, tags=["Traversal"])
async def reset(session_id: str):
    session = _get_session(session_id)
    applied = session.controller.reset()
    return _state(session, applied)


@app.post("/api/v1/sessions/{session_id}/retry", response_model=SessionStateResponse, tags=["Traversal"])
async def retry(session_id: str):
    """'Try another path' from the summary screen."""
    session = _get_session(session_id)
    applied = session.controller.retry()
    return _state(session, applied)


@app.get(
    "/api/v1/sessions/{session_id}/summary",
    tags=["Summary"],
    responses={409: {"model": ErrorResponse}},
)
async def get_summary(session_id: str):
    """Decision summary; 409 until the traversal reaches an outcome."""
    session = _get_session(session_id)
    return session.controller.summary().to_dict()


@app.get(
    "/api/v1/sessions/{session_id}/summary/pdf",
    tags=["Summary"],
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download_summary_pdf(session_id: str):
    """Render the decision summary as a PDF download."""
    session = _get_session(session_id)
    report = await SummaryExporter(session.controller, get_pdf_generator()).export()

    return FileResponse(
        report.pdf_path,
        media_type="application/pdf",
        filename=os.path.basename(report.pdf_path),
    )


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
