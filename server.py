"""
HTTP API for the CSV analyst.

Endpoints:
  POST /api/analyze  : question + CSV text → markdown answer (+ chart)
  POST /api/preview  : CSV text → columns, row count, first rows
  GET  /health       : liveness and configured provider

Usage:
    uvicorn server:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from analysis_flow.orchestrator import NO_DATA_MESSAGE, AnalysisOrchestrator
from dto.api import DEFAULT_FILE_NAME, AnalyzeRequestBody, PreviewRequestBody
from dto.dataset import Dataset
from errors import AnalysisError
from settings import Settings
from utils.payload import preview_dataset

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CSV Analyst API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator(Settings.from_env())


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.warning("Request to %s failed (%d): %s", request.url.path, exc.status_code, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected malformed body on %s: %s", request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body."}, status_code=400)


@app.get("/health")
async def health(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    return {"status": "ok", "provider": orchestrator.settings.provider}


@app.post("/api/analyze")
async def analyze(
    body: AnalyzeRequestBody,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    # The completion call blocks; keep it off the event loop
    result = await run_in_threadpool(orchestrator.analyze, body.to_request())
    return JSONResponse(result.to_body(), status_code=result.status_code)


@app.post("/api/preview")
async def preview(body: PreviewRequestBody) -> JSONResponse:
    if not body.data or not body.data.strip():
        return JSONResponse({"error": NO_DATA_MESSAGE}, status_code=400)

    dataset = Dataset(name=body.file_name or DEFAULT_FILE_NAME, raw_text=body.data)
    result = preview_dataset(dataset)
    return JSONResponse(
        {
            "fileName": result.file_name,
            "columns": result.columns,
            "rows": result.rows,
            "preview": result.preview,
        }
    )
