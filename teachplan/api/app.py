#!/usr/bin/env python3
"""
REST API for achievement-standard extraction.

Wires the PyMuPDF and Bedrock adapters into the StandardsEngine and
exposes it over FastAPI.
"""
import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram

from teachplan import __version__
from teachplan.api.routes.health import create_health_router
from teachplan.api.routes.standards import create_standards_router
from teachplan.core.extraction import StandardsEngine

logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "teachplan_api_requests_total", "Total API requests", [
        "method", "endpoint", "status"])
REQUEST_DURATION = Histogram(
    "teachplan_api_request_duration_seconds",
    "Request duration")
STANDARDS_EXTRACTED = Counter(
    "teachplan_standards_extracted_total", "Standards returned to callers")
CHUNKS_FAILED = Counter(
    "teachplan_chunk_failures_total", "Chunk extractions that failed")


class StandardsAPI:
    """Standards extraction API using the core engine with dependency injection"""

    def __init__(
        self,
        engine: Optional[StandardsEngine] = None,
        pdf_adapter=None,
        llm_adapter=None,
    ):
        """Initialize API with dependency injection.

        Args:
            engine: Prebuilt engine (adapters are ignored when given)
            pdf_adapter: PDF processing adapter (default: PyMuPDFAdapter)
            llm_adapter: LLM adapter (default: BedrockAdapter)
        """
        if engine is None:
            if pdf_adapter is None:
                from teachplan.adapters.pdf import PyMuPDFAdapter
                pdf_adapter = PyMuPDFAdapter()
            if llm_adapter is None:
                from teachplan.adapters.llm import BedrockAdapter
                llm_adapter = BedrockAdapter()
            engine = StandardsEngine(llm=llm_adapter, pdf=pdf_adapter)
        self.engine = engine

        self.start_time = time.time()

        self.app = FastAPI(
            title="Teaching Plan Standards API",
            description="Extracts achievement standards from curriculum documents",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        """Setup API middleware"""
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @self.app.middleware("http")
        async def log_requests(request, call_next):
            start_time = time.time()
            response = await call_next(request)
            process_time = time.time() - start_time

            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code,
            ).inc()
            REQUEST_DURATION.observe(process_time)

            logger.info(
                f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
            )
            return response

    def _setup_routes(self):
        """Setup API routes"""
        @self.app.get("/")
        async def root():
            return {
                "service": "Teaching Plan Standards API",
                "version": __version__,
                "status": "operational",
                "docs": "/docs",
            }

        self.app.include_router(create_health_router(start_time=self.start_time))
        self.app.include_router(create_standards_router(
            self.engine,
            extracted_counter=STANDARDS_EXTRACTED,
            failed_chunks_counter=CHUNKS_FAILED,
        ))


def create_app(engine: Optional[StandardsEngine] = None) -> FastAPI:
    """Build the FastAPI application."""
    return StandardsAPI(engine=engine).app


def main(host: str = "0.0.0.0", port: int = 8000):
    """Run the API with uvicorn."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
