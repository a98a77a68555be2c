from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from design_dna import __version__
from design_dna.api.v1 import router as v1_router
from design_dna.config import config
from design_dna.schemas import HealthResponse
from design_dna.utils.logging import get_logger

logger = get_logger()

app = FastAPI(
    title="Design DNA Backend",
    description="Color extraction and consensus palettes for design inspiration libraries",
    version=__version__
)

# Add CORS middleware with basic configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Design DNA Backend API",
        "version": __version__,
        "docs": "/docs"
    }


logger.info("Design DNA backend initialized", extra={"version": __version__})
