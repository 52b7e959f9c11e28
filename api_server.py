"""
FastAPI server for laundromat data enrichment
Exposes synchronous enrichment plus batch job submission and polling
"""

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from laundry_enrich import __version__
from laundry_enrich.api_jobs import router as enrich_router
from laundry_enrich.config import get_settings
from laundry_enrich.logging_utils import set_package_level, setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)
set_package_level(get_settings().log_level)

# Create FastAPI app
app = FastAPI(
    title="Laundromat Enrichment API",
    description="Clean, deduplicate and SEO-annotate laundromat listing CSV files",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(enrich_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint
    Returns: JSON with status
    """
    return {"status": "ok"}


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting enrichment API on 0.0.0.0:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
