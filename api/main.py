"""
FastAPI application for the Project Creation Wizard development service.
Serves the project endpoints the wizard's REST client expects, so the
wizard can be run locally without a production project service.
"""

import sys
import os
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from api.routes import projects
from common import logger as wizard_logger

service_logger = wizard_logger.get_service_logger()

app = FastAPI(
    title="Project Creation Wizard Development Service",
    description="In-memory project service for local development of the wizard",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS origins from environment variable
allowed_origins_env = os.getenv("ALLOWED_ORIGINS")

if allowed_origins_env == "*":
    configured_origins = ["*"]
elif allowed_origins_env:
    configured_origins = [origin.strip() for origin in allowed_origins_env.split(',') if origin.strip()]
else:
    service_logger.warning("ALLOWED_ORIGINS environment variable not set or empty. Using default dev origins.")
    configured_origins = [
        "http://localhost:8501",
        "http://127.0.0.1:8501",
    ]

service_logger.info(f"Configuring CORS with origins: {configured_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=configured_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(projects.router, tags=["projects"])


@app.get("/")
async def root():
    """Root endpoint providing API information."""
    return {
        "message": "Project Creation Wizard Development Service",
        "version": "1.0.0",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080, reload=False)
