"""FastAPI application setup and static file serving for the pollen feed."""

from pathlib import Path
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Pollen Feed")

_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Serve /static files
app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")

# Serve index.html at "/"; the page reads date/categoryCodes/interval/noCache itself
@app.get("/")
def serve_index():
    """Serve the gauge page."""
    return FileResponse(_STATIC_DIR / "index.html")


# API routes
app.include_router(api_router, prefix="/v1")
