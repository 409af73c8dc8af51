from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from fitting_room import __version__
from fitting_room.config import CORS_ORIGINS, logger

from .routers import router

STATIC_DIR = Path(__file__).parent / "static"

# Initialize FastAPI application
app = FastAPI(
    title="AI Virtual Try-On",
    description="Upload a photo and a clothing item to see how it looks on you",
    version=__version__,
)

app.include_router(router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    """Serve the single-page try-on form."""
    return FileResponse(STATIC_DIR / "index.html")


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


logger.info("Virtual Try-On app initialized successfully")
