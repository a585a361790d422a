from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
import logging

from .api.websocket import router as timers_router
from .core.config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

settings = get_settings()
app = FastAPI(title="pantrypal", version="0.1.0", description="Cooking timers for the recipe app")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes BEFORE static files mount
app.include_router(timers_router)

@app.get("/api/health")
async def health_check():
    return {"status": "ok", "message": "pantrypal API is running", "tick_interval_sec": settings.tick_interval_sec}

# Serve the built frontend when present (this should be LAST)
if Path(settings.static_dir).is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
