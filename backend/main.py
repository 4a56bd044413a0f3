"""
Family Hub dashboard server

This is the main entry point for the server that exposes the dashboard
screens as JSON view models.

Architecture:
- FastAPI handles HTTP routing and request/response validation
- Pydantic schemas validate request bodies
- Screens hold the fetched lists and all view logic
- The household REST API (an external service) provides persistence

Run with:
    uvicorn backend.main:app --reload --port 8000

Or:
    python -m backend.main
"""

import logging
import sys
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from backend.routers import ALL_ROUTERS
from backend.dependencies import get_config, get_session, get_tv_dashboard
from backend.responses import install_error_handlers

logger = logging.getLogger("familyhub.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: restore the session, start the TV refresh loop
    - Shutdown: stop the refresh loop
    """
    config = get_config()
    session = get_session()
    logger.info(f"Config loaded from: {config.config_dir}")
    logger.info(f"Household API: {config.get_api_base_url()}")
    logger.info("Session: %s", "restored" if session.is_authenticated else "login required")

    tv = get_tv_dashboard()
    tv.start_auto_refresh()

    yield

    tv.stop_auto_refresh(timeout=5)
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Family Hub",
    description="""
    Household dashboard over the Family Hub REST API.

    ## Screens

    - **Calendar**: Month grid merging events, tasks, homework and meals
    - **Tasks / Homework**: Lists with a completed/pending toggle
    - **Meals**: Week planner around a selected day
    - **Classes**: Lessons and attendance
    - **Family**: Members and their colors
    - **Leaderboard**: Points, ranks and podium
    - **Kanban**: Team board
    - **Dashboard**: Auto-refreshing TV view
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include routers
for router in ALL_ROUTERS:
    app.include_router(router)


@app.get("/")
def root():
    """Basic info and available screens."""
    return {
        "name": "Family Hub",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "session": "/session",
            "calendar": "/calendar/month",
            "tasks": "/tasks",
            "homework": "/homework",
            "meals": "/meals",
            "classes": "/classes",
            "family": "/family",
            "leaderboard": "/leaderboard",
            "kanban": "/kanban",
            "dashboard": "/dashboard/tv",
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint for monitoring."""
    config = get_config()
    return {
        "status": "healthy",
        "api_base_url": config.get_api_base_url(),
        "authenticated": get_session().is_authenticated,
    }


# Allow running directly with: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
