"""
Serverless Function Entry Point

Exposes the dashboard server as a single serverless function. The TV refresh
loop is not started here: a function instance only lives for its requests,
so /dashboard/tv refreshes on demand instead.
"""

import sys
from pathlib import Path

# Ensure project root is in path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from backend.routers import ALL_ROUTERS
from backend.responses import install_error_handlers

# Create a lightweight app for serverless
app = FastAPI(
    title="Family Hub",
    description="Household dashboard API",
    version="1.0.0",
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "https://*.vercel.app",
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Register routers
for router in ALL_ROUTERS:
    app.include_router(router)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "service": "family-hub"}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


# Mangum adapter for AWS Lambda/Vercel
handler = Mangum(app, lifespan="off")
