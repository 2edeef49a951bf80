"""
CodeMatch API Server
Coding-partner matching for the Q&A forum.

Routers:
- /api/v1/match         match lifecycle, recommendations, scoring
- /api/v1/matchProfile  match profile management
- /api/v1/points        reputation points with daily caps
- /api/v1/health        deployment health
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from codematch import config
from codematch.health import router as health_router
from codematch.matching.admin import router as matching_router
from codematch.points.admin import router as points_router
from codematch.profiles.admin import router as profiles_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="CodeMatch API",
    description="Coding-partner matching, recommendations and reputation points",
    version=config.API_VERSION,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# ============================================
# Routers
# ============================================
app.include_router(health_router)
app.include_router(matching_router)
app.include_router(profiles_router)
app.include_router(points_router)


@app.get("/")
def root():
    return {
        "service": "CodeMatch API",
        "version": config.API_VERSION,
        "docs": "/docs",
    }
