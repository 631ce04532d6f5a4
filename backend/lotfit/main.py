from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lotfit.config import settings
from lotfit.api.routes import router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Lot Fit Engine",
    description=(
        "Test a housing form against a lot and a zoning ruleset. "
        "Returns the buildable envelope, building placement, massing "
        "metrics, parking layout, violations and the binding constraint."
    ),
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Lot Fit Engine",
        "version": settings.app_version,
        "endpoints": {
            "api_docs": "/docs",
            "health": "/health",
            "lots": "GET /api/catalog/lots",
            "rulesets": "GET /api/catalog/rulesets",
            "presets": "GET /api/catalog/presets",
            "defaults": "GET /api/v1/defaults",
            "match_lot": "POST /api/v1/lots/match",
            "evaluate": "POST /api/v1/evaluate",
            "compare": "POST /api/v1/compare",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "version": settings.app_version}
