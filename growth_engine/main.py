import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from growth_engine.config import settings
from growth_engine.api.routes import health, presets, simulations, workspace

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Growth Scenario Engine", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(simulations.router, prefix="/api")
app.include_router(presets.router, prefix="/api")
app.include_router(workspace.router, prefix="/api")
