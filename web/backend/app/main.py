from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sokoban.levels import level_names

from .api import games, health
from .services.session import session_manager


# ---------------------------------------------------------------------------
# Lifespan: start TTL cleanup task on boot, cancel on shutdown
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    print(f"[startup] {len(level_names())} built-in level(s): {', '.join(level_names())}")

    task = asyncio.create_task(session_manager.cleanup_loop())
    try:
        yield
    finally:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Sokoban API",
    description="Backend game API for playing Sokoban levels over HTTP.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow the Vite dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(games.router,  prefix="/api")
