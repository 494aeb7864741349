"""Batch picking FastAPI application.

Web server for the picker's handheld: processes session commands
synchronously via HTTP inside the Picking domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from picking.domain import picking
from picking.utils.logging import configure_logging

configure_logging()

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
picking.init()


def _seed_demo_data() -> None:
    """Load the demo batch and catalog so a fresh server has something to pick."""
    from picking.catalog import get_catalog
    from picking.catalog.memory_catalog import demo_products
    from picking.orders import get_order_source
    from picking.orders.memory_source import DEMO_BATCH_ID, demo_orders

    get_order_source().load_batch(DEMO_BATCH_ID, demo_orders())
    catalog = get_catalog()
    for product in demo_products():
        catalog.register(product)


if os.environ.get("SEED_DEMO_DATA", "1") != "0":
    _seed_demo_data()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Batch Picking API",
    description="Consolidated batch picking and shortage-aware packing",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Picking domain context for every pick-session request."""
    if request.url.path.startswith("/pick-sessions"):
        with picking.domain_context():
            return await call_next(request)
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from picking.api.routes import pick_session_router  # noqa: E402

app.include_router(pick_session_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"picking": {"name": picking.name}}})
