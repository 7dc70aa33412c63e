"""FastAPI application setup for the voice weather service."""

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import router as api_router, unrouted_method_handler

app = FastAPI(title="Voice Weather")
app.add_exception_handler(StarletteHTTPException, unrouted_method_handler)


@app.get("/healthz")
def healthz():
    """Liveness probe; does not call the weather provider."""
    return {"ok": True}


# API routes
app.include_router(api_router, prefix="/api")
