from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from invoicedash.config import settings
from invoicedash.database import db
from invoicedash.cache import get_view_cache
from invoicedash.repositories.base import PersistenceError
from invoicedash.api import auth, invoices, query

# Setup Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.connect()
    yield
    await db.close()
    get_view_cache().close()

app = FastAPI(
    title="Invoice Dashboard API",
    description="Invoice mutations and sign-in for the dashboard",
    version="1.0.0",
    lifespan=lifespan
)

# CORS Config
origins = [
    "http://localhost:3000",
    "http://localhost:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router Registration
app.include_router(auth.router)
app.include_router(invoices.router)
app.include_router(query.router)

@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    # Storage details stay in the log
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse({"error": "Database Error"}, status_code=500)

# Health Check
@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

if __name__ == "__main__":
    uvicorn.run("invoicedash.main:app", host="0.0.0.0", port=8000, reload=True)
