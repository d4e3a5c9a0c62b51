import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from invoicedash.config import settings
from invoicedash.database import Database, get_db
from invoicedash.repositories.base import PersistenceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Query"])

@router.get("/query")
async def query_invoices(database: Database = Depends(get_db)):
    """Invoices of exactly QUERY_AMOUNT_THRESHOLD cents, with customer names."""
    try:
        rows = await database.invoices.list_by_amount(settings.QUERY_AMOUNT_THRESHOLD)
    except PersistenceError as e:
        logger.error(f"Invoice query failed: {e}")
        return JSONResponse({"error": "Failed to fetch invoices."}, status_code=500)
    return [row.model_dump() for row in rows]
