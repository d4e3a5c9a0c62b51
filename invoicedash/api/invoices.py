from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from invoicedash.actions.invoices import InvoiceActions
from invoicedash.api.auth import User, get_current_active_user
from invoicedash.cache import ViewCache, get_view_cache
from invoicedash.config import settings
from invoicedash.database import Database, get_db
from invoicedash.models.state import ActionOutcome, Redirect

router = APIRouter(prefix="/dashboard/invoices", tags=["Invoices"])

async def get_invoice_actions(
    database: Database = Depends(get_db),
    views: ViewCache = Depends(get_view_cache)
) -> InvoiceActions:
    return InvoiceActions(database.invoices, views)

def outcome_response(outcome: ActionOutcome) -> Response:
    """Redirects become 303s; failed states go back to the form as JSON."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.path, status_code=303)
    status_code = 422 if outcome.errors else 500
    return JSONResponse(outcome.to_response(), status_code=status_code)

@router.get("", response_model=List[Dict[str, Any]])
async def list_invoices(
    database: Database = Depends(get_db),
    views: ViewCache = Depends(get_view_cache),
    current_user: User = Depends(get_current_active_user)
):
    async def load():
        rows = await database.invoices.list_with_customers()
        return [row.model_dump(mode="json") for row in rows]

    return await views.get_or_load(settings.INVOICES_PATH, load)

@router.post("")
async def create_invoice(
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
    current_user: User = Depends(get_current_active_user)
):
    form = await request.form()
    return outcome_response(await actions.create_invoice(form))

@router.get("/{invoice_id}/edit")
async def edit_invoice_form(
    invoice_id: str,
    database: Database = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    invoice = await database.invoices.get_form(invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    customers = await database.customers.list_fields()
    return {"invoice": invoice, "customers": customers}

@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: str,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
    current_user: User = Depends(get_current_active_user)
):
    form = await request.form()
    update = actions.bind_update_invoice(invoice_id)
    return outcome_response(await update(None, form))

@router.post("/{invoice_id}/delete", status_code=204)
async def delete_invoice(
    invoice_id: str,
    actions: InvoiceActions = Depends(get_invoice_actions),
    current_user: User = Depends(get_current_active_user)
):
    state = await actions.delete_invoice(invoice_id)
    if state is not None:
        return JSONResponse(state.to_response(), status_code=500)
    return Response(status_code=204)
