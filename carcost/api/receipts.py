"""Routes Justificatifs / Receipt API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.api.deps import get_scope
from carcost.database import get_db
from carcost.schemas.receipt import ReceiptCreate, ReceiptRead
from carcost.services.receipt_service import ReceiptService
from carcost.services.scoping import TenantScope

router = APIRouter()


@router.get("/", response_model=list[ReceiptRead])
async def list_receipts(
    vehicle_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    return await ReceiptService(db, scope).list_receipts(vehicle_id)


@router.get("/{receipt_id}", response_model=ReceiptRead)
async def get_receipt(
    receipt_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    receipt = await ReceiptService(db, scope).get(receipt_id)
    if receipt is None:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return receipt


@router.post("/", response_model=ReceiptRead, status_code=201)
async def create_receipt(
    data: ReceiptCreate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Enregistrer un justificatif déjà stocké / Register an already stored receipt."""
    receipt = await ReceiptService(db, scope).create(data)
    if receipt is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return receipt


@router.put("/{receipt_id}/expense/{expense_id}", response_model=ReceiptRead)
async def link_receipt(
    receipt_id: int,
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Rattacher à une dépense / Link to an expense."""
    receipt = await ReceiptService(db, scope).link_to_expense(receipt_id, expense_id)
    if receipt is None:
        raise HTTPException(status_code=404, detail="Receipt or expense not found")
    return receipt


@router.delete("/{receipt_id}", status_code=204)
async def delete_receipt(
    receipt_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    if not await ReceiptService(db, scope).delete(receipt_id):
        raise HTTPException(status_code=404, detail="Receipt not found")
