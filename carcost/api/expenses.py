"""Routes Dépenses / Expense ledger API routes."""

import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.api.deps import get_scope
from carcost.database import get_db
from carcost.models.expense import ExpenseCategory
from carcost.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from carcost.services.expense_service import ExpenseService
from carcost.services.scoping import TenantScope

router = APIRouter()


@router.get("/", response_model=list[ExpenseRead])
async def list_expenses(
    vehicle_id: int | None = None,
    category: ExpenseCategory | None = None,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Lister les dépenses / List expenses."""
    return await ExpenseService(db, scope).list_expenses(vehicle_id, category, start_date, end_date)


@router.get("/{expense_id}", response_model=ExpenseRead)
async def get_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    expense = await ExpenseService(db, scope).get(expense_id)
    if expense is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("/", response_model=ExpenseRead, status_code=201)
async def create_expense(
    data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Créer une dépense / Create expense."""
    expense = await ExpenseService(db, scope).create(data)
    if expense is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return expense


@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Modifier une dépense / Update expense."""
    expense = await ExpenseService(db, scope).update(expense_id, data)
    if expense is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.delete("/{expense_id}", status_code=204)
async def delete_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Supprimer une dépense / Delete expense."""
    if not await ExpenseService(db, scope).delete(expense_id):
        raise HTTPException(status_code=404, detail="Expense not found")
