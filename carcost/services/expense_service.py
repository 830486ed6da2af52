"""
Service registre des dépenses / Expense ledger service.

Les dépenses miroir (référencées par un plein) ne se modifient et ne se
suppriment que via le plein.
Shadow expenses (referenced by a fuel entry) are only changed or removed through
their fuel entry.
"""

import datetime
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import Expense, ExpenseCategory
from carcost.models.fuel_entry import FuelEntry
from carcost.models.receipt import Receipt
from carcost.models.vehicle import Vehicle
from carcost.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from carcost.services.errors import LinkedExpenseError, ValidationFailure
from carcost.services.scoping import TenantScope

logger = logging.getLogger(__name__)


def _to_read(expense: Expense, vehicle: Vehicle, fuel_entry_id: int | None) -> ExpenseRead:
    return ExpenseRead(
        id=expense.id,
        category=expense.category,
        amount=float(expense.amount),
        date=expense.date,
        notes=expense.notes,
        vehicle_id=expense.vehicle_id,
        vehicle_make=vehicle.make,
        vehicle_model=vehicle.model,
        fuel_entry_id=fuel_entry_id,
    )


class ExpenseService:
    def __init__(self, db: AsyncSession, scope: TenantScope):
        self.db = db
        self.scope = scope

    def _query(self):
        # Plein propriétaire éventuel via jointure externe / Owning fuel entry via outer join
        return (
            self.scope.expenses()
            .add_columns(Vehicle, FuelEntry.id)
            .outerjoin(FuelEntry, FuelEntry.linked_expense_id == Expense.id)
        )

    async def _load(self, expense_id: int):
        result = await self.db.execute(self._query().where(Expense.id == expense_id))
        row = result.one_or_none()
        if row is None:
            logger.warning("Expense %s not available to user %s", expense_id, self.scope.user_id)
        return row

    async def list_expenses(
        self,
        vehicle_id: int | None = None,
        category: ExpenseCategory | None = None,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> list[ExpenseRead]:
        """Lister les dépenses, plus récentes d'abord / List expenses, newest first."""
        query = self._query()
        if vehicle_id is not None:
            query = query.where(Expense.vehicle_id == vehicle_id)
        if category is not None:
            query = query.where(Expense.category == category)
        if start_date is not None:
            query = query.where(Expense.date >= start_date)
        if end_date is not None:
            query = query.where(Expense.date <= end_date)
        query = query.order_by(Expense.date.desc(), Expense.id.desc())
        result = await self.db.execute(query)
        return [_to_read(expense, vehicle, fuel_id) for expense, vehicle, fuel_id in result.all()]

    async def get(self, expense_id: int) -> ExpenseRead | None:
        row = await self._load(expense_id)
        if row is None:
            return None
        expense, vehicle, fuel_id = row
        return _to_read(expense, vehicle, fuel_id)

    async def create(self, data: ExpenseCreate) -> ExpenseRead | None:
        if data.category is ExpenseCategory.FUEL:
            raise ValidationFailure("category", "Fuel costs must be recorded as fuel entries")
        vehicle = await self.scope.get_vehicle(self.db, data.vehicle_id)
        if vehicle is None:
            logger.warning("Vehicle %s not available to user %s", data.vehicle_id, self.scope.user_id)
            return None

        expense = Expense(**data.model_dump())
        self.db.add(expense)
        await self.db.flush()
        logger.info("Expense %s created for vehicle %s", expense.id, vehicle.id)
        return _to_read(expense, vehicle, None)

    async def update(self, expense_id: int, data: ExpenseUpdate) -> ExpenseRead | None:
        row = await self._load(expense_id)
        if row is None:
            return None
        expense, vehicle, fuel_id = row
        if fuel_id is not None:
            raise LinkedExpenseError(expense.id, fuel_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("category") is ExpenseCategory.FUEL:
            raise ValidationFailure("category", "Fuel costs must be recorded as fuel entries")

        new_vehicle_id = changes.get("vehicle_id")
        if new_vehicle_id is not None and new_vehicle_id != expense.vehicle_id:
            # Le nouveau véhicule doit aussi appartenir à l'utilisateur / New vehicle must be owned too
            vehicle = await self.scope.get_vehicle(self.db, new_vehicle_id)
            if vehicle is None:
                logger.warning("Vehicle %s not available to user %s", new_vehicle_id, self.scope.user_id)
                return None
            # Le justificatif reste sur l'ancien véhicule : on le détache /
            # The receipt stays on the old vehicle: detach it
            attached = await self.db.execute(select(Receipt).where(Receipt.expense_id == expense.id))
            for receipt in attached.scalars().all():
                receipt.expense_id = None
                logger.info("Receipt %s detached from moved expense %s", receipt.id, expense.id)

        for key, value in changes.items():
            setattr(expense, key, value)
        await self.db.flush()
        return _to_read(expense, vehicle, None)

    async def delete(self, expense_id: int) -> bool:
        row = await self._load(expense_id)
        if row is None:
            return False
        expense, _, fuel_id = row
        if fuel_id is not None:
            raise LinkedExpenseError(expense.id, fuel_id)

        await self.db.delete(expense)
        await self.db.flush()
        logger.info("Expense %s deleted", expense_id)
        return True
