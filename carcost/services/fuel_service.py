"""
Service pleins / recharges / Fuel and charging entry service.

Chaque plein possède exactement une dépense miroir (catégorie FUEL) dont le
montant et la date suivent ceux du plein. Les deux lignes sont écrites dans la
transaction de la requête.
Every fuel entry owns exactly one shadow expense (FUEL category) whose amount
and date follow the entry. Both rows are written in the request transaction.
"""

import datetime
import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import Expense, ExpenseCategory
from carcost.models.fuel_entry import EnergyType, FuelEntry
from carcost.models.vehicle import Vehicle
from carcost.schemas.common import today_utc
from carcost.schemas.fuel import FuelEfficiencyRead, FuelEntryCreate, FuelEntryRead, FuelEntryUpdate
from carcost.services.efficiency import EfficiencyCalculator
from carcost.services.errors import ValidationFailure
from carcost.services.scoping import TenantScope

logger = logging.getLogger(__name__)


def fuel_note(energy_type: EnergyType, amount: Decimal) -> str:
    """Libellé de la dépense miroir / Shadow expense note."""
    quantity = f"{Decimal(str(amount)).normalize():f}"
    if energy_type is EnergyType.ELECTRICITY:
        return f"Charging session: {quantity} kWh"
    label = "Diesel" if energy_type is EnergyType.DIESEL else "Gasoline"
    return f"{label} fill-up: {quantity}L"


def _check_values(amount: Decimal | None, cost: Decimal | None, date: datetime.date | None):
    # Rejet avant toute écriture / Reject before any write
    if amount is not None and amount <= 0:
        raise ValidationFailure("amount", "Amount must be greater than 0")
    if cost is not None and cost <= 0:
        raise ValidationFailure("cost", "Cost must be greater than 0")
    if date is not None and date > today_utc():
        raise ValidationFailure("date", "Date cannot be in the future")


def to_read(entry: FuelEntry, vehicle: Vehicle) -> FuelEntryRead:
    """Vue composée plein + véhicule / Composed entry + vehicle view."""
    amount = Decimal(str(entry.amount))
    cost = Decimal(str(entry.cost))
    return FuelEntryRead(
        id=entry.id,
        energy_type=entry.energy_type,
        energy_type_display=entry.energy_type.value,
        amount=float(amount),
        unit=entry.energy_type.unit,
        cost=float(cost),
        odometer=entry.odometer,
        date=entry.date,
        vehicle_id=entry.vehicle_id,
        vehicle_make=vehicle.make,
        vehicle_model=vehicle.model,
        vehicle_energy_class=vehicle.energy_class,
        linked_expense_id=entry.linked_expense_id,
        cost_per_unit=float(round(cost / amount, 2)) if amount > 0 else 0,
    )


class FuelService:
    """Pleins et dépenses miroir d'un utilisateur / A user's fuel entries and shadow expenses."""

    def __init__(self, db: AsyncSession, scope: TenantScope):
        self.db = db
        self.scope = scope

    def _query(self):
        return self.scope.fuel_entries().add_columns(Vehicle)

    async def _load(self, entry_id: int):
        """(plein, véhicule) ou None / (entry, vehicle) or None."""
        result = await self.db.execute(self._query().where(FuelEntry.id == entry_id))
        row = result.one_or_none()
        if row is None:
            # Absent ou autre utilisateur : même réponse / Missing or foreign: same outcome
            logger.warning("Fuel entry %s not available to user %s", entry_id, self.scope.user_id)
        return row

    async def _linked_expense(self, entry: FuelEntry) -> Expense | None:
        # Lignes historiques sans lien tolérées / Legacy rows without a link are tolerated
        if entry.linked_expense_id is None:
            return None
        return await self.db.get(Expense, entry.linked_expense_id)

    async def list_entries(
        self,
        vehicle_id: int | None = None,
        energy_type: EnergyType | None = None,
        start_date: datetime.date | None = None,
        end_date: datetime.date | None = None,
    ) -> list[FuelEntryRead]:
        """Lister les pleins / List fuel entries, newest first."""
        query = self._query()
        if vehicle_id is not None:
            query = query.where(FuelEntry.vehicle_id == vehicle_id)
        if energy_type is not None:
            query = query.where(FuelEntry.energy_type == energy_type)
        if start_date is not None:
            query = query.where(FuelEntry.date >= start_date)
        if end_date is not None:
            query = query.where(FuelEntry.date <= end_date)
        query = query.order_by(FuelEntry.date.desc(), FuelEntry.odometer.desc())
        result = await self.db.execute(query)
        return [to_read(entry, vehicle) for entry, vehicle in result.all()]

    async def get(self, entry_id: int) -> FuelEntryRead | None:
        row = await self._load(entry_id)
        return to_read(*row) if row is not None else None

    async def create(self, data: FuelEntryCreate) -> FuelEntryRead | None:
        """Créer un plein et sa dépense miroir / Create an entry and its shadow expense."""
        _check_values(data.amount, data.cost, data.date)
        vehicle = await self.scope.get_vehicle(self.db, data.vehicle_id)
        if vehicle is None:
            logger.warning("Vehicle %s not available to user %s", data.vehicle_id, self.scope.user_id)
            return None

        # Dépense d'abord : son id est requis par la FK / Expense first: its id feeds the FK
        expense = Expense(
            vehicle_id=vehicle.id,
            category=ExpenseCategory.FUEL,
            amount=data.cost,
            date=data.date,
            notes=fuel_note(data.energy_type, data.amount),
        )
        self.db.add(expense)
        await self.db.flush()

        entry = FuelEntry(
            vehicle_id=vehicle.id,
            energy_type=data.energy_type,
            amount=data.amount,
            cost=data.cost,
            odometer=data.odometer,
            date=data.date,
            linked_expense_id=expense.id,
        )
        self.db.add(entry)
        await self.db.flush()

        logger.info("Fuel entry %s created for vehicle %s (expense %s)", entry.id, vehicle.id, expense.id)
        return to_read(entry, vehicle)

    async def update(self, entry_id: int, data: FuelEntryUpdate) -> FuelEntryRead | None:
        """Mise à jour partielle, dépense miroir resynchronisée / Sparse update, shadow expense resynced."""
        changes = data.model_dump(exclude_unset=True)
        _check_values(changes.get("amount"), changes.get("cost"), changes.get("date"))

        row = await self._load(entry_id)
        if row is None:
            return None
        entry, vehicle = row

        for key, value in changes.items():
            setattr(entry, key, value)

        expense = await self._linked_expense(entry)
        if expense is not None:
            expense.amount = entry.cost
            expense.date = entry.date
            if "energy_type" in changes or "amount" in changes:
                expense.notes = fuel_note(entry.energy_type, entry.amount)

        await self.db.flush()
        logger.info("Fuel entry %s updated (%s)", entry.id, ", ".join(sorted(changes)) or "no changes")
        return to_read(entry, vehicle)

    async def delete(self, entry_id: int) -> bool:
        """Supprimer le plein et sa dépense miroir / Delete the entry and its shadow expense."""
        row = await self._load(entry_id)
        if row is None:
            return False
        entry, _ = row

        expense = await self._linked_expense(entry)
        if expense is not None:
            await self.db.delete(expense)
        await self.db.delete(entry)
        await self.db.flush()

        logger.info("Fuel entry %s deleted with expense %s", entry_id, entry.linked_expense_id)
        return True

    async def efficiency(self, vehicle_id: int) -> FuelEfficiencyRead | None:
        """Efficacité du véhicule / Vehicle efficiency summary."""
        vehicle = await self.scope.get_vehicle(self.db, vehicle_id)
        if vehicle is None:
            logger.warning("Vehicle %s not available to user %s", vehicle_id, self.scope.user_id)
            return None

        result = await self.db.execute(select(FuelEntry).where(FuelEntry.vehicle_id == vehicle.id))
        entries = result.scalars().all()
        return EfficiencyCalculator.summarize(vehicle.id, entries, hybrid=vehicle.energy_class.is_hybrid)
