"""
Filtrage par utilisateur / Per-tenant query scoping.

Toutes les requêtes des services partent d'un TenantScope : le filtre
`Vehicle.user_id == user_id` ne peut pas être oublié.
Every service query starts from a TenantScope so the owner filter cannot be
forgotten.
"""

from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import Expense
from carcost.models.fuel_entry import FuelEntry
from carcost.models.receipt import Receipt
from carcost.models.vehicle import Vehicle


@dataclass(frozen=True)
class TenantScope:
    user_id: str

    def vehicles(self) -> Select:
        return select(Vehicle).where(Vehicle.user_id == self.user_id)

    def expenses(self) -> Select:
        return (
            select(Expense)
            .join(Vehicle, Expense.vehicle_id == Vehicle.id)
            .where(Vehicle.user_id == self.user_id)
        )

    def fuel_entries(self) -> Select:
        return (
            select(FuelEntry)
            .join(Vehicle, FuelEntry.vehicle_id == Vehicle.id)
            .where(Vehicle.user_id == self.user_id)
        )

    def receipts(self) -> Select:
        return (
            select(Receipt)
            .join(Vehicle, Receipt.vehicle_id == Vehicle.id)
            .where(Vehicle.user_id == self.user_id)
        )

    async def get_vehicle(self, db: AsyncSession, vehicle_id: int) -> Vehicle | None:
        """Véhicule de l'utilisateur ou None / Caller's vehicle or None."""
        result = await db.execute(self.vehicles().where(Vehicle.id == vehicle_id))
        return result.scalar_one_or_none()
