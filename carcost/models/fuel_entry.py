"""Modele suivi carburant / Fuel and charging entry model."""

import enum
import datetime
from decimal import Decimal

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carcost.database import Base


class EnergyType(str, enum.Enum):
    """Energie d'un plein ou d'une recharge / Energy of one fill-up or charge."""
    GASOLINE = "Gasoline"
    DIESEL = "Diesel"
    ELECTRICITY = "Electricity"

    @property
    def unit(self) -> str:
        return "kWh" if self is EnergyType.ELECTRICITY else "L"


class FuelEntry(Base):
    """Entree carburant / Fuel entry.

    linked_expense_id pointe vers la depense miroir du meme cout ; nullable
    uniquement pour les lignes historiques.
    linked_expense_id points to the shadow expense mirroring this cost; nullable
    only to tolerate legacy rows.
    """
    __tablename__ = "fuel_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    energy_type: Mapped[EnergyType] = mapped_column(Enum(EnergyType), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)  # L ou kWh
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    odometer: Mapped[int | None] = mapped_column(Integer)  # km, None = non releve
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    linked_expense_id: Mapped[int | None] = mapped_column(
        ForeignKey("expenses.id"), unique=True
    )

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="fuel_entries")
    linked_expense: Mapped["Expense"] = relationship(back_populates="fuel_entry")

    def __repr__(self) -> str:
        return f"<FuelEntry {self.date} - {self.amount}{self.energy_type.unit} - vehicle {self.vehicle_id}>"
