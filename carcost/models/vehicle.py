"""Modele Vehicule / Vehicle model.

Un vehicule appartient a un seul utilisateur ; sa suppression emporte
depenses, pleins et justificatifs.
A vehicle belongs to one user; deleting it removes its expenses, fuel entries
and receipts.
"""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carcost.database import Base


class EnergyClass(str, enum.Enum):
    """Motorisation du vehicule / Vehicle energy class."""
    GASOLINE = "Gasoline"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    PLUG_IN_HYBRID = "PlugInHybrid"

    @property
    def is_hybrid(self) -> bool:
        return self in (EnergyClass.HYBRID, EnergyClass.PLUG_IN_HYBRID)


class Vehicle(Base):
    """Vehicule d'un utilisateur / User vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # --- Identification ---
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    energy_class: Mapped[EnergyClass] = mapped_column(
        Enum(EnergyClass), nullable=False, default=EnergyClass.GASOLINE
    )

    # --- Detention / Ownership ---
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    ownership_start: Mapped[date] = mapped_column(Date, nullable=False)
    ownership_end: Mapped[date | None] = mapped_column(Date)  # None = toujours possede / still owned

    # --- Relations ---
    user: Mapped["User"] = relationship(back_populates="vehicles")
    expenses: Mapped[list["Expense"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )
    fuel_entries: Mapped[list["FuelEntry"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )
    receipts: Mapped[list["Receipt"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        return f"{self.year} {self.make} {self.model}"

    def __repr__(self) -> str:
        return f"<Vehicle {self.id} - {self.display_name}>"
