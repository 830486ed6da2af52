"""Modele depenses vehicule / Vehicle expense ledger model."""

import enum
import datetime
from decimal import Decimal

from sqlalchemy import Date, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carcost.database import Base


class ExpenseCategory(str, enum.Enum):
    """Categorie de depense / Expense category.

    Valeurs stockees en texte pour rester stables / Stored as text to stay stable.
    FUEL est reserve aux depenses miroir des pleins / FUEL is reserved for fuel-linked shadow expenses.
    """
    MAINTENANCE = "Maintenance"
    INSURANCE = "Insurance"
    REGISTRATION = "Registration"
    REPAIRS = "Repairs"
    PARKING = "Parking"
    TOLLS = "Tolls"
    CAR_WASH = "CarWash"
    MODIFICATIONS = "Modifications"
    OTHER = "Other"
    FUEL = "Fuel"


# Categories saisissables par l'utilisateur / User-selectable categories
USER_CATEGORIES = tuple(c for c in ExpenseCategory if c is not ExpenseCategory.FUEL)


class Expense(Base):
    """Depense datee d'un vehicule / Dated vehicle expense."""
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category: Mapped[ExpenseCategory] = mapped_column(Enum(ExpenseCategory), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(500))

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="expenses")
    # Plein proprietaire si depense miroir / Owning fuel entry when this is a shadow expense
    fuel_entry: Mapped["FuelEntry"] = relationship(back_populates="linked_expense")
    receipt: Mapped["Receipt"] = relationship(back_populates="expense")

    def __repr__(self) -> str:
        return f"<Expense {self.category.value} {self.amount} - vehicle {self.vehicle_id}>"
