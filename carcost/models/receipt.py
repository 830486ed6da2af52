"""Modele justificatif / Receipt model.

Le fichier lui-meme est gere par un stockage externe ; seul son chemin est conserve.
The file itself lives in an external store; only its path is kept here.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carcost.database import Base


class Receipt(Base):
    """Justificatif rattache a un vehicule / Receipt attached to a vehicle."""
    __tablename__ = "receipts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # 1 justificatif max par depense / At most one receipt per expense
    expense_id: Mapped[int | None] = mapped_column(
        ForeignKey("expenses.id", ondelete="SET NULL"), unique=True
    )
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    original_file_name: Mapped[str | None] = mapped_column(String(255))
    merchant: Mapped[str | None] = mapped_column(String(200))
    parsed_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    parsed_date: Mapped[date | None] = mapped_column(Date)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="receipts")
    expense: Mapped["Expense"] = relationship(back_populates="receipt")

    def __repr__(self) -> str:
        return f"<Receipt {self.id} - vehicle {self.vehicle_id}>"
