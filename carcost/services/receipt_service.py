"""
Service justificatifs / Receipt registry service.

Le fichier est déjà stocké ailleurs ; on ne gère que ses métadonnées.
The file is already stored elsewhere; only its metadata is handled here.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import Expense
from carcost.models.receipt import Receipt
from carcost.schemas.receipt import ReceiptCreate
from carcost.services.errors import OwnershipConflict
from carcost.services.scoping import TenantScope

logger = logging.getLogger(__name__)


class ReceiptService:
    def __init__(self, db: AsyncSession, scope: TenantScope):
        self.db = db
        self.scope = scope

    async def list_receipts(self, vehicle_id: int | None = None) -> list[Receipt]:
        query = self.scope.receipts()
        if vehicle_id is not None:
            query = query.where(Receipt.vehicle_id == vehicle_id)
        result = await self.db.execute(query.order_by(Receipt.uploaded_at.desc(), Receipt.id.desc()))
        return list(result.scalars().all())

    async def get(self, receipt_id: int) -> Receipt | None:
        result = await self.db.execute(self.scope.receipts().where(Receipt.id == receipt_id))
        return result.scalar_one_or_none()

    async def create(self, data: ReceiptCreate) -> Receipt | None:
        vehicle = await self.scope.get_vehicle(self.db, data.vehicle_id)
        if vehicle is None:
            logger.warning("Vehicle %s not available to user %s", data.vehicle_id, self.scope.user_id)
            return None
        receipt = Receipt(**data.model_dump())
        self.db.add(receipt)
        await self.db.flush()
        await self.db.refresh(receipt)
        logger.info("Receipt %s registered for vehicle %s", receipt.id, vehicle.id)
        return receipt

    async def delete(self, receipt_id: int) -> bool:
        receipt = await self.get(receipt_id)
        if receipt is None:
            return False
        await self.db.delete(receipt)
        await self.db.flush()
        return True

    async def link_to_expense(self, receipt_id: int, expense_id: int) -> Receipt | None:
        """Rattacher un justificatif à une dépense / Attach a receipt to an expense.

        None si l'un des deux est introuvable pour l'utilisateur ;
        OwnershipConflict s'ils concernent deux véhicules différents.
        None when either side is not the caller's; OwnershipConflict when they
        belong to different vehicles.
        """
        receipt = await self.get(receipt_id)
        if receipt is None:
            return None
        result = await self.db.execute(self.scope.expenses().where(Expense.id == expense_id))
        expense = result.scalar_one_or_none()
        if expense is None:
            return None

        if receipt.vehicle_id != expense.vehicle_id:
            raise OwnershipConflict(
                f"Receipt {receipt.id} and expense {expense.id} belong to different vehicles"
            )

        # 1 justificatif par dépense : détacher l'ancien / One receipt per expense: detach the previous one
        previous = await self.db.execute(
            select(Receipt).where(Receipt.expense_id == expense.id, Receipt.id != receipt.id)
        )
        for other in previous.scalars().all():
            other.expense_id = None
        await self.db.flush()

        receipt.expense_id = expense.id
        await self.db.flush()
        logger.info("Receipt %s linked to expense %s", receipt.id, expense.id)
        return receipt
