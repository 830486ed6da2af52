"""Tests du registre des dépenses / Expense ledger tests."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from carcost.models.expense import Expense, ExpenseCategory
from carcost.models.fuel_entry import EnergyType
from carcost.schemas.expense import ExpenseCreate, ExpenseUpdate
from carcost.schemas.fuel import FuelEntryCreate
from carcost.schemas.receipt import ReceiptCreate
from carcost.services.errors import LinkedExpenseError, ValidationFailure
from carcost.services.expense_service import ExpenseService
from carcost.services.fuel_service import FuelService
from carcost.services.receipt_service import ReceiptService

from conftest import make_vehicle


def new_expense(vehicle_id, **overrides):
    fields = {
        "vehicle_id": vehicle_id,
        "category": ExpenseCategory.MAINTENANCE,
        "amount": Decimal("120.00"),
        "date": date(2024, 2, 14),
        "notes": "Brake pads",
    }
    fields.update(overrides)
    return ExpenseCreate(**fields)


async def shadow_expense_id(db, scope, vehicle_id):
    entry = await FuelService(db, scope).create(FuelEntryCreate(
        vehicle_id=vehicle_id,
        energy_type=EnergyType.DIESEL,
        amount=Decimal("30"),
        cost=Decimal("45.00"),
        date=date(2024, 2, 1),
    ))
    return entry.id, entry.linked_expense_id


@pytest.mark.asyncio
async def test_create_and_get(db, scope, vehicle):
    ledger = ExpenseService(db, scope)
    created = await ledger.create(new_expense(vehicle.id))

    fetched = await ledger.get(created.id)
    assert fetched.amount == 120.0
    assert fetched.category is ExpenseCategory.MAINTENANCE
    assert fetched.vehicle_make == "Toyota"
    assert fetched.fuel_entry_id is None


@pytest.mark.asyncio
async def test_create_on_foreign_vehicle(db, other_scope, vehicle):
    assert await ExpenseService(db, other_scope).create(new_expense(vehicle.id)) is None


def test_fuel_category_rejected_by_schema():
    with pytest.raises(ValidationError):
        new_expense(1, category=ExpenseCategory.FUEL)
    with pytest.raises(ValidationError):
        ExpenseUpdate(category=ExpenseCategory.FUEL)


def test_schema_validation():
    with pytest.raises(ValidationError):
        new_expense(1, amount=Decimal("0"))
    with pytest.raises(ValidationError):
        new_expense(1, notes="x" * 501)
    with pytest.raises(ValidationError):
        new_expense(1, date=date(2999, 1, 1))
    with pytest.raises(ValidationError):
        ExpenseUpdate(amount=None)


@pytest.mark.asyncio
async def test_fuel_category_rejected_by_service(db, scope, vehicle):
    data = ExpenseCreate.model_construct(
        vehicle_id=vehicle.id, category=ExpenseCategory.FUEL, amount=Decimal("10"),
        date=date(2024, 1, 1), notes=None,
    )
    with pytest.raises(ValidationFailure):
        await ExpenseService(db, scope).create(data)


@pytest.mark.asyncio
async def test_list_reports_fuel_link_and_filters(db, scope, user, vehicle):
    ledger = ExpenseService(db, scope)
    await ledger.create(new_expense(vehicle.id, date=date(2024, 1, 10)))
    await ledger.create(new_expense(vehicle.id, category=ExpenseCategory.TOLLS, date=date(2024, 3, 2)))
    entry_id, shadow_id = await shadow_expense_id(db, scope, vehicle.id)
    other = await make_vehicle(db, user, make="Peugeot", model="208")
    await ledger.create(new_expense(other.id))

    rows = await ledger.list_expenses(vehicle_id=vehicle.id)
    assert [r.date for r in rows] == [date(2024, 3, 2), date(2024, 2, 1), date(2024, 1, 10)]
    shadow = next(r for r in rows if r.id == shadow_id)
    assert shadow.fuel_entry_id == entry_id
    assert shadow.category is ExpenseCategory.FUEL

    assert len(await ledger.list_expenses(category=ExpenseCategory.TOLLS)) == 1
    assert len(await ledger.list_expenses(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))) == 2
    assert len(await ledger.list_expenses()) == 4


@pytest.mark.asyncio
async def test_shadow_expense_cannot_be_changed_directly(db, scope, vehicle):
    entry_id, shadow_id = await shadow_expense_id(db, scope, vehicle.id)
    ledger = ExpenseService(db, scope)

    with pytest.raises(LinkedExpenseError) as exc:
        await ledger.update(shadow_id, ExpenseUpdate(amount=Decimal("1.00")))
    assert exc.value.fuel_entry_id == entry_id

    with pytest.raises(LinkedExpenseError):
        await ledger.delete(shadow_id)

    expense = await db.get(Expense, shadow_id)
    assert expense.amount == Decimal("45.00")


@pytest.mark.asyncio
async def test_update_is_sparse(db, scope, vehicle):
    ledger = ExpenseService(db, scope)
    created = await ledger.create(new_expense(vehicle.id))

    updated = await ledger.update(created.id, ExpenseUpdate(amount=Decimal("99.90")))
    assert updated.amount == 99.9
    assert updated.notes == "Brake pads"
    assert updated.category is ExpenseCategory.MAINTENANCE


@pytest.mark.asyncio
async def test_move_to_vehicle_requires_ownership(db, scope, user, other_user, vehicle):
    ledger = ExpenseService(db, scope)
    created = await ledger.create(new_expense(vehicle.id))
    foreign = await make_vehicle(db, other_user)
    mine = await make_vehicle(db, user, make="Honda", model="Jazz")

    assert await ledger.update(created.id, ExpenseUpdate(vehicle_id=foreign.id)) is None
    moved = await ledger.update(created.id, ExpenseUpdate(vehicle_id=mine.id))
    assert moved.vehicle_id == mine.id
    assert moved.vehicle_make == "Honda"


@pytest.mark.asyncio
async def test_move_detaches_receipt_left_on_old_vehicle(db, scope, user, vehicle):
    ledger = ExpenseService(db, scope)
    created = await ledger.create(new_expense(vehicle.id))
    receipts = ReceiptService(db, scope)
    receipt = await receipts.create(ReceiptCreate(vehicle_id=vehicle.id, file_path="receipts/brakes.pdf"))
    await receipts.link_to_expense(receipt.id, created.id)
    second = await make_vehicle(db, user, make="Renault", model="Clio")

    moved = await ledger.update(created.id, ExpenseUpdate(vehicle_id=second.id))
    assert moved.vehicle_id == second.id

    kept = await receipts.get(receipt.id)
    assert kept.vehicle_id == vehicle.id
    assert kept.expense_id is None


@pytest.mark.asyncio
async def test_delete_and_isolation(db, scope, other_scope, vehicle):
    ledger = ExpenseService(db, scope)
    created = await ledger.create(new_expense(vehicle.id))
    intruder = ExpenseService(db, other_scope)

    assert await intruder.get(created.id) is None
    assert await intruder.delete(created.id) is False
    assert await intruder.list_expenses() == []

    assert await ledger.delete(created.id) is True
    assert await ledger.get(created.id) is None
