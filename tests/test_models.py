"""Tests des modèles / Model tests."""

from datetime import date
from decimal import Decimal

from carcost.models.expense import USER_CATEGORIES, Expense, ExpenseCategory
from carcost.models.fuel_entry import EnergyType, FuelEntry
from carcost.models.vehicle import EnergyClass, Vehicle


def test_vehicle_repr():
    v = Vehicle(id=3, make="Toyota", model="Yaris", year=2018)
    assert v.display_name == "2018 Toyota Yaris"
    assert "Yaris" in repr(v)


def test_fuel_entry_repr():
    e = FuelEntry(energy_type=EnergyType.ELECTRICITY, amount=Decimal("42.5"), date=date(2024, 2, 1), vehicle_id=1)
    assert "kWh" in repr(e)


def test_expense_repr():
    e = Expense(category=ExpenseCategory.TOLLS, amount=Decimal("4.20"), vehicle_id=2)
    assert "Tolls" in repr(e)


def test_enums():
    assert EnergyClass.PLUG_IN_HYBRID.value == "PlugInHybrid"
    assert EnergyClass.HYBRID.is_hybrid
    assert EnergyClass.PLUG_IN_HYBRID.is_hybrid
    assert not EnergyClass.ELECTRIC.is_hybrid
    assert EnergyType.ELECTRICITY.unit == "kWh"
    assert EnergyType.DIESEL.unit == "L"
    assert ExpenseCategory.CAR_WASH.value == "CarWash"


def test_fuel_is_not_user_selectable():
    assert ExpenseCategory.FUEL not in USER_CATEGORIES
    assert len(USER_CATEGORIES) == 9
