"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que la metadata soit complète.
Import all models here so the metadata is complete.
"""

from carcost.models.user import User
from carcost.models.vehicle import EnergyClass, Vehicle
from carcost.models.expense import USER_CATEGORIES, Expense, ExpenseCategory
from carcost.models.fuel_entry import EnergyType, FuelEntry
from carcost.models.receipt import Receipt

__all__ = [
    "User",
    "Vehicle",
    "EnergyClass",
    "Expense",
    "ExpenseCategory",
    "USER_CATEGORIES",
    "FuelEntry",
    "EnergyType",
    "Receipt",
]
