"""
Seed des données de démo / Demo data seeding.
Crée un compte de démo au premier démarrage si aucun utilisateur n'existe.
Creates a demo account on first startup if no users exist.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.models.expense import ExpenseCategory
from carcost.models.fuel_entry import EnergyType
from carcost.models.user import User
from carcost.models.vehicle import EnergyClass
from carcost.schemas.common import today_utc
from carcost.schemas.expense import ExpenseCreate
from carcost.schemas.fuel import FuelEntryCreate
from carcost.schemas.vehicle import VehicleCreate
from carcost.services.expense_service import ExpenseService
from carcost.services.fuel_service import FuelService
from carcost.services.scoping import TenantScope
from carcost.services.vehicle_service import VehicleService
from carcost.utils.auth import hash_password

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@carcost.app"
DEMO_PASSWORD = "demo1234"

# (marque, modèle, année, prix, motorisation, jours de détention)
DEMO_VEHICLES = [
    ("Toyota", "Corolla", 2019, "18500.00", EnergyClass.GASOLINE, 900),
    ("Tesla", "Model 3", 2022, "42990.00", EnergyClass.ELECTRIC, 400),
    ("Mitsubishi", "Outlander PHEV", 2021, "38900.00", EnergyClass.PLUG_IN_HYBRID, 600),
]

# (index véhicule, énergie, quantité, coût, odomètre, il y a n jours)
DEMO_FUEL = [
    (0, EnergyType.GASOLINE, "40.000", "62.40", 45200, 120),
    (0, EnergyType.GASOLINE, "38.500", "59.10", 45780, 90),
    (0, EnergyType.GASOLINE, "41.200", "64.90", 46350, 60),
    (0, EnergyType.GASOLINE, "39.800", "61.30", None, 30),
    (1, EnergyType.ELECTRICITY, "55.000", "16.50", 12100, 75),
    (1, EnergyType.ELECTRICITY, "60.000", "18.00", 12450, 45),
    (1, EnergyType.ELECTRICITY, "58.000", "17.40", 12800, 15),
    (2, EnergyType.ELECTRICITY, "12.000", "3.60", 30100, 80),
    (2, EnergyType.GASOLINE, "35.000", "55.30", 30400, 70),
    (2, EnergyType.ELECTRICITY, "12.500", "3.75", 30520, 50),
    (2, EnergyType.GASOLINE, "33.000", "52.10", 30980, 25),
]

# (index véhicule, catégorie, montant, il y a n jours, note)
DEMO_EXPENSES = [
    (0, ExpenseCategory.MAINTENANCE, "180.00", 100, "Oil change"),
    (0, ExpenseCategory.INSURANCE, "640.00", 200, "Annual insurance"),
    (1, ExpenseCategory.CAR_WASH, "25.00", 20, None),
    (1, ExpenseCategory.REGISTRATION, "120.00", 300, None),
    (2, ExpenseCategory.TOLLS, "14.80", 40, "Highway"),
]


async def seed_demo_data(session: AsyncSession) -> None:
    """Créer les données de démo si aucun utilisateur n'existe / Create demo data if no users exist."""
    result = await session.execute(select(func.count(User.id)))
    count = result.scalar()
    if count:
        logger.info("%s existing user(s), demo seed skipped", count)
        return

    user = User(email=DEMO_EMAIL, hashed_password=hash_password(DEMO_PASSWORD))
    session.add(user)
    await session.flush()

    scope = TenantScope(user.id)
    today = today_utc()

    vehicles = []
    for make, model, year, price, energy_class, days in DEMO_VEHICLES:
        vehicles.append(await VehicleService(session, scope).create(VehicleCreate(
            make=make,
            model=model,
            year=year,
            purchase_price=Decimal(price),
            ownership_start=today - timedelta(days=days),
            energy_class=energy_class,
        )))

    fuel = FuelService(session, scope)
    for index, energy_type, amount, cost, odometer, days_ago in DEMO_FUEL:
        await fuel.create(FuelEntryCreate(
            vehicle_id=vehicles[index].id,
            energy_type=energy_type,
            amount=Decimal(amount),
            cost=Decimal(cost),
            odometer=odometer,
            date=today - timedelta(days=days_ago),
        ))

    ledger = ExpenseService(session, scope)
    for index, category, amount, days_ago, notes in DEMO_EXPENSES:
        await ledger.create(ExpenseCreate(
            vehicle_id=vehicles[index].id,
            category=category,
            amount=Decimal(amount),
            date=today - timedelta(days=days_ago),
            notes=notes,
        ))

    await session.commit()
    logger.info("Demo account created: %s / %s", DEMO_EMAIL, DEMO_PASSWORD)
