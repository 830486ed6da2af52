"""Routes API / API routes."""

from fastapi import APIRouter

from carcost.api import (
    auth,
    vehicles,
    expenses,
    fuel,
    receipts,
    reports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(fuel.router, prefix="/fuel", tags=["fuel"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
