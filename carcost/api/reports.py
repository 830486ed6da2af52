"""Routes Rapports / Report API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from carcost.api.deps import get_scope
from carcost.database import get_db
from carcost.schemas.report import CostBreakdown, MonthlyCostTrend, TcoReport, VehicleSummary
from carcost.services.report_service import ReportService
from carcost.services.scoping import TenantScope

router = APIRouter()


@router.get("/summary", response_model=VehicleSummary)
async def get_summary(
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Synthèse de tous les véhicules / Summary of all vehicles."""
    return await ReportService(db, scope).summary()


@router.get("/tco/{vehicle_id}", response_model=TcoReport)
async def get_tco(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Coût total de possession / Total cost of ownership."""
    report = await ReportService(db, scope).tco(vehicle_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return report


@router.get("/breakdown/{vehicle_id}", response_model=CostBreakdown)
async def get_breakdown(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Répartition des coûts / Cost breakdown."""
    report = await ReportService(db, scope).breakdown(vehicle_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return report


@router.get("/trends/{vehicle_id}", response_model=MonthlyCostTrend)
async def get_trends(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    scope: TenantScope = Depends(get_scope),
):
    """Tendance mensuelle / Monthly cost trend."""
    report = await ReportService(db, scope).monthly_trend(vehicle_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return report
