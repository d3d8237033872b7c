from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Any

from app.api.deps import get_db
from app.schemas.dashboard import ChartData, DashboardStats, UpcomingETAs
from app.services import dashboard as dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)) -> Any:
    return dashboard_service.get_stats(db)


@router.get("/upcoming-etas", response_model=UpcomingETAs)
def upcoming_etas(db: Session = Depends(get_db)) -> Any:
    return dashboard_service.get_upcoming_etas(db)


@router.get("/chart-data", response_model=ChartData)
def chart_data(db: Session = Depends(get_db)) -> Any:
    return dashboard_service.get_chart_data(db)
