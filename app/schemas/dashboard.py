from pydantic import BaseModel
from typing import List, Dict
from app.schemas.filament import StockByType
from app.schemas.order import Order
from app.schemas.procurement import Procurement


class DashboardStats(BaseModel):
    inventoryValue: float
    stockByType: List[StockByType]
    activeOrdersCount: int
    pendingReceivables: float
    totalRevenue: float
    lowStockCount: int


class UpcomingETAs(BaseModel):
    procurement: List[Procurement]
    orders: List[Order]


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float


class ChartData(BaseModel):
    ordersByStatus: Dict[str, int]
    ordersByPaymentStatus: Dict[str, int]
    monthlyRevenue: List[MonthlyRevenue]
    stockByType: List[StockByType]
