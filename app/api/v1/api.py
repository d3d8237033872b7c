from fastapi import APIRouter

from app.api.v1.endpoints import auth, vendors, inventory, orders, payments, procurement, print_usage, dashboard, exports, invoice

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(vendors.router, prefix="/vendors", tags=["vendors"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(procurement.router, prefix="/procurement", tags=["procurement"])
api_router.include_router(print_usage.router, prefix="/print-usage", tags=["print-usage"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
api_router.include_router(invoice.router, prefix="/invoice", tags=["invoice"])
