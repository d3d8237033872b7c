from app.db.models.enums import (
    PaymentTerms, FilamentType, QualityGrade, OrderPriority, OrderStatus, PaymentStatus,
    PaymentType, PaymentMethod, ProcurementStatus, ProcurementPaymentStatus, PrintStatus, UserRole
)
from app.db.models.user import User
from app.db.models.vendor import Vendor
from app.db.models.filament import Filament
from app.db.models.order import Order
from app.db.models.payment import Payment
from app.db.models.procurement import Procurement
from app.db.models.print_usage import PrintUsage

__all__ = [
    "PaymentTerms", "FilamentType", "QualityGrade", "OrderPriority", "OrderStatus", "PaymentStatus",
    "PaymentType", "PaymentMethod", "ProcurementStatus", "ProcurementPaymentStatus", "PrintStatus", "UserRole",
    "User", "Vendor", "Filament", "Order", "Payment", "Procurement", "PrintUsage",
]
