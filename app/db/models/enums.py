import enum


class PaymentTerms(str, enum.Enum):
    ADVANCE = "advance"
    COD = "cod"
    NET15 = "net15"
    NET30 = "net30"
    NET60 = "net60"


class FilamentType(str, enum.Enum):
    PLA = "pla"
    ABS = "abs"
    PETG = "petg"
    TPU = "tpu"
    ASA = "asa"
    NYLON = "nylon"
    PC = "pc"
    PVA = "pva"
    HIPS = "hips"
    WOOD = "wood"
    METAL = "metal"
    CARBON = "carbon"
    OTHER = "other"


class QualityGrade(str, enum.Enum):
    STANDARD = "standard"
    PREMIUM = "premium"
    INDUSTRIAL = "industrial"


class OrderPriority(str, enum.Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    EXPRESS = "express"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"


class PaymentType(str, enum.Enum):
    ADVANCE = "advance"
    BALANCE = "balance"
    REFUND = "refund"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"
    CARD = "card"
    CHEQUE = "cheque"


class ProcurementStatus(str, enum.Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class ProcurementPaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIAL = "partial"


class PrintStatus(str, enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    CANCELLED = "cancelled"


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    MANAGER = "manager"
    EXECUTIVE = "executive"


def enum_values(enum_cls):
    return [member.value for member in enum_cls]
