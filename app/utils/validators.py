"""
Input validation for the business entities.

Every ``validate_*`` function takes the raw payload (a dict of the fields the
client actually sent) and returns a list of ``{"field", "message"}`` dicts.
An empty list means the payload is acceptable. Validators never raise; the
routers turn a non-empty list into a 400 response.

``is_update=True`` skips the required-field checks so partial updates only
have the fields they carry validated.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type

from app.db.models.enums import (
    FilamentType, OrderPriority, OrderStatus, PaymentMethod, PaymentTerms, PaymentType,
    PrintStatus, ProcurementPaymentStatus, ProcurementStatus, QualityGrade, enum_values
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\d{10,15}$")
GST_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$")
PINCODE_RE = re.compile(r"^[1-9][0-9]{5}$")

PRINT_TEMP_MIN = 150
PRINT_TEMP_MAX = 400

Errors = List[Dict[str, str]]


# Field checks. Empty optional values always pass.

def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return True
    return bool(EMAIL_RE.match(value))


def is_valid_phone(value: Optional[str]) -> bool:
    if not value:
        return True
    return bool(PHONE_RE.match(re.sub(r"[\s\-]", "", value)))


def is_valid_gst(value: Optional[str]) -> bool:
    if not value:
        return True
    return bool(GST_RE.match(value.upper()))


def is_valid_pincode(value: Optional[str]) -> bool:
    if not value:
        return True
    return bool(PINCODE_RE.match(str(value)))


def parse_date(value: Any) -> Optional[date]:
    """Return a date for ISO strings / date / datetime values, None when unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def is_valid_date(value: Any) -> bool:
    if not value:
        return True
    return parse_date(value) is not None


def is_date_after_or_equal(start: Any, end: Any) -> bool:
    if not start or not end:
        return True
    start_date, end_date = parse_date(start), parse_date(end)
    if start_date is None or end_date is None:
        return True
    return end_date >= start_date


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_in_range(value: Any, minimum: float, maximum: float) -> bool:
    if value is None:
        return True
    number = _to_number(value)
    return number is not None and minimum <= number <= maximum


def is_positive_number(value: Any) -> bool:
    if value is None:
        return True
    number = _to_number(value)
    return number is not None and number > 0


def is_valid_enum(value: Any, enum_cls: Type) -> bool:
    if not value:
        return True
    return str(value).lower() in enum_values(enum_cls)


def is_valid_length(value: Optional[str], minimum: int, maximum: int) -> bool:
    if not value:
        return True
    return minimum <= len(value) <= maximum


def is_required(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def is_valid_temperature(value: Any) -> bool:
    return is_in_range(value, PRINT_TEMP_MIN, PRINT_TEMP_MAX)


def _enum_message(label: str, enum_cls: Type) -> str:
    return f"{label} must be one of: {', '.join(enum_values(enum_cls))}"


def _require(data: Dict[str, Any], errors: Errors, field: str, message: str) -> None:
    if not is_required(data.get(field)):
        errors.append({"field": field, "message": message})


def _reject_blank(data: Dict[str, Any], errors: Errors, field: str, message: str) -> None:
    # Updates may omit a required field but may not blank it out
    value = data.get(field)
    if isinstance(value, str) and not value.strip():
        errors.append({"field": field, "message": message})


# Entity validators

def validate_vendor(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    if not is_update:
        _require(data, errors, "name", "Vendor name is required")
    else:
        _reject_blank(data, errors, "name", "Vendor name is required")

    if data.get("name") and not is_valid_length(data["name"], 2, 255):
        errors.append({"field": "name", "message": "Name must be 2-255 characters"})
    if data.get("email") and not is_valid_email(data["email"]):
        errors.append({"field": "email", "message": "Invalid email format"})
    if data.get("contact") and not is_valid_phone(data["contact"]):
        errors.append({"field": "contact", "message": "Contact must be 10-15 digits"})
    if data.get("gst") and not is_valid_gst(data["gst"]):
        errors.append({"field": "gst", "message": "Invalid GST format (15 characters)"})
    if data.get("pincode") and not is_valid_pincode(data["pincode"]):
        errors.append({"field": "pincode", "message": "Invalid pincode (6 digits)"})
    if data.get("payment_terms") and not is_valid_enum(data["payment_terms"], PaymentTerms):
        errors.append({"field": "payment_terms", "message": _enum_message("Payment terms", PaymentTerms)})

    return errors


def validate_order(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    if not is_update:
        _require(data, errors, "customer_name", "Customer name is required")
        _require(data, errors, "order_date", "Order date is required")
        _require(data, errors, "total_amount", "Total amount is required")
    else:
        _reject_blank(data, errors, "customer_name", "Customer name is required")

    if data.get("customer_name") and not is_valid_length(data["customer_name"], 2, 255):
        errors.append({"field": "customer_name", "message": "Customer name must be 2-255 characters"})
    if data.get("customer_email") and not is_valid_email(data["customer_email"]):
        errors.append({"field": "customer_email", "message": "Invalid email format"})
    if data.get("contact_number") and not is_valid_phone(data["contact_number"]):
        errors.append({"field": "contact_number", "message": "Contact must be 10-15 digits"})

    if "total_amount" in data and not is_positive_number(data["total_amount"]):
        errors.append({"field": "total_amount", "message": "Total amount must be greater than 0"})
    if "advance_percentage" in data and not is_in_range(data["advance_percentage"], 0, 100):
        errors.append({"field": "advance_percentage", "message": "Advance percentage must be 0-100"})
    if "discount_percentage" in data and not is_in_range(data["discount_percentage"], 0, 100):
        errors.append({"field": "discount_percentage", "message": "Discount percentage must be 0-100"})
    if "gst_percentage" in data and not is_in_range(data["gst_percentage"], 0, 28):
        errors.append({"field": "gst_percentage", "message": "GST percentage must be 0-28"})

    if data.get("order_date") and not is_valid_date(data["order_date"]):
        errors.append({"field": "order_date", "message": "Invalid order date format"})
    if data.get("eta_delivery") and not is_valid_date(data["eta_delivery"]):
        errors.append({"field": "eta_delivery", "message": "Invalid ETA date format"})
    if not is_date_after_or_equal(data.get("order_date"), data.get("eta_delivery")):
        errors.append({"field": "eta_delivery", "message": "ETA must be on or after order date"})

    if data.get("priority") and not is_valid_enum(data["priority"], OrderPriority):
        errors.append({"field": "priority", "message": _enum_message("Priority", OrderPriority)})
    if data.get("status") and not is_valid_enum(data["status"], OrderStatus):
        errors.append({"field": "status", "message": _enum_message("Status", OrderStatus)})

    return errors


def validate_payment(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    # Payments are never edited in place, so required fields are always checked
    _require(data, errors, "order_id", "Order ID is required")
    _require(data, errors, "amount", "Amount is required")
    _require(data, errors, "payment_type", "Payment type is required")
    _require(data, errors, "payment_date", "Payment date is required")

    if "amount" in data and not is_positive_number(data["amount"]):
        errors.append({"field": "amount", "message": "Amount must be greater than 0"})
    if data.get("payment_type") and not is_valid_enum(data["payment_type"], PaymentType):
        errors.append({"field": "payment_type", "message": _enum_message("Payment type", PaymentType)})
    if data.get("payment_method") and not is_valid_enum(data["payment_method"], PaymentMethod):
        errors.append({"field": "payment_method", "message": _enum_message("Payment method", PaymentMethod)})
    if data.get("payment_date") and not is_valid_date(data["payment_date"]):
        errors.append({"field": "payment_date", "message": "Invalid payment date format"})

    return errors


def validate_filament(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    if not is_update:
        _require(data, errors, "type", "Filament type is required")
        _require(data, errors, "brand", "Brand is required")
        _require(data, errors, "color", "Color is required")
        _require(data, errors, "cost_per_kg", "Cost per kg is required")
    else:
        _reject_blank(data, errors, "type", "Filament type is required")
        _reject_blank(data, errors, "brand", "Brand is required")
        _reject_blank(data, errors, "color", "Color is required")

    if data.get("type") and not is_valid_enum(data["type"], FilamentType):
        errors.append({"field": "type", "message": _enum_message("Type", FilamentType)})
    if "cost_per_kg" in data and not is_positive_number(data["cost_per_kg"]):
        errors.append({"field": "cost_per_kg", "message": "Cost per kg must be greater than 0"})

    if "print_temp_min" in data and not is_valid_temperature(data["print_temp_min"]):
        errors.append({"field": "print_temp_min", "message": f"Print temp must be {PRINT_TEMP_MIN}-{PRINT_TEMP_MAX}°C"})
    if "print_temp_max" in data and not is_valid_temperature(data["print_temp_max"]):
        errors.append({"field": "print_temp_max", "message": f"Print temp must be {PRINT_TEMP_MIN}-{PRINT_TEMP_MAX}°C"})
    temp_min, temp_max = _to_number(data.get("print_temp_min")), _to_number(data.get("print_temp_max"))
    if temp_min and temp_max and temp_min > temp_max:
        errors.append({"field": "print_temp_max", "message": "Max temp must be >= min temp"})

    if data.get("quality_grade") and not is_valid_enum(data["quality_grade"], QualityGrade):
        errors.append({"field": "quality_grade", "message": _enum_message("Quality grade", QualityGrade)})

    return errors


def validate_procurement(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    if not is_update:
        _require(data, errors, "vendor_id", "Vendor is required")
        _require(data, errors, "filament_id", "Filament is required")
        _require(data, errors, "quantity_kg", "Quantity is required")
        _require(data, errors, "cost_per_kg", "Cost per kg is required")

    if "quantity_kg" in data and not is_positive_number(data["quantity_kg"]):
        errors.append({"field": "quantity_kg", "message": "Quantity must be greater than 0"})
    if "cost_per_kg" in data and not is_positive_number(data["cost_per_kg"]):
        errors.append({"field": "cost_per_kg", "message": "Cost per kg must be greater than 0"})

    if data.get("order_date") and not is_valid_date(data["order_date"]):
        errors.append({"field": "order_date", "message": "Invalid order date format"})
    if data.get("eta_delivery") and not is_valid_date(data["eta_delivery"]):
        errors.append({"field": "eta_delivery", "message": "Invalid ETA date format"})
    if data.get("final_delivery_date") and not is_valid_date(data["final_delivery_date"]):
        errors.append({"field": "final_delivery_date", "message": "Invalid delivery date format"})

    if data.get("status") and not is_valid_enum(data["status"], ProcurementStatus):
        errors.append({"field": "status", "message": _enum_message("Status", ProcurementStatus)})
    if data.get("payment_status") and not is_valid_enum(data["payment_status"], ProcurementPaymentStatus):
        errors.append({"field": "payment_status", "message": _enum_message("Payment status", ProcurementPaymentStatus)})

    return errors


def validate_print_usage(data: Dict[str, Any], is_update: bool = False) -> Errors:
    errors: Errors = []

    _require(data, errors, "order_id", "Order is required")
    _require(data, errors, "filament_id", "Filament is required")
    _require(data, errors, "quantity_used_kg", "Quantity used is required")

    if "quantity_used_kg" in data and not is_positive_number(data["quantity_used_kg"]):
        errors.append({"field": "quantity_used_kg", "message": "Quantity must be greater than 0"})
    if "print_duration_mins" in data and not is_positive_number(data["print_duration_mins"]):
        errors.append({"field": "print_duration_mins", "message": "Duration must be greater than 0"})

    print_status = data.get("print_status")
    if print_status and not is_valid_enum(print_status, PrintStatus):
        errors.append({"field": "print_status", "message": _enum_message("Print status", PrintStatus)})
    if print_status and str(print_status).lower() == PrintStatus.FAILED.value and not data.get("failure_reason"):
        errors.append({"field": "failure_reason", "message": "Failure reason is required when print failed"})

    return errors
