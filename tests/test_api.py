"""
HTTP layer: routing, status codes and the {"error", "details"} envelope.
"""


def create_vendor(client, **overrides):
    payload = {"name": "Filament House", "contact": "98765 43210", "payment_terms": "NET30"}
    payload.update(overrides)
    response = client.post("/api/vendors", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_filament(client, **overrides):
    payload = {"type": "pla", "brand": "eSun", "color": "White", "cost_per_kg": 1200}
    payload.update(overrides)
    response = client.post("/api/inventory", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_order(client, **overrides):
    payload = {"customer_name": "Asha Rao", "order_date": "2024-03-10", "total_amount": 1000}
    payload.update(overrides)
    response = client.post("/api/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert "back office" in client.get("/").json()["message"]


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


class TestVendors:
    def test_crud(self, client):
        vendor = create_vendor(client)
        assert vendor["payment_terms"] == "net30"

        response = client.put(f"/api/vendors/{vendor['id']}", json={"state": "Maharashtra"})
        assert response.status_code == 200
        assert response.json()["state"] == "Maharashtra"
        assert response.json()["name"] == "Filament House"

        assert [v["id"] for v in client.get("/api/vendors").json()] == [vendor["id"]]

        response = client.delete(f"/api/vendors/{vendor['id']}")
        assert response.json() == {"success": True, "message": "Vendor deleted successfully"}
        assert client.get(f"/api/vendors/{vendor['id']}").status_code == 404

    def test_validation_envelope(self, client):
        response = client.post("/api/vendors", json={"name": "A", "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Validation failed",
            "details": [
                {"field": "name", "message": "Name must be 2-255 characters"},
                {"field": "email", "message": "Invalid email format"},
            ],
        }

    def test_blank_name(self, client):
        response = client.post("/api/vendors", json={"name": "   "})
        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "name", "message": "Vendor name is required"}]

        vendor = create_vendor(client)
        response = client.put(f"/api/vendors/{vendor['id']}", json={"name": ""})
        assert response.status_code == 400
        assert client.get(f"/api/vendors/{vendor['id']}").json()["name"] == "Filament House"

    def test_missing_name(self, client):
        response = client.post("/api/vendors", json={})
        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "name", "message": "Vendor name is required"}]

    def test_not_found(self, client):
        response = client.get("/api/vendors/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Vendor not found"}

    def test_referenced_vendor_cannot_be_deleted(self, client):
        vendor = create_vendor(client)
        create_filament(client, vendor_id=vendor["id"])

        response = client.delete(f"/api/vendors/{vendor['id']}")

        assert response.status_code == 409
        assert "error" in response.json()
        assert client.get(f"/api/vendors/{vendor['id']}").status_code == 200


class TestInventory:
    def test_create_defaults(self, client):
        filament = create_filament(client, type="petg")

        assert filament["type"] == "PETG"
        assert filament["current_stock_kg"] == 0
        assert filament["diameter"] == "1.75mm"
        assert filament["quality_grade"] == "standard"

    def test_stock_is_not_writable_through_update(self, client):
        filament = create_filament(client)

        response = client.put(f"/api/inventory/{filament['id']}", json={"current_stock_kg": 50, "color": "Grey"})

        assert response.status_code == 200
        assert response.json()["current_stock_kg"] == 0
        assert response.json()["color"] == "Grey"

    def test_temperature_validation(self, client):
        response = client.post("/api/inventory", json={
            "type": "abs", "brand": "eSun", "color": "Red", "cost_per_kg": 1500,
            "print_temp_min": 260, "print_temp_max": 230,
        })
        assert response.status_code == 400
        assert {"field": "print_temp_max", "message": "Max temp must be >= min temp"} in response.json()["details"]

    def test_blank_brand_on_update(self, client):
        filament = create_filament(client)

        response = client.put(f"/api/inventory/{filament['id']}", json={"brand": ""})

        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "brand", "message": "Brand is required"}]

    def test_low_stock_route_is_not_an_id(self, client):
        filament = create_filament(client)

        response = client.get("/api/inventory/alerts/low-stock")

        assert response.status_code == 200
        assert [f["id"] for f in response.json()] == [filament["id"]]


class TestOrdersAndPayments:
    def test_order_lifecycle(self, client):
        order = create_order(client, advance_percentage=25, status="cancelled")
        assert order["status"] == "in_progress"
        assert order["advance_amount"] == 250
        assert order["balance_amount"] == 750
        assert order["payment_status"] == "partially_paid"

        response = client.post("/api/payments", json={
            "order_id": order["id"], "amount": 1000, "payment_type": "balance",
            "payment_method": "UPI", "payment_date": "2024-03-12",
        })
        assert response.status_code == 201
        payment = response.json()
        assert payment["customer_name"] == "Asha Rao"
        assert payment["payment_method"] == "upi"

        refreshed = client.get(f"/api/orders/{order['id']}").json()
        assert refreshed["payment_status"] == "fully_paid"
        assert refreshed["balance_amount"] == 0

        assert client.get("/api/payments/pending/receivables").json() == {"total_pending": 0}
        assert [p["id"] for p in client.get(f"/api/payments/order/{order['id']}").json()] == [payment["id"]]

        response = client.delete(f"/api/payments/{payment['id']}")
        assert response.json()["success"] is True
        assert client.get(f"/api/orders/{order['id']}").json()["payment_status"] == "pending"

    def test_order_validation(self, client):
        response = client.post("/api/orders", json={
            "customer_name": "Asha Rao", "order_date": "2024-03-10", "eta_delivery": "2024-03-01",
            "total_amount": 0, "gst_percentage": 40,
        })

        assert response.status_code == 400
        fields = [d["field"] for d in response.json()["details"]]
        assert fields == ["total_amount", "gst_percentage", "eta_delivery"]

    def test_blank_customer_name(self, client):
        response = client.post("/api/orders", json={
            "customer_name": "   ", "order_date": "2024-03-10", "total_amount": 100,
        })
        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "customer_name", "message": "Customer name is required"}]

        order = create_order(client)
        response = client.put(f"/api/orders/{order['id']}", json={"customer_name": ""})
        assert response.status_code == 400
        assert client.get(f"/api/orders/{order['id']}").json()["customer_name"] == "Asha Rao"

    def test_malformed_date_is_a_400(self, client):
        response = client.post("/api/orders", json={
            "customer_name": "Asha Rao", "order_date": "10/03/2024", "total_amount": 100,
        })

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert body["details"][0]["field"] == "order_date"

    def test_active_list_route(self, client):
        order = create_order(client)
        response = client.get("/api/orders/active/list")
        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_payment_for_unknown_order(self, client):
        response = client.post("/api/payments", json={
            "order_id": 42, "amount": 10, "payment_type": "advance", "payment_date": "2024-03-12",
        })
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_order_with_payments_cannot_be_deleted(self, client):
        order = create_order(client)
        client.post("/api/payments", json={
            "order_id": order["id"], "amount": 10, "payment_type": "advance", "payment_date": "2024-03-12",
        })

        assert client.delete(f"/api/orders/{order['id']}").status_code == 409


class TestStockFlow:
    def test_procurement_then_print_usage(self, client):
        vendor = create_vendor(client)
        filament = create_filament(client, vendor_id=vendor["id"])
        order = create_order(client)

        response = client.post("/api/procurement", json={
            "vendor_id": vendor["id"], "filament_id": filament["id"], "quantity_kg": 3,
            "cost_per_kg": 1000, "order_date": "2024-03-01", "eta_delivery": "2024-03-08",
        })
        assert response.status_code == 201
        procurement = response.json()
        assert procurement["total_amount"] == 3000
        assert procurement["vendor_name"] == "Filament House"

        pending = client.get("/api/procurement/pending/list").json()
        assert [p["id"] for p in pending] == [procurement["id"]]

        response = client.put(f"/api/procurement/{procurement['id']}", json={"final_delivery_date": "2024-03-09"})
        assert response.json()["status"] == "delayed"
        client.put(f"/api/procurement/{procurement['id']}", json={"final_delivery_date": "2024-03-09"})
        assert client.get(f"/api/inventory/{filament['id']}").json()["current_stock_kg"] == 3

        usage = {"order_id": order["id"], "filament_id": filament["id"], "quantity_used_kg": 5}
        response = client.post("/api/print-usage", json=usage)
        assert response.status_code == 422
        assert response.json() == {"error": "Insufficient stock. Available: 3 kg"}

        response = client.post("/api/print-usage", json={**usage, "quantity_used_kg": 2})
        assert response.status_code == 201
        assert response.json()["cost_consumed"] == 2400
        assert client.get(f"/api/inventory/{filament['id']}").json()["current_stock_kg"] == 1

        response = client.delete(f"/api/print-usage/{response.json()['id']}")
        assert response.json() == {"success": True, "message": "Print usage deleted and stock restored"}
        assert client.get(f"/api/inventory/{filament['id']}").json()["current_stock_kg"] == 3

    def test_delivery_update_clears_text_fields(self, client):
        vendor = create_vendor(client)
        filament = create_filament(client)
        procurement = client.post("/api/procurement", json={
            "vendor_id": vendor["id"], "filament_id": filament["id"], "quantity_kg": 1, "cost_per_kg": 900,
            "invoice_number": "INV-77", "notes": "Call before delivery",
        }).json()

        response = client.put(f"/api/procurement/{procurement['id']}",
                              json={"invoice_number": "", "notes": "", "payment_status": ""})

        assert response.status_code == 200
        body = response.json()
        assert body["invoice_number"] is None
        assert body["notes"] is None
        assert body["payment_status"] == "pending"

    def test_empty_delivery_update(self, client):
        vendor = create_vendor(client)
        filament = create_filament(client)
        procurement = client.post("/api/procurement", json={
            "vendor_id": vendor["id"], "filament_id": filament["id"], "quantity_kg": 1, "cost_per_kg": 900,
        }).json()

        response = client.put(f"/api/procurement/{procurement['id']}", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "At least one field is required for update"}

    def test_failed_print_needs_reason(self, client):
        response = client.post("/api/print-usage", json={
            "order_id": 1, "filament_id": 1, "quantity_used_kg": 1, "print_status": "FAILED",
        })
        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "failure_reason", "message": "Failure reason is required when print failed"}
        ]
