from app import cache, db
from app.models import Invoice
from app.utils.cache import revalidate_path, view_cache_key


def add_invoice(app, customer_id, amount, status, date):
    with app.app_context():
        row = Invoice(customer_id=customer_id, amount=amount, status=status, date=date)
        db.session.add(row)
        db.session.commit()
        return row.id


def test_listing_orders_newest_first_with_customer_name(client, app, customer_id):
    older = add_invoice(app, customer_id, 1500, "paid", "2023-06-01")
    newer = add_invoice(app, customer_id, 250, "pending", "2024-02-10")

    resp = client.get("/dashboard/invoices")
    assert resp.status_code == 200
    invoices = resp.get_json()["invoices"]
    assert [i["id"] for i in invoices] == [newer, older]
    assert invoices[0]["customerName"] == "Jane Doe"
    assert invoices[0]["amountInCents"] == 250
    assert invoices[0]["amount"] == "2.5"
    assert invoices[1]["status"] == "paid"


def test_listing_is_served_from_cache_until_revalidated(client, app, customer_id):
    assert client.get("/dashboard/invoices").get_json() == {"invoices": []}

    # Written behind the view's back, so the cached response is stale.
    add_invoice(app, customer_id, 100, "pending", "2024-01-01")
    assert client.get("/dashboard/invoices").get_json() == {"invoices": []}

    with app.test_request_context():
        revalidate_path("/dashboard/invoices")
    assert len(client.get("/dashboard/invoices").get_json()["invoices"]) == 1


def test_mutations_refresh_cached_listing(client, app, customer_id):
    assert client.get("/dashboard/invoices").get_json() == {"invoices": []}
    assert cache.get(view_cache_key("/dashboard/invoices")) is not None

    resp = client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer_id, "amount": "12.34", "status": "pending"},
        follow_redirects=True,
    )
    assert resp.status_code == 200
    invoices = resp.get_json()["invoices"]
    assert len(invoices) == 1
    assert invoices[0]["amountInCents"] == 1234
    invoice_id = invoices[0]["id"]

    resp = client.post(
        f"/dashboard/invoices/{invoice_id}/edit",
        data={"customerId": customer_id, "amount": "1", "status": "paid"},
        follow_redirects=True,
    )
    assert resp.get_json()["invoices"][0]["status"] == "paid"

    client.post(f"/dashboard/invoices/{invoice_id}/delete")
    assert client.get("/dashboard/invoices").get_json() == {"invoices": []}


def test_view_single_invoice(client, app, customer_id):
    invoice_id = add_invoice(app, customer_id, 1550, "pending", "2024-03-03")

    resp = client.get(f"/dashboard/invoices/{invoice_id}")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "id": invoice_id,
        "customerId": customer_id,
        "amount": "15.5",
        "status": "pending",
        "date": "2024-03-03",
    }
    assert client.get("/dashboard/invoices/missing").status_code == 404


def test_security_headers_and_options(client):
    resp = client.get("/dashboard/invoices")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Referrer-Policy"] == "no-referrer"
    assert client.options("/dashboard/invoices").status_code == 405
