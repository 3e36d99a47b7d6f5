import pytest
from werkzeug.security import generate_password_hash

from src.tour_office.tour_office.core.enums import Currency, Role


@pytest.fixture
def staff_user(repos):
    uid = repos.users.create_user(
        full_name="Ofis Personeli", username="personel", password_hash=generate_password_hash("staff123"), role=Role.STAFF
    )
    return repos.users.get_by_id(uid)


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_login_me_logout(client, staff_user):
    bad = client.post("/api/auth/login", json={"username": "personel", "password": "x"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "Kullanıcı adı veya şifre hatalı"}

    ok = client.post("/api/auth/login", json={"username": "personel", "password": "staff123"})
    assert ok.status_code == 200
    assert ok.get_json()["role"] == "staff"
    assert client.get("/api/auth/me").get_json()["full_name"] == "Ofis Personeli"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_routes_require_login(client):
    assert client.get("/api/groups").status_code == 401
    assert client.get("/api/rates").status_code == 401


def test_company_module_is_admin_only(login_as):
    staff = login_as(Role.STAFF)
    assert staff.get("/api/company/ledger").status_code == 403
    assert staff.delete("/api/groups/1").status_code == 403


def test_group_crud_and_errors(login_as):
    client = login_as(Role.ADMIN)
    body = {
        "name": "Umre Mart",
        "group_type": "Umre",
        "start_date": "2026-03-10",
        "capacity": 20,
        "currency": "USD",
        "fees_by_duration": {"d7": {"room2": 1000, "room3": 900, "room4": 850}},
    }

    created = client.post("/api/groups", json=body)
    assert created.status_code == 201
    gid = created.get_json()["group_id"]

    assert client.get(f"/api/groups/{gid}").get_json()["fees_by_duration"]["d7"]["room2"] == 1000
    assert client.patch(f"/api/groups/{gid}", json={"notes": "Ramazan"}).get_json()["notes"] == "Ramazan"
    assert client.post("/api/groups", json={**body, "group_type": "x"}).status_code == 400
    assert client.post("/api/groups", data="not json", content_type="text/plain").status_code == 400
    assert client.get("/api/groups/999").status_code == 404
    assert client.post("/api/groups", json={**body, "fees_by_duration": {"d7": 1000}}).status_code == 400
    assert client.post("/api/groups", json={**body, "name": 123}).status_code == 201

    assert client.delete(f"/api/groups/{gid}").get_json() == {"ok": True}
    assert client.get(f"/api/groups/{gid}").status_code == 404


def test_participant_payment_and_balance_flow(login_as, add_group):
    client = login_as(Role.STAFF)
    group = add_group(currency=Currency.USD)

    resp = client.post(
        "/api/participants",
        json={"full_name": "Ali Veli", "group_id": group.group_id, "room_type": 2, "day_count": 7, "discount": 50},
    )
    assert resp.status_code == 201
    pid = resp.get_json()["participant_id"]

    for amount, currency in ((500, "USD"), (1000, "TRY")):
        pay = client.post(
            "/api/payments",
            json={"participant_id": pid, "paid_on": "2026-01-10", "amount": amount, "currency": currency},
        )
        assert pay.status_code == 201

    bad = client.post(
        "/api/payments",
        json={"participant_id": pid, "paid_on": "2026-01-10", "amount": "nan", "currency": "USD"},
    )
    assert bad.status_code == 400

    balance = client.get(f"/api/participants/{pid}/balance").get_json()
    assert round(balance["balance"], 2) == 416.67
    assert balance["basis"] == "live"
    assert balance["try_basis"] == "recorded"
    assert balance["paid_try"] == 16000.0


def test_report_formats(login_as, add_group, add_participant):
    client = login_as(Role.STAFF)
    group = add_group()
    add_participant(group)

    rows = client.get("/api/reports/groups").get_json()
    assert rows[0]["expected"] == 1000

    xlsx = client.get("/api/reports/groups?format=xlsx")
    assert xlsx.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert xlsx.data[:2] == b"PK"

    csv = client.get("/api/reports/groups?format=csv")
    assert csv.data.startswith(b"\xef\xbb\xbf")
    assert "Beklenen Gelir" in csv.data.decode("utf-8-sig")

    html = client.get("/api/reports/groups?format=html")
    assert "Grup Raporu" in html.get_data(as_text=True)

    assert client.get("/api/reports/groups?format=pdf").status_code == 400
    assert client.get("/api/reports/groups?group_id=abc").status_code == 400


def test_company_ledger_endpoint(login_as, add_group, add_participant, add_payment):
    client = login_as(Role.ADMIN)
    group = add_group()
    add_payment(add_participant(group), 100, Currency.USD)

    created = client.post(
        "/api/company/entries",
        json={"entry_date": "2026-01-20", "entry_type": "Gider", "amount": 250, "currency": "TRY", "category": "Kira"},
    )
    assert created.status_code == 201
    key = created.get_json()["entry_id"]

    ledger = client.get("/api/company/ledger").get_json()
    assert ledger["totals"] == {
        "TRY": {"income": 0.0, "expense": 250.0, "balance": -250.0},
        "USD": {"income": 100.0, "expense": 0.0, "balance": 100.0},
    }
    assert "2026-01" in ledger["monthly"]

    derived = next(e["key"] for e in ledger["entries"] if e["readonly"])
    assert client.put(f"/api/company/entries/{derived}", json={"amount": 1}).status_code == 400
    assert client.delete(f"/api/company/entries/{key}").status_code == 200


def test_rates_endpoint_reports_effective_values(login_as, rate_provider):
    rate_provider.usd_try = 0.0
    client = login_as(Role.STAFF)

    data = client.get("/api/rates").get_json()

    assert data["USDTRY"] == 0.0
    assert data["effective"]["USDTRY"] == 34.0
    assert data["SARTRY"] == 8.0

    history = client.get("/api/rates/history?date=2025-01-02&base=SAR").get_json()
    assert history == {"date": "2025-01-02", "base": "SAR", "TRY": 8.0}
