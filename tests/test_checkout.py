from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import stripe
from fastapi.testclient import TestClient

from app.dependencies import get_optional_identity
from app.exceptions import (
    InvalidRate,
    InvalidRequest,
    NotFound,
    PaymentProviderError,
    PersistenceError,
    SelfBookingError,
    Unauthenticated,
)
from app.main import app
from app.models.payment import CheckoutSession
from app.models.user import RequestIdentity
from app.services.checkout_service import CheckoutService, checkout_service
from app.services.payment_service import PaymentGateway, StripePaymentGateway
from app.utils.result import Err, Ok

client = TestClient(app)

CLIENT = RequestIdentity(uid="client_1", email="client@example.com")
OWNER = RequestIdentity(uid="owner_1", email="owner@example.com")


class FakeGateway(PaymentGateway):
    def __init__(self, customer=None, session_result=None):
        self.customer = customer if customer is not None else Ok(None)
        self.session_result = session_result or Ok(CheckoutSession(
            id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1"))
        self.sessions = []

    async def find_customer(self, email):
        return self.customer

    async def create_checkout_session(self, **kwargs):
        self.sessions.append(kwargs)
        return self.session_result


@pytest.fixture
def seeded(fake_db):
    fake_db.store["lawyers/lawyer_1"] = {
        "userId": "owner_1", "hourlyRate": 1500, "city": "Bangalore",
        "specializations": ["UPI Fraud"],
    }
    fake_db.store["users/owner_1"] = {"displayName": "Adv. Priya Nair"}
    return fake_db


def _bookings(db):
    return db.in_collection("bookings")


# --- Service ---

@pytest.mark.asyncio
async def test_checkout_creates_booking_and_session(seeded):
    gateway = FakeGateway()
    service = CheckoutService(gateway=gateway)

    response = await service.create_checkout(
        CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30},
        origin="https://app.example.com")

    assert response.url == "https://checkout.stripe.com/c/pay/cs_test_1"

    (path, booking), = _bookings(seeded).items()
    assert booking["userId"] == "client_1"
    assert booking["lawyerId"] == "lawyer_1"
    assert booking["status"] == "pending"
    assert (booking["baseAmount"], booking["platformFee"], booking["totalAmount"]) == (750, 188, 938)
    assert booking["stripeSessionId"] == "cs_test_1"

    sent = gateway.sessions[0]
    assert sent["unit_amount"] == 93800
    assert sent["currency"] == "inr"
    assert sent["product_name"] == "30-min Consultation with Adv. Priya Nair"
    assert sent["product_description"] == "Legal consultation session (₹750 + ₹188 platform fee)"
    assert sent["success_url"] == "https://app.example.com/booking-success?session_id={CHECKOUT_SESSION_ID}"
    assert sent["cancel_url"] == "https://app.example.com/lawyers/lawyer_1"
    assert sent["customer_id"] is None
    assert sent["customer_email"] == "client@example.com"
    assert sent["metadata"] == {
        "booking_id": path.split("/")[1],
        "lawyer_id": "lawyer_1",
        "user_id": "client_1",
    }


@pytest.mark.asyncio
async def test_whole_number_float_duration_is_accepted(seeded):
    gateway = FakeGateway()
    await CheckoutService(gateway=gateway).create_checkout(
        CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30.0})

    (booking,) = _bookings(seeded).values()
    assert booking["durationMinutes"] == 30
    assert gateway.sessions[0]["unit_amount"] == 93800


@pytest.mark.asyncio
async def test_existing_customer_is_reused(seeded):
    gateway = FakeGateway(customer=Ok("cus_123"))
    await CheckoutService(gateway=gateway).create_checkout(
        CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 60})

    sent = gateway.sessions[0]
    assert sent["customer_id"] == "cus_123"
    assert sent["customer_email"] is None
    assert sent["unit_amount"] == 187500


@pytest.mark.asyncio
async def test_customer_lookup_failure_falls_back_to_email(seeded):
    gateway = FakeGateway(customer=Err(kind="customer_lookup_failed", message="down"))
    await CheckoutService(gateway=gateway).create_checkout(
        CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 60})

    assert gateway.sessions[0]["customer_email"] == "client@example.com"


@pytest.mark.asyncio
async def test_missing_origin_uses_frontend_url(seeded, monkeypatch):
    monkeypatch.setattr("app.services.checkout_service.settings.FRONTEND_URL",
                        "https://cyberlawyerhub.example/")
    gateway = FakeGateway()
    await CheckoutService(gateway=gateway).create_checkout(
        CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30})

    assert gateway.sessions[0]["cancel_url"] == "https://cyberlawyerhub.example/lawyers/lawyer_1"


@pytest.mark.asyncio
async def test_self_booking_is_rejected_before_any_write(seeded):
    gateway = FakeGateway()
    with pytest.raises(SelfBookingError, match="Cannot book yourself"):
        await CheckoutService(gateway=gateway).create_checkout(
            OWNER, {"lawyer_id": "lawyer_1", "duration_minutes": 30})

    assert _bookings(seeded) == {}
    assert gateway.sessions == []


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"lawyer_id": "lawyer_1", "duration_minutes": 45},
    {"lawyer_id": "lawyer_1", "duration_minutes": "30"},
    {"lawyer_id": "lawyer_1", "duration_minutes": 30.5},
    {"lawyer_id": "lawyer_1", "duration_minutes": 45.0},
    {"lawyer_id": "lawyer_1", "duration_minutes": True},
    {"lawyer_id": "lawyer_1"},
    {"lawyer_id": "   ", "duration_minutes": 30},
    {"duration_minutes": 30},
    ["lawyer_1", 30],
    None,
])
async def test_invalid_requests_write_nothing(seeded, payload):
    gateway = FakeGateway()
    with pytest.raises(InvalidRequest, match="must be 30 or 60"):
        await CheckoutService(gateway=gateway).create_checkout(CLIENT, payload)

    assert _bookings(seeded) == {}
    assert gateway.sessions == []


@pytest.mark.asyncio
async def test_unauthenticated_caller(seeded):
    service = CheckoutService(gateway=FakeGateway())
    with pytest.raises(Unauthenticated, match="User not authenticated"):
        await service.create_checkout(None, {"lawyer_id": "lawyer_1", "duration_minutes": 30})
    with pytest.raises(Unauthenticated):
        await service.create_checkout(
            RequestIdentity(uid="no_email"), {"lawyer_id": "lawyer_1", "duration_minutes": 30})

    assert _bookings(seeded) == {}


@pytest.mark.asyncio
async def test_unknown_lawyer(seeded):
    with pytest.raises(NotFound, match="Lawyer not found"):
        await CheckoutService(gateway=FakeGateway()).create_checkout(
            CLIENT, {"lawyer_id": "nope", "duration_minutes": 30})


@pytest.mark.asyncio
async def test_lawyer_without_rate_cannot_be_booked(seeded):
    seeded.store["lawyers/lawyer_1"]["hourlyRate"] = 0
    with pytest.raises(InvalidRate):
        await CheckoutService(gateway=FakeGateway()).create_checkout(
            CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30})
    assert _bookings(seeded) == {}


@pytest.mark.asyncio
async def test_write_failure_stops_before_payment(seeded):
    seeded.fail_writes = True
    gateway = FakeGateway()
    with pytest.raises(PersistenceError, match="Failed to create booking"):
        await CheckoutService(gateway=gateway).create_checkout(
            CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30})
    assert gateway.sessions == []


@pytest.mark.asyncio
async def test_provider_failure_leaves_pending_booking(seeded):
    gateway = FakeGateway(session_result=Err(kind="session_create_failed", message="card_declined"))
    with pytest.raises(PaymentProviderError, match="Payment provider error: card_declined"):
        await CheckoutService(gateway=gateway).create_checkout(
            CLIENT, {"lawyer_id": "lawyer_1", "duration_minutes": 30})

    (booking,) = _bookings(seeded).values()
    assert booking["status"] == "pending"
    assert booking["stripeSessionId"] is None


# --- Route ---

def test_route_returns_url(seeded, monkeypatch):
    monkeypatch.setattr(checkout_service, "gateway", FakeGateway())
    app.dependency_overrides[get_optional_identity] = lambda: CLIENT

    response = client.post(
        "/api/v1/checkout",
        json={"lawyer_id": "lawyer_1", "duration_minutes": 60},
        headers={"Origin": "http://localhost:5173"},
    )

    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_1"}


def test_route_without_token_returns_error(seeded):
    response = client.post(
        "/api/v1/checkout", json={"lawyer_id": "lawyer_1", "duration_minutes": 30})

    assert response.status_code == 500
    assert response.json() == {"error": "User not authenticated"}


def test_route_self_booking_error(seeded, monkeypatch):
    monkeypatch.setattr(checkout_service, "gateway", FakeGateway())
    app.dependency_overrides[get_optional_identity] = lambda: OWNER

    response = client.post(
        "/api/v1/checkout", json={"lawyer_id": "lawyer_1", "duration_minutes": 30})

    assert response.status_code == 500
    assert response.json() == {"error": "Cannot book yourself"}


def test_route_rejects_malformed_json(seeded):
    app.dependency_overrides[get_optional_identity] = lambda: CLIENT

    response = client.post(
        "/api/v1/checkout", content=b"{not json",
        headers={"Content-Type": "application/json"})

    assert response.status_code == 500
    assert response.json() == {"error": "Request body must be valid JSON"}


# --- Stripe gateway ---

@pytest.mark.asyncio
async def test_stripe_gateway_builds_one_line_item(monkeypatch):
    create = MagicMock(return_value=SimpleNamespace(
        id="cs_live_1", url="https://checkout.stripe.com/c/pay/cs_live_1", customer=None))
    monkeypatch.setattr(stripe.checkout.Session, "create", create)

    result = await StripePaymentGateway(api_key="sk_test_x").create_checkout_session(
        product_name="60-min Consultation with Adv. Rao",
        product_description="Legal consultation session (₹2000 + ₹500 platform fee)",
        unit_amount=250000,
        currency="inr",
        customer_id=None,
        customer_email="client@example.com",
        success_url="http://localhost:5173/booking-success?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="http://localhost:5173/lawyers/lawyer_1",
        metadata={"booking_id": "booking_1", "lawyer_id": "lawyer_1", "user_id": "client_1"},
    )

    assert result.ok
    assert result.value.id == "cs_live_1"
    kwargs = create.call_args.kwargs
    assert kwargs["api_key"] == "sk_test_x"
    assert kwargs["mode"] == "payment"
    assert kwargs["customer_email"] == "client@example.com"
    assert "customer" not in kwargs
    (item,) = kwargs["line_items"]
    assert item["quantity"] == 1
    assert item["price_data"]["unit_amount"] == 250000
    assert item["price_data"]["currency"] == "inr"


@pytest.mark.asyncio
async def test_stripe_gateway_wraps_sdk_errors(monkeypatch):
    monkeypatch.setattr(stripe.checkout.Session, "create",
                        MagicMock(side_effect=stripe.StripeError("Invalid API Key")))

    result = await StripePaymentGateway(api_key="sk_test_x").create_checkout_session(
        product_name="p", product_description="d", unit_amount=100, currency="inr",
        customer_id="cus_1", customer_email=None, success_url="s", cancel_url="c",
        metadata={},
    )

    assert not result.ok
    assert "Invalid API Key" in result.message


@pytest.mark.asyncio
async def test_stripe_customer_lookup(monkeypatch):
    listing = MagicMock(return_value=SimpleNamespace(data=[SimpleNamespace(id="cus_9")]))
    monkeypatch.setattr(stripe.Customer, "list", listing)

    result = await StripePaymentGateway(api_key="sk_test_x").find_customer("client@example.com")

    assert result.ok and result.value == "cus_9"
    assert listing.call_args.kwargs["email"] == "client@example.com"
    assert listing.call_args.kwargs["limit"] == 1
