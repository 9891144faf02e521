from unittest.mock import AsyncMock, Mock, patch
import json
import pytest
import stripe
from conftest import make_settings
from models.payment import PaymentResult
from utils.http import CORS_HEADERS


def create_intent_mock(**kwargs):
    intent = Mock(id="pi_3Nabc", client_secret="pi_3Nabc_secret_xyz", amount=kwargs.get("amount", 2500))
    return patch.object(stripe.PaymentIntent, "create", return_value=intent)


def assert_cors(response):
    for key, value in CORS_HEADERS.items():
        assert response.headers[key] == value


def test_preflight(client):
    with patch("services.payment.parse_json") as parse_json:
        response = client.options("/process-payment", content=b"not json")
    assert response.status_code == 200
    assert response.text == "ok"
    assert_cors(response)
    parse_json.assert_not_called()


def test_create_payment_intent(client):
    with create_intent_mock() as create:
        response = client.post(
            "/process-payment",
            json={"amount": 2500, "currency": "eur", "donor_email": "jane@example.com"},
        )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert_cors(response)
    assert response.json() == {
        "success": True,
        "client_secret": "pi_3Nabc_secret_xyz",
        "payment_intent_id": "pi_3Nabc",
        "amount": 2500,
    }

    create.assert_called_once_with(
        api_key="rk_test_123",
        amount=2500,
        currency="eur",
        automatic_payment_methods={"enabled": True},
        description="Donation to The Open Church Project",
        metadata={"project": "open-church-project", "donor_email": "jane@example.com"},
    )


def test_currency_and_donor_defaults(client):
    with create_intent_mock(amount=100) as create:
        response = client.post("/process-payment", json={"amount": 100})

    assert response.status_code == 200
    kwargs = create.call_args.kwargs
    assert kwargs["amount"] == 100
    assert kwargs["currency"] == "usd"
    assert kwargs["metadata"]["donor_email"] == "anonymous"


@pytest.mark.parametrize("payload", [{"amount": 99}, {"amount": 1}, {"amount": 0}, {"amount": -500}, {}, {"currency": "usd"}])
def test_minimum_amount(client, payload):
    with create_intent_mock() as create:
        response = client.post("/process-payment", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Minimum donation amount is $1.00"}
    assert_cors(response)
    create.assert_not_called()


def test_invalid_field_type(client):
    with create_intent_mock() as create:
        response = client.post("/process-payment", json={"amount": "a lot"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid payment request"
    create.assert_not_called()


@pytest.mark.parametrize("settings", [make_settings(payment_api_key=None)])
@pytest.mark.parametrize("payload", [{"amount": 2500}, {"amount": 10}])
def test_missing_payment_key(client, payload):
    with create_intent_mock() as create:
        response = client.post("/process-payment", json=payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Payment service configuration error"}
    create.assert_not_called()


def test_upstream_error(client):
    raw_body = json.dumps({"error": {"message": "Invalid currency: xyz", "param": "currency", "type": "invalid_request_error"}})
    error = stripe.InvalidRequestError("Invalid currency: xyz", param="currency", http_body=raw_body, http_status=400)

    with patch.object(stripe.PaymentIntent, "create", side_effect=error) as create:
        response = client.post("/process-payment", json={"amount": 500, "currency": "xyz"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create payment intent", "details": raw_body}
    assert_cors(response)
    assert create.call_count == 1


def test_network_failure(client):
    error = stripe.APIConnectionError("Network is unreachable")

    with patch.object(stripe.PaymentIntent, "create", side_effect=error) as create:
        response = client.post("/process-payment", json={"amount": 500})

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert "Network is unreachable" in response.json()["details"]
    assert create.call_count == 1


def test_malformed_json(client):
    with create_intent_mock() as create:
        response = client.post(
            "/process-payment",
            content=b"{amount: 500",
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert response.json()["details"]
    assert_cors(response)
    create.assert_not_called()


def test_get_is_not_allowed(client):
    with create_intent_mock() as create:
        response = client.get("/process-payment")

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert response.headers["content-type"] == "application/json"
    assert_cors(response)
    create.assert_not_called()


def test_handler_runs_in_threadpool(client):
    result = PaymentResult(client_secret="pi_1_secret", payment_intent_id="pi_1", amount=700)
    with patch("api.payment.run_in_threadpool", new=AsyncMock(return_value=result)) as run:
        response = client.post("/process-payment", content=b'{"amount": 700}')

    assert response.status_code == 200
    assert response.json()["payment_intent_id"] == "pi_1"
    run.assert_awaited_once()
    assert run.await_args.args[1] == b'{"amount": 700}'
