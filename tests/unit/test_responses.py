import json

from pydantic import ValidationError

from core.errors import ClientInputError, InvalidScheduleError, NotFoundError, StorageError
from core.models import TripPathParams
from core.responses import error_response, json_response, redirect_response


def _body(response):
    return json.loads(response["body"])


def test_json_response():
    response = json_response(201, {"tripId": "abc"})
    assert response["statusCode"] == 201
    assert response["headers"]["Content-Type"] == "application/json"
    assert _body(response) == {"tripId": "abc"}


def test_redirect_response():
    response = redirect_response("http://front.example.com/trips/abc")
    assert response["statusCode"] == 302
    assert response["headers"]["Location"] == "http://front.example.com/trips/abc"


def test_client_error_exposes_message():
    response = error_response(InvalidScheduleError("Invalid trip start date."))
    assert response["statusCode"] == 400
    assert _body(response)["error"] == {"code": "INVALID_SCHEDULE", "message": "Invalid trip start date."}


def test_not_found_is_404():
    response = error_response(NotFoundError("Trip not found!"))
    assert response["statusCode"] == 404
    assert _body(response)["error"]["code"] == "TRIP_NOT_FOUND"


def test_storage_error_hides_internal_message():
    response = error_response(StorageError("relation trips does not exist"))
    assert response["statusCode"] == 500
    assert "relation" not in response["body"]


def test_validation_error_is_400_with_details():
    try:
        TripPathParams(trip_id="nope")
    except ValidationError as e:
        response = error_response(e)

    assert response["statusCode"] == 400
    body = _body(response)
    assert body["error"]["code"] == "INVALID_REQUEST"
    assert body["error"]["details"][0]["loc"] == ["trip_id"]


def test_unexpected_error_is_500():
    response = error_response(RuntimeError("boom"))
    assert response["statusCode"] == 500
    assert "boom" not in response["body"]
    assert _body(response)["error"]["code"] == "INTERNAL_ERROR"


def test_client_input_error_default_code():
    assert _body(error_response(ClientInputError("bad email")))["error"]["code"] == "VALIDATION_ERROR"
