import pytest

from ride_booking.intake import (
    Outcome,
    check_mobile,
    check_required,
    check_route,
    extract_token,
    rejected,
)
from ride_booking.schemas import BookingSubmission


def submission(**fields):
    data = {"pickupCity": "Pune", "dropCity": "Mumbai", "name": "Neha", "mobile": "8123456789"}
    data.update(fields)
    return BookingSubmission(**data)


def test_outcome_body():
    assert Outcome().body() == {"success": True}
    assert Outcome(status_code=500).body() == {"success": False}
    assert rejected("Invalid mobile number").body() == {"success": False, "message": "Invalid mobile number"}


def test_valid_submission_passes_checks():
    sub = submission()
    assert check_required(sub) is None
    assert check_mobile(sub) is None
    assert check_route(sub) is None


@pytest.mark.parametrize("mobile", ["6000000000", "7999999999", "8123456789", "9876543210"])
def test_mobile_first_digit_six_to_nine(mobile):
    assert check_mobile(submission(mobile=mobile)) is None


@pytest.mark.parametrize("ride_type", ["local", "airport", None])
def test_same_city_only_blocked_for_outstation(ride_type):
    assert check_route(submission(rideType=ride_type, dropCity="Pune")) is None
    assert check_route(submission(rideType="outstation", dropCity="Pune")).status_code == 400


@pytest.mark.parametrize("payload,expected", [
    ({"verificationToken": "a"}, "a"),
    ({"recaptchaToken": "b"}, "b"),
    ({"verificationToken": "", "recaptchaToken": "b"}, "b"),
    ({}, None),
    (["a"], None),
    ("a", None),
])
def test_extract_token(payload, expected):
    assert extract_token(payload) == expected
