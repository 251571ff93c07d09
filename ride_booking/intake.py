"""
Booking intake pipeline.

A submission passes through a fixed sequence of steps. Each step either
returns ``None`` to let the next one run or an ``Outcome`` that ends the
request. Nothing raised inside a step escapes ``BookingIntake.handle``.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .models import Booking
from .rate_limiter import RATE_LIMIT_MESSAGE
from .schemas import BookingSubmission

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"[6-9][0-9]{9}")

CAPTCHA_REQUIRED = "Captcha required"
CAPTCHA_FAILED = "Captcha verification failed"
INVALID_DETAILS = "Invalid booking details"
MISSING_FIELDS = "Please fill all required fields"
INVALID_MOBILE = "Invalid mobile number"
SAME_CITY = "Pickup and Drop city cannot be the same for outstation rides"

# "recaptchaToken" is what older versions of the booking page send
TOKEN_FIELDS = ("verificationToken", "recaptchaToken")

NOTIFY_BEST_EFFORT = "best_effort"
NOTIFY_STRICT = "strict"


@dataclass(frozen=True)
class Outcome:
    status_code: int = 200
    message: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status_code < 400

    def body(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.message is not None:
            data["message"] = self.message
        return data


ACCEPTED = Outcome()
SERVER_ERROR = Outcome(status_code=500)


def rejected(message: str, status_code: int = 400, **headers: str) -> Outcome:
    return Outcome(status_code=status_code, message=message, headers=headers)


# ================== VALIDATION ==================
def extract_token(payload: Any) -> Optional[str]:
    if not isinstance(payload, Mapping):
        return None
    for key in TOKEN_FIELDS:
        value = payload.get(key)
        if value:
            return str(value)
    return None


def check_required(submission: BookingSubmission) -> Optional[Outcome]:
    required = (submission.pickupCity, submission.dropCity, submission.mobile, submission.name)
    if not all(required):
        return rejected(MISSING_FIELDS)
    return None


def check_mobile(submission: BookingSubmission) -> Optional[Outcome]:
    if not MOBILE_PATTERN.fullmatch(submission.mobile or ""):
        return rejected(INVALID_MOBILE)
    return None


def check_route(submission: BookingSubmission) -> Optional[Outcome]:
    if submission.rideType == "outstation" and submission.pickupCity == submission.dropCity:
        return rejected(SAME_CITY)
    return None


def build_booking(submission: BookingSubmission) -> Booking:
    return Booking(
        ride_type=submission.rideType,
        pickup_city=submission.pickupCity,
        drop_city=submission.dropCity,
        pickup_address=submission.pickupAddress,
        date=submission.date,
        time=submission.time,
        vehicle=submission.vehicle,
        name=submission.name,
        mobile=submission.mobile,
        instructions=submission.instructions,
    )


# ================== PIPELINE ==================
class BookingIntake:
    """Runs a submission through rate limit, captcha, validation, storage and email."""

    def __init__(self, rate_limiter, verifier, store, notifier,
                 notify_policy: str = NOTIFY_BEST_EFFORT):
        if notify_policy not in (NOTIFY_BEST_EFFORT, NOTIFY_STRICT):
            raise ValueError(f"Unknown notify failure policy: {notify_policy!r}")
        self.rate_limiter = rate_limiter
        self.verifier = verifier
        self.store = store
        self.notifier = notifier
        self.notify_policy = notify_policy

    def check_rate_limit(self, client_address: str) -> Optional[Outcome]:
        allowed, retry_after = self.rate_limiter.check(client_address)
        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_address)
            return rejected(RATE_LIMIT_MESSAGE, status_code=429, **{"Retry-After": str(retry_after)})
        return None

    async def check_captcha(self, token: Optional[str], client_address: str) -> Optional[Outcome]:
        if not token:
            return rejected(CAPTCHA_REQUIRED)
        try:
            verified = await self.verifier.verify(token, remote_ip=client_address)
        except Exception:
            logger.exception("Captcha verification call failed")
            return SERVER_ERROR
        if not verified:
            return rejected(CAPTCHA_FAILED)
        return None

    async def persist(self, booking: Booking) -> Optional[Outcome]:
        try:
            await run_in_threadpool(self.store.add, booking)
        except Exception:
            logger.exception("Failed to store booking")
            return SERVER_ERROR
        logger.info("Booking %s stored (%s, %s -> %s)",
                    booking.id, booking.ride_type, booking.pickup_city, booking.drop_city)
        return None

    async def notify(self, booking: Booking) -> Optional[Outcome]:
        try:
            await self.notifier.send(booking)
        except Exception:
            logger.exception("Failed to send notification for booking %s", booking.id)
            if self.notify_policy == NOTIFY_STRICT:
                return SERVER_ERROR
        return None

    async def handle(self, client_address: str,
                     load_payload: Callable[[], Awaitable[Any]]) -> Outcome:
        """The body is only read once the address has passed the rate limit."""
        outcome = self.check_rate_limit(client_address)
        if outcome:
            return outcome

        payload = await load_payload()

        outcome = await self.check_captcha(extract_token(payload), client_address)
        if outcome:
            return outcome

        try:
            submission = BookingSubmission.model_validate(payload)
        except ValidationError as exc:
            fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
            logger.info("Unreadable booking form from %s: bad fields %s", client_address, fields)
            return rejected(INVALID_DETAILS)

        for check in (check_required, check_mobile, check_route):
            outcome = check(submission)
            if outcome:
                logger.info("Booking rejected for %s: %s", client_address, outcome.message)
                return outcome

        booking = build_booking(submission)
        outcome = await self.persist(booking)
        if outcome:
            return outcome

        outcome = await self.notify(booking)
        if outcome:
            return outcome

        return ACCEPTED

    async def aclose(self) -> None:
        await self.verifier.aclose()
