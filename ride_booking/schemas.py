from typing import Optional

from pydantic import BaseModel, ConfigDict


class BookingSubmission(BaseModel):
    """Ride booking form as posted by the website, minus the captcha token.

    Every field is optional at this level so that missing values are reported
    by the intake checks with their own messages instead of a 422.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    rideType: Optional[str] = None
    pickupCity: Optional[str] = None
    dropCity: Optional[str] = None
    pickupAddress: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    vehicle: Optional[str] = None
    name: Optional[str] = None
    mobile: Optional[str] = None
    instructions: Optional[str] = None
