from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .captcha import CaptchaVerifier
from .config import Settings
from .database import BookingStore, make_session_factory
from .intake import BookingIntake
from .rate_limiter import RateLimiter
from .services.email_service import BookingNotifier


def build_intake(settings: Settings) -> BookingIntake:
    return BookingIntake(
        rate_limiter=RateLimiter(
            settings.RATE_LIMIT_MAX,
            settings.RATE_LIMIT_WINDOW_SECONDS,
            storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        ),
        verifier=CaptchaVerifier(
            settings.RECAPTCHA_SECRET,
            verify_url=settings.RECAPTCHA_VERIFY_URL,
            timeout=settings.RECAPTCHA_TIMEOUT,
        ),
        store=BookingStore(make_session_factory(settings.DATABASE_URL)),
        notifier=BookingNotifier.from_settings(settings),
        notify_policy=settings.NOTIFY_FAILURE_POLICY,
    )


async def read_payload(request: Request):
    """JSON or urlencoded form body; anything unreadable becomes an empty form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        try:
            form = await request.form()
        except HTTPException:
            return {}
        return dict(form)
    try:
        return await request.json()
    except ValueError:
        return {}


# ================== APP ==================
def create_app(settings: Optional[Settings] = None, intake: Optional[BookingIntake] = None) -> FastAPI:
    if intake is None:
        intake = build_intake(settings or Settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await intake.aclose()

    app = FastAPI(title="Lotus Cabs Booking", lifespan=lifespan)
    app.state.intake = intake
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/book")
    async def book(request: Request):
        client_address = request.client.host if request.client else "unknown"
        outcome = await request.app.state.intake.handle(client_address, lambda: read_payload(request))
        return JSONResponse(outcome.body(), status_code=outcome.status_code, headers=outcome.headers)

    return app


app = create_app()
