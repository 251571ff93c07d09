import logging
from typing import Optional

import httpx

from .config import RECAPTCHA_VERIFY_URL

logger = logging.getLogger(__name__)


class CaptchaVerifier:
    """Checks a client-supplied reCAPTCHA token against the siteverify API.

    Transport failures and non-2xx answers are raised to the caller; only an
    explicit ``success`` flag from the service counts as a pass.
    """

    def __init__(self, secret: str, verify_url: str = RECAPTCHA_VERIFY_URL,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.secret = secret
        self.verify_url = verify_url
        client_kwargs = {"transport": transport}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self.client = httpx.AsyncClient(**client_kwargs)

    async def verify(self, token: str, remote_ip: Optional[str] = None) -> bool:
        params = {"secret": self.secret, "response": token}
        if remote_ip:
            params["remoteip"] = remote_ip

        response = await self.client.post(self.verify_url, params=params)
        response.raise_for_status()

        data = response.json()
        if not data.get("success"):
            logger.info("Captcha rejected: %s", data.get("error-codes", []))
            return False
        return True

    async def aclose(self) -> None:
        await self.client.aclose()
