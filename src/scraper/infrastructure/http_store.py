import asyncio

import aiohttp
from aiohttp import (
    ClientConnectorError,
    ClientPayloadError,
    ClientResponseError,
    ServerDisconnectedError,
)

from src.config.logger_config import logger
from src.scraper.domain.errors import TransportError


class AiohttpDocumentStore:
    """Document store over a shared aiohttp session.

    Retries on 5xx/429 and connection failures with exponential backoff;
    any other non-200 status fails immediately.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        retries: int = 3,
        request_timeout: float = 45.0,
        connect_timeout: float = 10.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.session = session
        self.retries = max(1, retries)
        self.timeout = aiohttp.ClientTimeout(total=request_timeout, connect=connect_timeout)
        self.headers = headers or {}

    async def fetch(self, url: str) -> str:
        for attempt in range(1, self.retries + 1):
            try:
                async with self.session.get(url, headers=self.headers, timeout=self.timeout) as resp:
                    if resp.status >= 500 or resp.status == 429:
                        logger.warning(
                            "Server error {} for {}. Attempt {}/{}",
                            resp.status,
                            url,
                            attempt,
                            self.retries,
                        )
                        raise ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp.status,
                            message="Server Error",
                        )

                    if resp.status != 200:
                        raise TransportError(url, f"HTTP {resp.status}", status=resp.status)

                    return await resp.text()

            except (
                ClientResponseError,
                ClientConnectorError,
                ServerDisconnectedError,
                asyncio.TimeoutError,
                ClientPayloadError,
            ) as exc:
                if attempt == self.retries:
                    logger.error("Failed {} after {} attempts. Error: {}", url, self.retries, exc)
                    raise TransportError(
                        url,
                        f"{type(exc).__name__}: {exc}",
                        status=getattr(exc, "status", None),
                    ) from exc
                wait_time = 2**attempt
                logger.warning("Connection unstable ({}). Retrying in {}s...", exc, wait_time)
                await asyncio.sleep(wait_time)
            except (aiohttp.ClientError, UnicodeDecodeError) as exc:
                raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc

        raise TransportError(url, "no attempt made")
