"""
External token retrieval.

Fetches a single (divisor, word) rule from the third-party token service over
HTTP. The service is hosted on a platform that puts idle apps to sleep, so a
503 answer is reported distinctly from other failures.

Usage:
    token: ExternalToken = await token_fetch()
    result: FetchResult = await token_get()
"""

from typing import Optional
import httpx
from pydantic import ValidationError
from tfizz.config.settings import appsettings
from tfizz.models.dataModel import ExternalToken, FetchResult
from tfizz.lib.log import LOG


class TokenFetchError(Exception):
    """Raised when the external token cannot be obtained."""


class ServiceUnavailable(TokenFetchError):
    """Raised when the token service answers 503 (asleep or restarting)."""


def client_create() -> httpx.AsyncClient:
    """Build an HTTP client configured from application settings."""
    return httpx.AsyncClient(
        headers={"User-Agent": appsettings.user_agent},
        timeout=appsettings.request_timeout,
    )


async def token_fetch(client: Optional[httpx.AsyncClient] = None) -> ExternalToken:
    """Fetch the external token.

    Args:
        client: HTTP client to use; a settings-configured one is created
            (and closed) when omitted

    Returns:
        ExternalToken: the fetched rule

    Raises:
        ServiceUnavailable: if the service answers 503
        TokenFetchError: on any other HTTP, transport or payload error
    """
    url: str = appsettings.token_endpoint()
    if client is None:
        async with client_create() as owned:
            return await token_fetch(owned)

    try:
        response: httpx.Response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        LOG(f"Token service at {url} answered {e.response.status_code}")
        if e.response.status_code == httpx.codes.SERVICE_UNAVAILABLE:
            raise ServiceUnavailable(
                "The token service is idle and restarting, try again shortly"
            ) from e
        raise TokenFetchError(
            f"Token service answered HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        LOG(f"Token request to {url} failed: {e}")
        raise TokenFetchError(f"Token request failed: {e}") from e

    try:
        token: ExternalToken = ExternalToken.model_validate_json(response.content)
    except ValidationError as e:
        LOG(f"Unusable token payload: {response.text!r}")
        raise TokenFetchError(f"Invalid token payload: {e}") from e

    LOG(f"Fetched external token {token.number} -> {token.word}")
    return token


async def token_get(client: Optional[httpx.AsyncClient] = None) -> FetchResult:
    """Fetch the external token, reporting failures in the result.

    Args:
        client: optional HTTP client, see `token_fetch`

    Returns:
        FetchResult: status, token and failure message
    """
    try:
        token: ExternalToken = await token_fetch(client)
    except ServiceUnavailable as e:
        return FetchResult(status=False, unavailable=True, message=str(e))
    except TokenFetchError as e:
        return FetchResult(status=False, message=str(e))
    return FetchResult(status=True, token=token)
