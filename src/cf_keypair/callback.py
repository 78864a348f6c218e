"""Single-shot delivery of the outcome to the CloudFormation response URL."""

import http.client
import logging
import urllib.error
import urllib.request
from urllib.parse import urlsplit

from .constants import DEFAULT_CALLBACK_TIMEOUT
from .errors import DeliveryError
from .events import Outcome

logger = logging.getLogger(__name__)


def send_response(
    url: str, outcome: Outcome, timeout: float = DEFAULT_CALLBACK_TIMEOUT
) -> int:
    """PUT ``outcome`` to ``url`` exactly once.

    The pre-signed URL rejects any content type it was not signed with, so the
    header is sent empty. The response body is drained but never inspected.

    Args:
        url: One-time ``https`` response URL.
        outcome: Outcome to serialize.
        timeout: Socket timeout in seconds.

    Returns:
        int: HTTP status code of the accepted response.

    Raises:
        DeliveryError: On a status of 400 or above, or any transport failure.
    """
    if urlsplit(url).scheme != "https":
        raise DeliveryError(f"response URL must use https: {url}")
    body = outcome.to_json()
    request = urllib.request.Request(
        url,
        data=body,
        method="PUT",
        headers={"content-type": "", "content-length": str(len(body))},
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:  # nosec B310
            response.read()
            status = response.status
    except urllib.error.HTTPError as exc:
        # Redirects are not followed for PUT and surface here with a 3xx code
        if exc.code >= 400:
            raise DeliveryError(f"HTTP {exc.code}") from exc
        status = exc.code
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise DeliveryError(f"callback delivery failed: {exc}") from exc
    if status >= 400:
        raise DeliveryError(f"HTTP {status}")
    logger.info("delivered %s response (HTTP %d)", outcome.status, status)
    return status
