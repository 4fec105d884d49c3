"""
Logging Hooks for Outgoing API Requests

These httpx event hooks log every request the client sends to the API.
They capture:
- Request method and path
- Response status code
- Round-trip time

Design Decisions:
- Uses httpx event hooks so the API client code stays free of logging calls
- Logs to standard Python logging under the "tinylink.http" logger
- Start time is stored on the request's extensions dict
"""

import time
import logging

import httpx

logger = logging.getLogger("tinylink.http")

_START_KEY = "tinylink_start_time"


class RequestLogger:
    """
    Event hooks for logging HTTP requests and responses.

    Logs one line per completed request:
        METHOD PATH STATUS_CODE ELAPSED_MS
    """

    async def on_request(self, request: httpx.Request) -> None:
        """Record start time for the request."""
        request.extensions[_START_KEY] = time.perf_counter()
        logger.debug(f"--> {request.method} {request.url.path}")

    async def on_response(self, response: httpx.Response) -> None:
        """Log request details once the response headers arrive."""
        request = response.request
        start_time = request.extensions.get(_START_KEY)
        elapsed = (time.perf_counter() - start_time) * 1000 if start_time else 0.0

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {elapsed:.2f}ms"
        )


def logging_event_hooks() -> dict:
    """
    Build the event_hooks mapping for an httpx.AsyncClient.

    Returns:
        Dict with "request" and "response" hook lists
    """
    hooks = RequestLogger()
    return {"request": [hooks.on_request], "response": [hooks.on_response]}
