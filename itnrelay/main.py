"""Lambda entry point for the PayFast ITN receiver."""

from __future__ import annotations

import base64
import binascii
import functools
import json
from typing import Any

import httpx

from itnrelay import __version__
from itnrelay.clients.payfast import PayfastValidator
from itnrelay.clients.relay import RelayClient
from itnrelay.models.config import Settings  # noqa: TC001
from itnrelay.utils.config_loader import ConfigLoaderError, load_settings
from itnrelay.utils.logging import configure_logging, get_logger
from itnrelay.webhook.handler import HandlerResult, NotificationHandler

# Configure logging on module load
configure_logging()
logger = get_logger("main")


@functools.cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return load_settings()


def _http_client() -> httpx.Client:
    """Create the HTTP client shared by both outbound calls of one invocation."""
    return httpx.Client()


def create_handler(settings: Settings, client: httpx.Client) -> NotificationHandler:
    """Wire a NotificationHandler to its HTTP collaborators.

    Args:
        settings: Receiver settings.
        client: HTTP client for PayFast validation and the relay.

    Returns:
        NotificationHandler instance.
    """
    return NotificationHandler(
        settings=settings,
        validator=PayfastValidator(settings.provider_validate_url, client),
        relay=RelayClient(settings.relay_endpoint, client),
    )


def _create_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    """Create a Lambda response.

    Args:
        status_code: HTTP status code.
        body: Response body dictionary.

    Returns:
        Lambda response dictionary.
    """
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
        },
        "body": json.dumps(body),
    }


def _result_response(result: HandlerResult) -> dict[str, Any]:
    if result.ok:
        return _create_response(
            result.status_code,
            {"status": result.session.state.value, "message": result.message},
        )
    return _create_response(
        result.status_code,
        {"error": result.error, "message": result.message},
    )


def _decode_body(event: dict[str, Any]) -> str:
    """Return the request body as text, undoing API Gateway's base64 encoding.

    Raises:
        ValueError: If a base64 body cannot be decoded.
    """
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 body: {e}") from e

    if isinstance(body, bytes):
        return body.decode("utf-8")
    return body


def _handle_itn(event: dict[str, Any]) -> dict[str, Any]:
    """Handle an ITN POST.

    Args:
        event: Lambda event from API Gateway.

    Returns:
        Lambda response dictionary.
    """
    try:
        body = _decode_body(event)
    except ValueError as e:
        logger.warning("Undecodable ITN body", extra={"error": str(e)})
        return _create_response(
            400,
            {
                "error": "malformed_request",
                "message": "Request body could not be decoded",
            },
        )

    try:
        settings = get_settings()
    except ConfigLoaderError as e:
        logger.error("Invalid receiver settings", extra={"error": str(e)})
        return _create_response(
            500,
            {
                "error": "configuration_error",
                "message": "Receiver settings are invalid",
            },
        )

    with _http_client() as client:
        result = create_handler(settings, client).handle(body)

    return _result_response(result)


def _handle_health() -> dict[str, Any]:
    """Handle health check request.

    Returns:
        Lambda response dictionary.
    """
    return _create_response(
        200,
        {
            "status": "healthy",
            "version": __version__,
        },
    )


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:  # noqa: ARG001
    """AWS Lambda handler for ITN requests.

    Args:
        event: Lambda event from API Gateway.
        context: Lambda context (unused but required by AWS Lambda).

    Returns:
        Lambda response dictionary.
    """
    path = event.get("path", "")
    method = (event.get("httpMethod") or "").upper()

    logger.info(
        "Request received",
        extra={"path": path, "method": method},
    )

    if path == "/health" and method == "GET":
        return _handle_health()

    if method != "POST":
        return _create_response(
            405,
            {
                "error": "method_not_allowed",
                "message": f"Method not allowed: {method}",
            },
        )

    return _handle_itn(event)


def local_event(
    method: str,
    path: str,
    headers: dict[str, str],
    body: bytes,
) -> dict[str, Any]:
    """Build an API Gateway event from a raw HTTP request.

    The body is passed base64-encoded, so bytes that are not UTF-8 are
    rejected by the ITN path with a 400 like any other undecodable body.
    """
    return {
        "httpMethod": method,
        "path": path,
        "headers": headers,
        "body": base64.b64encode(body).decode("ascii"),
        "isBase64Encoded": True,
    }


# For local development
if __name__ == "__main__":
    import uvicorn
    from starlette.applications import Starlette
    from starlette.requests import Request  # noqa: TC002
    from starlette.responses import JSONResponse
    from starlette.routing import Route

    async def itn_route(request: Request) -> JSONResponse:
        """Forward ITN requests to the Lambda handler for local development."""
        body = await request.body()
        event = local_event(request.method, request.url.path, dict(request.headers), body)
        response = lambda_handler(event, None)
        return JSONResponse(
            content=json.loads(response["body"]),
            status_code=response["statusCode"],
        )

    async def health_route(request: Request) -> JSONResponse:
        """Handle health check requests for local development."""
        del request  # unused but required by Starlette routing
        response = lambda_handler({"httpMethod": "GET", "path": "/health"}, None)
        return JSONResponse(
            content=json.loads(response["body"]),
            status_code=response["statusCode"],
        )

    app = Starlette(
        routes=[
            Route("/itn", itn_route, methods=["GET", "POST", "PUT", "DELETE", "PATCH"]),
            Route("/health", health_route, methods=["GET"]),
        ]
    )

    print(f"Starting itnrelay v{__version__} on http://localhost:8000")
    uvicorn.run(app, host="0.0.0.0", port=8000)
