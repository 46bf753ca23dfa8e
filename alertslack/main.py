"""alertslack - FastAPI application relaying Grafana alerts to Slack."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from alertslack import __version__
from alertslack.channels.slack import SlackChannel
from alertslack.config import get_settings
from alertslack.errors import DecodeError
from alertslack.gateway import WebhookGateway

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global gateway instance
gateway: WebhookGateway | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    global gateway

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration, set ALERTSLACK_WEBHOOK_URL and friends: {e}")
        gateway = None
    else:
        logging.getLogger().setLevel(settings.log_level.upper())
        channel = SlackChannel(settings.webhook_url, timeout=settings.request_timeout)
        gateway = WebhookGateway(settings, channel)
        logger.info(
            f"Relaying to Slack as '{settings.username}' "
            f"(source_mode={settings.source_mode}, silence_buttons={settings.silence_buttons})"
        )

    logger.info("starting the server")

    yield

    gateway = None
    logger.info("server stopped")


app = FastAPI(
    title="alertslack",
    description="Relays Grafana alert webhooks to Slack",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/slack")
async def slack_webhook(request: Request, channel: str | None = None) -> Response:
    """Receive a Grafana alert webhook and forward it to Slack."""
    if not gateway:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Gateway not configured. Check ALERTSLACK_* environment.",
        )

    body = await request.body()
    try:
        report = await gateway.handle(body, channel)
    except DecodeError as e:
        logger.error(f"Failed to decode webhook body: {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if not report.ok:
        return PlainTextResponse(report.last_error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(status_code=status.HTTP_200_OK)


def run() -> None:
    """Run the application using uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "alertslack.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run()
