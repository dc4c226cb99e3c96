"""Logfire setup for the API and the migration runner.

Services log through ``logfire`` directly: a span per service operation
(``with logfire.span("comment_service.create_reply", ...)``) and structured
``logfire.info`` / ``warn`` / ``error`` events inside it. This module only
configures the exporter and instruments the frameworks.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import ObservabilitySettings, Settings

SERVICE_NAME = "agora-backend"

# Probes hit these constantly and carry no signal
UNTRACED_URLS = "/health"


def _should_send(observability: ObservabilitySettings) -> bool:
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is created.

    Telemetry leaves the process only when ``send_to_logfire`` says so, or,
    when that is unset, when a token is configured. Console output is
    always on and becomes verbose in debug mode.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes.

    Spans are tagged with the method and path; headers (and with them the
    ``auth_token`` cookie) are never captured.
    """

    def _request_attributes(request, attributes):
        result = dict(attributes)
        result["path"] = request.url.path
        if hasattr(request, "method"):
            result["method"] = request.method
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace the queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
