"""Production container and its FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import build_providers


def create_container() -> AsyncContainer:
    """Build the container served by the API, backed by PostgreSQL.

    Settings come from the environment when first resolved.
    """
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Let ``FromDishka`` route parameters resolve from ``container``."""
    setup_dishka(container, app)
