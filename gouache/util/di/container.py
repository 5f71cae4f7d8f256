"""Dependency injection container."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from gouache.util.di import select_providers


def create_container() -> AsyncContainer:
    """Build the production container.

    Settings come from the environment. The FastAPI provider is included
    so request-scoped dependencies can see the incoming request.

    Returns:
        Container with every component on its production implementation
    """
    providers = select_providers()
    logfire.debug(
        "DI container built",
        providers=[type(provider).__name__ for provider in providers],
    )
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app.

    Routes using DishkaRoute resolve their FromDishka parameters from it.
    """
    setup_dishka(container, app)
