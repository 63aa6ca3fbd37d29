import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feescope import __version__
from feescope.core.config import Settings, get_settings
from feescope.core.container import ApplicationContainer, build_container
from feescope.interfaces.http import create_api_router


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.logging.level.upper(), format=settings.logging.format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Optional[ApplicationContainer] = app.state.container
    if container is None:
        container = build_container(app.state.settings)
        app.state.container = container
    configure_logging(container.settings)
    await container.startup()
    try:
        yield
    finally:
        await container.aclose()


def create_app(container: Optional[ApplicationContainer] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = container.settings if container is not None else (settings or get_settings())
    app = FastAPI(
        title=settings.project_name,
        description="Transaction fee spending across EVM chains for a wallet",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/healthz", include_in_schema=False)
    async def healthz():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
