from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatpush import __version__
from chatpush.config import Settings, get_settings
from chatpush.interfaces.api.dependencies import DemoBackendState
from chatpush.interfaces.api.routes import register_routes
from chatpush.utils import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the demo backend application."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start with empty volatile state and drop it on shutdown."""

        app.state.settings = settings
        app.state.backend = DemoBackendState.from_settings(settings)
        logger.info("Chat notification backend %s started", __version__)
        yield
        logger.info("Chat notification backend stopped; in-memory state discarded")

    app = FastAPI(title="Chat Notification Backend", version=__version__, lifespan=lifespan)

    # The demo backend is called from emulators and devices on the local network.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
