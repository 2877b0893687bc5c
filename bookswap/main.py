from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from typing import Optional

from .config import Settings, settings as default_settings
from .dataBase import build_repository
from .logging_config import setup_logging
from .routes import book_routes, feedback_routes, stats_routes, swap_request_routes, user_routes
from .services import BookSwapService


def create_app(service: Optional[BookSwapService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the HTTP application around a registry service.

    Without an explicit ``service`` one is created over the store named
    by ``settings.store_backend``.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.service = service or BookSwapService(
        build_repository(settings),
        recent_books_limit=settings.recent_books_limit,
        leaderboard_size=settings.leaderboard_size,
    )

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    for router in (user_routes, book_routes, swap_request_routes, feedback_routes, stats_routes):
        app.include_router(router)

    return app


app = create_app()
