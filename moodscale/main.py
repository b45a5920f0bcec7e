import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from moodscale.config import Settings, load_settings
from moodscale.db.mood_repository import MOOD_RANGE_MESSAGE
from moodscale.errors import MoodScaleError
from moodscale.routers import health_router
from moodscale.routers import mood_router
from moodscale.routers import music_router
from moodscale.routers import playlist_router
from moodscale.routers import insight_router
from moodscale.services.ai_service import AIService
from moodscale.services.spotify_service import SpotifyService

logger = logging.getLogger(__name__)


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any("mood" in err.get("loc", ()) for err in errors):
        return MOOD_RANGE_MESSAGE
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")


async def handle_app_error(request: Request, exc: MoodScaleError):
    logger.error("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("MoodScale backend using database %r", settings.db_name)
        logger.info("Gemini AI: %s", "enabled" if settings.ai_enabled else "disabled (set GEMINI_API_KEY)")
        logger.info(
            "Spotify: %s",
            "enabled" if settings.spotify_enabled
            else "disabled (set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET)",
        )
        yield

    app = FastAPI(
        title="MoodScale Backend",
        description="Mood journaling API with AI insights and music analysis.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ai_service = AIService.from_settings(settings)
    app.state.spotify_service = SpotifyService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MoodScaleError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router)
    app.include_router(mood_router.router)
    app.include_router(music_router.router)
    app.include_router(playlist_router.router)
    app.include_router(insight_router.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
