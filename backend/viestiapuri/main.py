"""
main.py
--------
FastAPI-sovelluksen kokoaminen ja käynnistys.

Käynnistyksessä (lifespan):
1) lokitus alustetaan ja asetukset tarkistetaan (API-avain pakollinen)
2) tietokanta alustetaan
3) HTTP-asiakas tekoälypalvelua varten luodaan

Sammutuksessa, ja myös epäonnistuneen käynnistyksen jälkeen, jo luotu
HTTP-asiakas ja tietokantayhteys suljetaan aina.
"""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from viestiapuri.api import router as api_router
from viestiapuri.config import Settings, get_settings
from viestiapuri.database.connection import FeedbackStore
from viestiapuri.errors import ApiError, UpstreamError
from viestiapuri.logging_config import configure_logging
from viestiapuri.services.chat_service import ChatService
from viestiapuri.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: FeedbackStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Rakentaa sovelluksen. Testit antavat omat store- ja http_client-olionsa."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or get_settings()
        configure_logging(app_settings.log_level)
        app_settings.validate()

        app_store = None
        client = None
        try:
            app_store = store or FeedbackStore(app_settings.database_url, echo=app_settings.sql_echo)
            app_store.init_db()
            client = http_client or httpx.AsyncClient(timeout=None)

            app.state.feedback_service = FeedbackService(app_store)
            app.state.chat_service = ChatService(app_settings, client)
            yield
        finally:
            if client is not None:
                await client.aclose()
            if app_store is not None:
                app_store.close()

    app = FastAPI(
        title="Viestiapuri",
        description="Tekoälychatin välityspalvelin ja palauteseinä.",
        version="0.1",
        lifespan=lifespan,
    )

    # ✅ Salli yhteydet frontendiltä
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # --- API-reitit ---
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        """Tarkistus juurireitillä."""
        return {"message": "Viestiapuri - Backend toimii!"}

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Kaikki virheet muotoon {"success": false, "message"[, "error"]}."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        body = {"success": False, "message": exc.message}
        # Tekoälyvirheissä palautetaan myös tekninen syy
        if isinstance(exc, UpstreamError) and exc.detail:
            body["error"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Virheellinen pyyntö %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Virheellinen pyyntö"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Käsittelemätön virhe: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Palvelinvirhe"},
        )


app = create_app()


def run() -> None:
    """Käynnistää palvelimen (konsolikomento `viestiapuri`)."""
    settings = get_settings()
    configure_logging(settings.log_level)
    settings.validate()
    logger.info("Palvelin käynnistyy porttiin %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
