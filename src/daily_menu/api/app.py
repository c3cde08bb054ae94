"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from daily_menu.api.menus import router as menus_router
from daily_menu.app_logging import configure_logging
from daily_menu.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report body and path validation failures per field."""
        return JSONResponse(
            {"errors": [_field_error(error) for error in exc.errors()]},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    app.include_router(menus_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _field_error(error: dict[str, object]) -> dict[str, str]:
    location = [str(part) for part in tuple(error.get("loc", ()))[1:]]
    return {"field": ".".join(location), "message": str(error.get("msg", ""))}
