"""FastAPI application factory."""

from fastapi import FastAPI

from site_ledger.api.allocations import router as allocations_router
from site_ledger.api.attendance import router as attendance_router
from site_ledger.api.summaries import router as summaries_router
from site_ledger.api.tea_shop import router as tea_shop_router
from site_ledger.app_logging import configure_logging
from site_ledger.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="Site Ledger")
    app.state.container = container

    app.include_router(tea_shop_router)
    app.include_router(attendance_router)
    app.include_router(allocations_router)
    app.include_router(summaries_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
