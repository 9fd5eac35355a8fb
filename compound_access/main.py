# =======================================================================================
# compound_access/main.py - FastAPI Application Entry Point
# =======================================================================================
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from . import __version__
from .config import config
from .api.routes.residents import router as residents_router
from .api.routes.access_logs import router as access_logs_router
from .api.routes.dashboard import router as dashboard_router
from .api.routes.scan import router as scan_router
from .api.routes.scanner import router as scanner_router
from .api.routes.users import router as users_router
from .database import db_manager
from .models.schemas import HealthResponse
from .services.seed_service import SeedService
from .workers.scanner_worker import stop_scanner_worker


def create_app() -> FastAPI:
    app = FastAPI(
        title="Compound Access API",
        version=__version__,
        description="Resident directory, QR access credentials and gate access logs",
        debug=config.API_DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(residents_router, prefix="/api", tags=["residents"])
    app.include_router(access_logs_router, prefix="/api", tags=["access-logs"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])
    app.include_router(scan_router, prefix="/api", tags=["scan"])
    app.include_router(scanner_router, prefix="/api", tags=["scanner"])
    app.include_router(users_router, prefix="/api", tags=["users"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        try:
            db_manager.fetch_one("SELECT 1")
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except Exception as e:
            return HealthResponse(
                status="error", dataAvailable=False, message=str(e)
            )

    @app.on_event("startup")
    def startup_event():
        db_manager.ensure_schema()
        if config.SEED_DEMO_DATA:
            with db_manager.get_connection() as conn:
                SeedService().seed_if_empty(conn)
        if config.API_DEBUG:
            print("Compound Access API started successfully")

    @app.on_event("shutdown")
    def shutdown_event():
        stop_scanner_worker()

    return app


app = create_app()


def run():
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
