"""
RoomService Console API (FastAPI)
房東後台與房客點餐頁共用的後端
"""
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config.settings import get_settings
from .routers import buildings, catalog, guest, orders, units
from .services.errors import ConsoleError
from .services.logger import configure_logging, logger


def create_app() -> FastAPI:
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="RoomService Console API",
        description="Buildings, units, catalog and QR-linked guest orders",
        version=__version__,
    )

    # CORS (Allow Frontend to connect)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # For development; restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(buildings.router)
    app.include_router(units.router)
    app.include_router(catalog.menu_router)
    app.include_router(catalog.service_router)
    app.include_router(orders.router)
    app.include_router(guest.router)

    @app.exception_handler(ConsoleError)
    async def console_error_handler(request: Request, exc: ConsoleError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} 失敗: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.get("/")
    def root():
        return {
            "message": f"RoomService Console API v{__version__} is running",
            "timestamp": datetime.now().isoformat()
        }

    @app.get("/api/health")
    def health_check():
        """System Health Check"""
        return {"status": "healthy", "service": "backend"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roomservice.main:app", host="0.0.0.0", port=8000, reload=True)
