from __future__ import annotations
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, ORJSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import Principal, authenticate, ensure_admin, login
from .config import Settings
from .errors import ServiceError, StorageFailure
from .infra.sql import make_async_engine
from .model.db import Base
from .model import catalog, orders, stats
from .qr import QRRenderer, PngQRRenderer

HERE = Path(__file__).resolve().parent
SITE_NAME = "ConcertHub"

templates = Jinja2Templates(directory=str(HERE / "templates"))


# ----------------------------
# Dependencies
# ----------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_qr(request: Request) -> QRRenderer:
    return request.app.state.qr


async def get_db(request: Request) -> AsyncSession:
    async with request.app.state.SessionAsync() as session:
        yield session


def current_user(
    request: Request, settings: Settings = Depends(get_settings)
) -> Principal:
    principal = authenticate(request.headers.get("authorization"), settings)
    request.state.user = principal
    return principal


# ---
# startup / shutdown
# ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine, SessionAsync = make_async_engine(settings.database_url)
    app.state.engine = engine
    app.state.SessionAsync = SessionAsync

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with SessionAsync() as db:
        await ensure_admin(db, settings)
        if settings.seed_concerts:
            await catalog.seed_concerts(db)

    print('\n' * 2)
    print('=' * 50)
    print(f'{SITE_NAME} is starting up...')
    print(f'   - Database:    {settings.database_url}')
    print(f'   - Main site:   http://localhost:{settings.port}/')
    print(f'   - Admin panel: http://localhost:{settings.port}/admin')
    print('=' * 50)
    print('\n' * 2)

    try:
        yield
    finally:
        await engine.dispose()
        app.state.engine = None
        app.state.SessionAsync = None
        print('✅ Database connection closed')


# ----------------------------
# Error rendering
# ----------------------------
def _error(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse({"error": message}, status_code=status_code)


async def _service_error(request: Request, exc: ServiceError):
    return _error(exc.status_code, exc.message)


async def _storage_error(request: Request, exc: SQLAlchemyError):
    print("Database error:", exc)
    failure = StorageFailure()
    return _error(failure.status_code, failure.message)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


async def _validation_error(request: Request, exc: RequestValidationError):
    return _error(422, "Invalid request")


# ----------------------------
# App factory
# ----------------------------
def create_app(
    settings: Optional[Settings] = None, qr: Optional[QRRenderer] = None
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title=SITE_NAME,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.qr = qr or PngQRRenderer()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.mount("/static", StaticFiles(directory=str(HERE / "static")),
              name="static")

    app.add_exception_handler(ServiceError, _service_error)
    app.add_exception_handler(SQLAlchemyError, _storage_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    # ==================== AUTH ====================
    @app.post("/api/auth/login")
    async def api_login(
        payload: dict,
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        return await login(
            db, settings, payload.get("username"), payload.get("password")
        )

    # ==================== CONCERTS ====================
    @app.get("/api/concerts")
    async def api_list_concerts(db: AsyncSession = Depends(get_db)):
        return await catalog.list_concerts(db)

    @app.get("/api/concerts/{concert_id}")
    async def api_get_concert(
        concert_id: str, db: AsyncSession = Depends(get_db)
    ):
        return await catalog.get_concert(db, concert_id)

    @app.post("/api/concerts", status_code=201)
    async def api_create_concert(
        payload: dict,
        user: Principal = Depends(current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await catalog.create_concert(db, payload)

    @app.put("/api/concerts/{concert_id}")
    async def api_update_concert(
        concert_id: str,
        payload: dict,
        user: Principal = Depends(current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await catalog.update_concert(db, concert_id, payload)

    @app.delete("/api/concerts/{concert_id}")
    async def api_delete_concert(
        concert_id: str,
        user: Principal = Depends(current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await catalog.delete_concert(db, concert_id)

    # ==================== ORDERS ====================
    @app.get("/api/orders")
    async def api_list_orders(
        user: Principal = Depends(current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await orders.list_orders(db)

    @app.post("/api/orders", status_code=201)
    async def api_create_order(
        payload: dict,
        db: AsyncSession = Depends(get_db),
        qr: QRRenderer = Depends(get_qr),
    ):
        return await orders.create_order(db, qr, payload)

    # ==================== STATS ====================
    @app.get("/api/stats")
    async def api_stats(
        user: Principal = Depends(current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await stats.get_stats(db)

    # ==================== PAGES ====================
    @app.get("/", response_class=HTMLResponse)
    async def storefront_page(request: Request):
        return templates.TemplateResponse(
            request, "index.html", {"site_name": SITE_NAME}
        )

    @app.get("/admin", response_class=HTMLResponse)
    async def admin_page(request: Request):
        return templates.TemplateResponse(
            request, "admin.html", {"site_name": SITE_NAME}
        )

    return app


app = create_app()
