from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from order_desk.core.config import get_settings
from order_desk.db.config import get_async_session_context
from order_desk.db.init_db import init_db, dispose_db
from order_desk.db.store import SQLBlobStore
from order_desk.routers import auth
from order_desk.routers.customers import orders as customer_orders
from order_desk.routers.deliveries import orders as delivery_orders
from order_desk.routers.vendors import orders as vendor_orders
from order_desk.services.directory import IdentityDirectory


async def seed_demo_accounts() -> None:
    async with get_async_session_context() as session:
        directory = IdentityDirectory(
            SQLBlobStore(session), key=get_settings().users_key
        )
        await directory.seed_demo_accounts()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Asynchronous context manager for managing the lifespan of the FastAPI application.

    Creates the tables, seeds the demo accounts when enabled and no account
    exists, and disposes of the engine on shutdown.

    Parameters:
    - app (FastAPI): The FastAPI application.

    Yields:
    None
    """
    await init_db()
    if get_settings().seed_demo_accounts:
        await seed_demo_accounts()
    yield
    await dispose_db()


app = FastAPI(
    debug=get_settings().debug,
    title=get_settings().app_name,
    version=get_settings().app_version,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# ADD MIDDLEWARES
## ADD CORS MIDDLEWARE
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allowed_origins,
    allow_credentials=get_settings().cors_allow_credentials,
    allow_methods=get_settings().cors_allowed_methods,
    allow_headers=["*"],
)


# ADD ROUTERS
app.include_router(auth.router)
app.include_router(customer_orders.router)
app.include_router(vendor_orders.router)
app.include_router(delivery_orders.router)


@app.get("/", include_in_schema=False)
@app.head("/", include_in_schema=False)
async def read_root(request: Request):
    base_url = str(request.base_url).rstrip("/")
    return {
        "message": "Welcome to the Order Desk API",
        "version": get_settings().app_version,
        "docs": {
            "redoc": f"{base_url}/api/redoc",
            "swagger": f"{base_url}/api/docs",
            "openapi": f"{base_url}/api/openapi.json",
        },
    }
