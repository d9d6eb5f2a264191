# File: main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

import database
from auth.router import router as auth_router
from config import settings
from errors import register_exception_handlers
from mailer import Mailer
from payments import StripeClient
from routers.contact import router as contact_router
from routers.orders import router as orders_router
from routers.payment_intents import router as payment_intents_router
from routers.products import router as products_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(db=None, mailer=None, payments=None, client=None) -> FastAPI:
    """
    Build the application. Connection handles are created once here and kept
    on app.state; routers reach them through dependencies. Tests pass their
    own db / mailer / payments, or a client.
    """
    if db is None:
        if client is None:
            client = database.get_client(settings)
        db = client[settings.MONGO_DB_NAME]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # An unreachable database is logged, the server still starts.
        # pymongo blocks until server selection times out, keep it off the loop.
        if client is not None:
            await run_in_threadpool(database.ping, client)
        await run_in_threadpool(database.ensure_indexes, db)
        logger.info("Server running on port %s", settings.PORT)
        yield
        if client is not None:
            client.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Backend services for the Style Hub store.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.db = db
    app.state.mailer = mailer or Mailer.from_settings(settings)
    app.state.payments = payments or StripeClient.from_settings(settings)

    # --- CORS Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # --- Include Routers ---
    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(payment_intents_router)
    app.include_router(orders_router)
    app.include_router(contact_router)

    # --- Root Endpoint ---
    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "Welcome to Style Hub!"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
