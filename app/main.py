from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.db import engine
from app.core.exceptions import GameError
from app.utils.exception_handlers import (
    game_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.utils.router_discovery import register_routers


@asynccontextmanager
async def app_lifespan(_: FastAPI) -> AsyncGenerator[None, FastAPI]:
    yield

    await engine.dispose()


app = FastAPI(
    title="Gacha Battle API",
    lifespan=app_lifespan,
    servers=[{"url": "http://localhost:3011", "description": "Local server"}],
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


register_routers(app)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(GameError, game_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/")
async def healthz() -> str:
    return "OK"
