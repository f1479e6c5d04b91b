"""FastAPI application entry point."""

import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from copilot.LLMClient import OpenAIClient
from copilot.SQLGenerator import SQLGenerator
from copilot.settings import Settings, configure_logging
from database.DatabaseProvider import DatabaseProvider
from database.QueryExecutor import QueryExecutor
from database.QueryService import QueryService
from database.SchemaProvider import SchemaProvider
from database.TableManager import TableManager

from api.exception_handlers import register_exception_handlers
from api.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up and tear down application-wide resources."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    db_provider = DatabaseProvider(settings.db_path, read_only=settings.db_read_only)
    executor = QueryExecutor(db_provider.get_connection())
    schema = SchemaProvider(executor)
    llm = OpenAIClient(
        settings.openai_api_key,
        model=settings.openai_model,
        max_prompt_tokens=settings.max_prompt_tokens,
    )

    app.state.schema = schema
    app.state.table_manager = TableManager(executor, schema)
    app.state.query_service = QueryService(executor)
    app.state.generator = SQLGenerator(schema, llm)

    logger.info("Database: %s (read_only=%s)", db_provider.path, db_provider.read_only)
    logger.info("AI service: OpenAI %s", settings.openai_model)

    yield

    db_provider.close()


app = FastAPI(
    title="SQL Copilot API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


def sql_preview(body: bytes, limit: int = 100) -> str | None:
    """Return the start of the ``sql`` field of a JSON body, if any."""
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("sql"), str):
        return payload["sql"][:limit]
    return None


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    if request.method == "POST":
        sql = sql_preview(await request.body())
        if sql is not None:
            logger.info("SQL: %s", sql)
    return await call_next(request)


app.include_router(router)


def serve() -> None:
    """Start the uvicorn server using environment configuration."""
    settings = Settings.from_env()
    uvicorn.run("api.main:app", host=settings.api_host, port=settings.api_port, reload=False)


if __name__ == "__main__":
    serve()
