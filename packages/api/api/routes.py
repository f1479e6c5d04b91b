"""API route definitions.

Handlers that call the database or the model are plain functions, so
FastAPI runs them in its threadpool and the event loop stays free.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ConfirmationResponse,
    CreateTableRequest,
    CreateTableResponse,
    ExecuteRequest,
    ExecuteResponse,
    GenerateRequest,
    GenerateResponse,
    InsertDataRequest,
    InsertDataResponse,
    SchemaResponse,
    TableDataResponse,
    TablesResponse,
    TableStructureResponse,
)
from copilot.SQLGenerator import SQLGenerator
from copilot.models import GenerationRequest
from database.QueryService import QueryService
from database.SchemaProvider import SchemaProvider
from database.TableManager import (
    ColumnDefinition,
    ForeignKeyDefinition,
    TableDefinition,
    TableManager,
)
from database.models import ExecutionRequest

router = APIRouter()


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {
        "success": True,
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _generator_dependency(request: Request) -> SQLGenerator:
    """Retrieve the shared SQLGenerator instance from app state."""
    return request.app.state.generator


def _query_service_dependency(request: Request) -> QueryService:
    return request.app.state.query_service


def _schema_dependency(request: Request) -> SchemaProvider:
    return request.app.state.schema


def _table_manager_dependency(request: Request) -> TableManager:
    return request.app.state.table_manager


# ---------------------------------------------------------------------------
# Query generation and execution
# ---------------------------------------------------------------------------


@router.post("/api/query/generate", response_model=GenerateResponse)
def generate_query(
    body: GenerateRequest,
    generator: SQLGenerator = Depends(_generator_dependency),
):
    """Generate a SQL statement from natural language.

    Falls back to rule-based generation when the model path fails.
    """
    try:
        generation = GenerationRequest(
            natural_language=body.natural_language,
            previous_query=body.previous_query,
            feedback=body.feedback,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    result = generator.generate(generation)
    return GenerateResponse(
        sql=result.sql,
        explanation=result.explanation,
        natural_language=body.natural_language,
        fallback=result.is_fallback,
    )


@router.post(
    "/api/query/execute",
    response_model=ExecuteResponse | ConfirmationResponse,
)
def execute_query(
    body: ExecuteRequest,
    service: QueryService = Depends(_query_service_dependency),
):
    """Execute a SQL statement, subject to the confirmation protocol.

    A dangerous statement comes back with ``needs_confirmation`` and the
    next ``confirmation_level``; the client re-submits the same SQL with
    that level until the statement runs at level 2.
    """
    prepared = service.prepare_execution(
        ExecutionRequest(
            sql=body.sql,
            analyst_mode=body.analyst_mode,
            confirmation_level=body.confirmation_level,
        )
    )

    if not prepared.authorized:
        return ConfirmationResponse(
            confirmation_level=int(prepared.outcome.next_level),
            warning=prepared.outcome.warning,
            sql=prepared.sql,
        )

    result = service.execute_authorized(prepared.sql)
    return ExecuteResponse(
        data=result.rows,
        row_count=result.row_count,
        affected_rows=result.affected_rows,
        execution_time_ms=result.execution_time_ms,
        is_modification=result.is_modification,
    )


@router.post("/api/query/analyze", response_model=AnalyzeResponse)
def analyze_query(
    body: AnalyzeRequest,
    service: QueryService = Depends(_query_service_dependency),
):
    """Return the query plan for a statement without running it."""
    return AnalyzeResponse(data=service.analyze(body.sql))


# ---------------------------------------------------------------------------
# Database browsing
# ---------------------------------------------------------------------------


@router.get("/api/database/tables", response_model=TablesResponse)
def get_tables(schema: SchemaProvider = Depends(_schema_dependency)):
    """List all tables in the database."""
    return TablesResponse(data=schema.list_tables())


@router.get("/api/database/schema", response_model=SchemaResponse)
def get_database_schema(schema: SchemaProvider = Depends(_schema_dependency)):
    """Return every table with its columns."""
    return SchemaResponse(data=schema.get_schema())


@router.get(
    "/api/database/tables/{table_name}/structure",
    response_model=TableStructureResponse,
)
def get_table_structure(
    table_name: str,
    schema: SchemaProvider = Depends(_schema_dependency),
):
    """Return columns and foreign keys of one table."""
    return TableStructureResponse(
        columns=[column.to_dict() for column in schema.describe_table(table_name)],
        foreign_keys=schema.foreign_keys(table_name),
    )


@router.get(
    "/api/database/tables/{table_name}/data",
    response_model=TableDataResponse,
)
def get_table_data(
    table_name: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=1000),
    schema: SchemaProvider = Depends(_schema_dependency),
):
    """Return one page of rows from a table."""
    page_data = schema.get_table_data(table_name, page=page, limit=limit)
    return TableDataResponse(
        data=page_data["rows"],
        pagination=page_data["pagination"],
    )


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


@router.post(
    "/api/database/tables",
    response_model=CreateTableResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_table(
    body: CreateTableRequest,
    tables: TableManager = Depends(_table_manager_dependency),
):
    """Create a table from a structured definition."""
    definition = TableDefinition(
        name=body.table_name,
        columns=[ColumnDefinition(**column.model_dump()) for column in body.columns],
        foreign_keys=[
            ForeignKeyDefinition(**fk.model_dump()) for fk in body.foreign_keys
        ],
    )
    query = tables.create_table(definition)
    return CreateTableResponse(
        message=f"Table {body.table_name} created successfully",
        query=query,
    )


@router.post(
    "/api/database/tables/data",
    response_model=InsertDataResponse,
    status_code=status.HTTP_201_CREATED,
)
def insert_data(
    body: InsertDataRequest,
    tables: TableManager = Depends(_table_manager_dependency),
):
    """Insert one row into a table."""
    insert_id = tables.insert_row(body.table_name, body.data)
    return InsertDataResponse(message="Data inserted successfully", insert_id=insert_id)
