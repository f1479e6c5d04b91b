"""Pydantic request/response models for the API."""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Query generation and execution
# ---------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    """Body for the generate endpoint."""

    natural_language: str
    previous_query: str | None = None
    feedback: str | None = None


class GenerateResponse(BaseModel):
    """A generated statement with its explanation."""

    success: bool = True
    sql: str
    explanation: str
    natural_language: str
    fallback: bool = False


class ExecuteRequest(BaseModel):
    """Body for the execute endpoint.

    ``confirmation_level`` is the level the client has reached for this
    statement; the server keeps no record of it between calls.
    """

    sql: str
    analyst_mode: bool = False
    confirmation_level: int = Field(default=0, ge=0, le=2)


class ExecuteResponse(BaseModel):
    """Result of an executed statement."""

    success: bool = True
    data: list[dict[str, Any]] | None = None
    row_count: int
    affected_rows: int | None = None
    execution_time_ms: int
    is_modification: bool


class ConfirmationResponse(BaseModel):
    """A dangerous statement that needs another confirmation round."""

    success: bool = False
    needs_confirmation: bool = True
    is_dangerous: bool = True
    confirmation_level: int
    warning: str
    sql: str


class AnalyzeRequest(BaseModel):
    sql: str


class AnalyzeResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Database browsing and management
# ---------------------------------------------------------------------------


class TablesResponse(BaseModel):
    success: bool = True
    data: list[str]


class SchemaResponse(BaseModel):
    success: bool = True
    data: dict[str, list[dict[str, Any]]]


class TableStructureResponse(BaseModel):
    success: bool = True
    columns: list[dict[str, Any]]
    foreign_keys: list[dict[str, Any]]


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class TableDataResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]
    pagination: Pagination


class ColumnSchema(BaseModel):
    """One column of a create-table request."""

    name: str
    type: str
    primary_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    unique: bool = False
    default: str | None = None


class ForeignKeySchema(BaseModel):
    column: str
    reference_table: str
    reference_column: str


class CreateTableRequest(BaseModel):
    """Body for the create-table endpoint."""

    table_name: str
    columns: list[ColumnSchema]
    foreign_keys: list[ForeignKeySchema] = []


class CreateTableResponse(BaseModel):
    success: bool = True
    message: str
    query: str


class InsertDataRequest(BaseModel):
    table_name: str
    data: dict[str, Any]


class InsertDataResponse(BaseModel):
    success: bool = True
    message: str
    insert_id: int | None = None
