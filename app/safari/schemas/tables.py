from typing import Any, Literal

from pydantic import BaseModel, Field


SortDirection = Literal["asc", "desc"]
PageMarker = int | str


class ColumnItem(BaseModel):
    key: str
    label: str
    sortable: bool


class BulkActionItem(BaseModel):
    label: str
    value: str
    variant: str


class SortItem(BaseModel):
    key: str
    direction: SortDirection


class TablePaginationMeta(BaseModel):
    page: int
    page_size: int
    total_pages: int
    total: int
    count: int
    first: int
    last: int
    page_window: list[PageMarker]


class TableViewResponse(BaseModel):
    table: str
    title: str
    columns: list[ColumnItem]
    bulk_actions: list[BulkActionItem]
    rows: list[dict[str, Any]]
    sort: SortItem | None = None
    search: str | None = None
    pagination: TablePaginationMeta
    trace_id: str


class TableDefinitionItem(BaseModel):
    name: str
    title: str
    description: str
    columns: list[ColumnItem]
    search_fields: list[str]
    bulk_actions: list[BulkActionItem]


class TableListResponse(BaseModel):
    tables: list[TableDefinitionItem]
    trace_id: str


class BulkActionRequest(BaseModel):
    action: str = Field(..., min_length=1, max_length=64)
    ids: list[int | str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"action": "deactivate", "ids": [3, 7, 12]},
            ]
        }
    }


class BulkResultItem(BaseModel):
    id: int | str
    result: Literal["success", "error"]
    code: str | None = None


class BulkSummary(BaseModel):
    total: int
    success: int
    failed: int


class BulkActionResponse(BaseModel):
    table: str
    action: str
    results: list[BulkResultItem]
    summary: BulkSummary
    trace_id: str


class SeasonCopyRequest(BaseModel):
    ids: list[int | str] = Field(..., min_length=1)
    target_year: int | None = Field(
        default=None,
        ge=1900,
        le=2999,
        description="Year to copy the seasons into. Defaults to the year after each season's start.",
    )


class SeasonCopyResponse(BaseModel):
    created: int
    target_year: int | None = None
    trace_id: str
