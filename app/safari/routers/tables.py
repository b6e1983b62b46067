from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from app.safari.core.deps import get_registry, get_table_service
from app.safari.schemas.tables import (
    BulkActionRequest,
    BulkActionResponse,
    TableDefinitionItem,
    TableListResponse,
    TableViewResponse,
)
from app.safari.services.tables import TableService
from app.safari.tables.registry import TableRegistry

router = APIRouter()


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "")


@router.get("/tables", response_model=TableListResponse)
async def list_tables(request: Request, registry: TableRegistry = Depends(get_registry)):
    tables = []
    for name in registry.names():
        definition = registry.get(name)
        tables.append(
            TableDefinitionItem(
                name=definition.name,
                title=definition.title,
                description=definition.description,
                columns=[
                    {"key": column.key, "label": column.label, "sortable": column.sortable}
                    for column in definition.columns
                ],
                search_fields=list(definition.search_fields),
                bulk_actions=[
                    {"label": action.label, "value": action.value, "variant": action.variant}
                    for action in definition.bulk_actions
                ],
            )
        )
    return TableListResponse(tables=tables, trace_id=_trace_id(request))


@router.get("/tables/{name}", response_model=TableViewResponse)
def table_view(
    request: Request,
    name: str,
    search: str | None = Query(default=None, max_length=200),
    sort_by: str | None = Query(default=None),
    sort_dir: str = Query(default="asc", pattern="^(asc|desc)$"),
    page: int = Query(default=1),
    page_size: int | None = Query(default=None, ge=1),
    service: TableService = Depends(get_table_service),
):
    view = service.list_view(
        name,
        search=search,
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )
    return TableViewResponse(**view, trace_id=_trace_id(request))


@router.get("/tables/{name}/export.csv")
def export_table(
    name: str,
    search: str | None = Query(default=None, max_length=200),
    sort_by: str | None = Query(default=None),
    sort_dir: str = Query(default="asc", pattern="^(asc|desc)$"),
    service: TableService = Depends(get_table_service),
):
    content = service.export_csv(name, search=search, sort_by=sort_by, sort_dir=sort_dir)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{name}.csv"'},
    )


@router.post("/tables/{name}/bulk", response_model=BulkActionResponse)
def bulk_action(
    request: Request,
    name: str,
    payload: BulkActionRequest,
    service: TableService = Depends(get_table_service),
):
    outcome = service.bulk_action(name, payload.action, payload.ids)
    return BulkActionResponse(**outcome, trace_id=_trace_id(request))
