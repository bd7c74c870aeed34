"""Spec endpoints: generate, browse, edit and export."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...export import export_filename, export_spec
from ...models import (
    Component,
    ExportFormat,
    GenerationRequest,
    GroupBy,
    Phase,
    Priority,
    Spec,
)
from ...service import SpecService

router = APIRouter()


class SpecSummary(BaseModel):
    """Spec list entry for API response."""
    id: str
    feature_name: str
    template: str
    created_at: Optional[str] = None
    stories: int
    tasks: int
    risks: int


class ItemUpdate(BaseModel):
    """Editable fields of a story or task; omitted fields stay unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    component: Optional[Component] = None
    phase: Optional[Phase] = None


class ReorderRequest(BaseModel):
    """Move source_id to the position of target_id."""
    source_id: str
    target_id: str


class RiskUpdate(BaseModel):
    """New text for a risk."""
    text: str


def get_project_path(request: Request) -> Optional[Path]:
    """Get project path from app state."""
    return getattr(request.app.state, "project_path", None)


def get_service(request: Request) -> SpecService:
    """Build the spec service for the configured project."""
    project_path = get_project_path(request)
    if not project_path:
        raise HTTPException(status_code=404, detail="Project path not configured")
    return SpecService.for_project(project_path)


def _require(spec: Optional[Spec], spec_id: str) -> Spec:
    if spec is None:
        raise HTTPException(status_code=404, detail=f"Spec not found: {spec_id}")
    return spec


@router.get("/specs", response_model=list[SpecSummary])
async def list_specs(request: Request) -> list[SpecSummary]:
    """List recent specs, most recent first."""
    service = get_service(request)
    return [
        SpecSummary(
            id=s.id,
            feature_name=s.feature_name,
            template=s.template.value,
            created_at=s.created_at.isoformat() if s.created_at else None,
            stories=len(s.stories),
            tasks=len(s.tasks),
            risks=len(s.risks),
        )
        for s in service.list_specs()
    ]


@router.post("/specs", response_model=Spec, status_code=201)
async def generate_spec(request: Request, body: GenerationRequest) -> Spec:
    """Generate a spec from form input and store it."""
    return get_service(request).generate(body)


@router.post("/specs/preview", response_model=Spec)
async def preview_spec(request: Request, body: GenerationRequest) -> Spec:
    """Generate a spec without storing it."""
    return get_service(request).preview(body)


@router.get("/specs/{spec_id}", response_model=Spec)
async def get_spec(request: Request, spec_id: str) -> Spec:
    """Get a stored spec by ID."""
    return _require(get_service(request).get_spec(spec_id), spec_id)


@router.delete("/specs/{spec_id}", status_code=204)
async def delete_spec(request: Request, spec_id: str) -> None:
    """Delete a stored spec."""
    if not get_service(request).delete_spec(spec_id):
        raise HTTPException(status_code=404, detail=f"Spec not found: {spec_id}")


@router.patch("/specs/{spec_id}/items/{item_id}", response_model=Spec)
async def update_item(request: Request, spec_id: str, item_id: str, body: ItemUpdate) -> Spec:
    """Edit a story or task."""
    service = get_service(request)
    spec = _require(service.get_spec(spec_id), spec_id)
    if spec.find_item(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Item not found: {item_id}")
    return service.update_item(spec_id, item_id, **body.model_dump(exclude_none=True))


@router.delete("/specs/{spec_id}/items/{item_id}", response_model=Spec)
async def delete_item(request: Request, spec_id: str, item_id: str) -> Spec:
    """Remove a story or task."""
    service = get_service(request)
    spec = _require(service.get_spec(spec_id), spec_id)
    if spec.find_item(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Item not found: {item_id}")
    return service.delete_item(spec_id, item_id)


@router.post("/specs/{spec_id}/reorder", response_model=Spec)
async def reorder_items(request: Request, spec_id: str, body: ReorderRequest) -> Spec:
    """Move an item to another item's position.

    Unknown item IDs leave the spec unchanged.
    """
    service = get_service(request)
    _require(service.get_spec(spec_id), spec_id)
    return service.move_item(spec_id, body.source_id, body.target_id)


@router.patch("/specs/{spec_id}/risks/{risk_id}", response_model=Spec)
async def update_risk(request: Request, spec_id: str, risk_id: str, body: RiskUpdate) -> Spec:
    """Replace a risk's text. Blank text is ignored."""
    service = get_service(request)
    spec = _require(service.get_spec(spec_id), spec_id)
    if spec.find_risk(risk_id) is None:
        raise HTTPException(status_code=404, detail=f"Risk not found: {risk_id}")
    return service.update_risk(spec_id, risk_id, body.text)


@router.get("/specs/{spec_id}/export", response_class=PlainTextResponse)
async def export(
    request: Request,
    spec_id: str,
    format: ExportFormat = ExportFormat.MARKDOWN,
    group_by: GroupBy = GroupBy.TYPE,
) -> PlainTextResponse:
    """Export a spec as markdown or plain text."""
    spec = _require(get_service(request).get_spec(spec_id), spec_id)
    media_type = "text/markdown" if format == ExportFormat.MARKDOWN else "text/plain"
    return PlainTextResponse(
        export_spec(spec, format, group_by),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(spec, format)}"'},
    )
