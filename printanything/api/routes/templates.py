"""Templates API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from core import StoreError, TemplateStore
from core.document import variable_keys
from printanything.api.deps import get_recent_names, get_store
from printanything.api.models import (
    PrintRecordModel,
    RenderRequest,
    RenderResponse,
    TemplateModel,
    TemplateSaveResponse,
    TemplateVariablesResponse,
)
from printanything.editor import EditingSession, RecentNames

logger = logging.getLogger(__name__)

router = APIRouter()


def _store_failure(e: StoreError) -> HTTPException:
    logger.warning(f"[API] Store failure: {e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


def _open_session(
    store: TemplateStore,
    template_id: str,
    recent_names: RecentNames | None = None,
    **kwargs,
) -> EditingSession:
    """Load a template into a fresh session or raise 404/502."""
    session = EditingSession.new(recent_names=recent_names, **kwargs)
    result = session.load(store, template_id)
    if not result.success:
        if result.not_found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return session


@router.get("/templates", response_model=list[TemplateModel])
def list_templates(
    owner_id: str | None = Query(None, description="Owner's templates plus public ones"),
    store: TemplateStore = Depends(get_store),
):
    """List templates, newest first."""
    try:
        templates = store.list_templates(owner_id)
    except StoreError as e:
        raise _store_failure(e) from None
    return [TemplateModel.from_template(t) for t in templates]


@router.get("/templates/{template_id}", response_model=TemplateModel)
def get_template(template_id: str, store: TemplateStore = Depends(get_store)):
    """Get a template by ID with its fields resolved for today."""
    session = _open_session(store, template_id)
    return TemplateModel.from_template(session.template)


@router.post("/templates", response_model=TemplateSaveResponse, status_code=status.HTTP_201_CREATED)
def save_template(template: TemplateModel, store: TemplateStore = Depends(get_store)):
    """Create or overwrite a template."""
    try:
        session = EditingSession(template.to_template())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    result = session.save(store)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return TemplateSaveResponse(id=result.template_id)


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: str, store: TemplateStore = Depends(get_store)):
    """Delete a template."""
    try:
        deleted = store.delete_template(template_id)
    except StoreError as e:
        raise _store_failure(e) from None
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/templates/{template_id}/variables", response_model=TemplateVariablesResponse)
def get_template_variables(template_id: str, store: TemplateStore = Depends(get_store)):
    """Variable keys the print form should ask for."""
    session = _open_session(store, template_id)
    return TemplateVariablesResponse(template_id=template_id, variables=variable_keys(session.fields))


@router.post("/templates/{template_id}/render", response_model=RenderResponse)
def render_template(
    template_id: str,
    request: RenderRequest,
    store: TemplateStore = Depends(get_store),
    recent_names: RecentNames = Depends(get_recent_names),
):
    """Resolve a template with print-time values for the renderer.

    The stored template is not modified; the values are kept in the
    template's print history.
    """
    session = _open_session(store, template_id, recent_names=recent_names, today=request.today)
    fields = session.print_payload(request.bindings)
    record = session.record_print(store, request.bindings, user_id=request.user_id)
    return RenderResponse(
        template_id=template_id,
        fields=fields,
        print_record_id=record.id if record else None,
    )


@router.get("/templates/{template_id}/print-history", response_model=list[PrintRecordModel])
def get_template_print_history(
    template_id: str,
    limit: int = Query(20, ge=1, le=200),
    store: TemplateStore = Depends(get_store),
):
    """Past prints of one template, newest first."""
    try:
        records = store.get_print_history(template_id=template_id, limit=limit)
    except StoreError as e:
        raise _store_failure(e) from None
    return [PrintRecordModel.from_record(r) for r in records]


@router.get("/print-history", response_model=list[PrintRecordModel])
def list_print_history(
    user_id: str | None = None,
    limit: int = Query(50, ge=1, le=200),
    store: TemplateStore = Depends(get_store),
):
    """Past prints across all templates, newest first."""
    try:
        records = store.get_print_history(user_id=user_id, limit=limit)
    except StoreError as e:
        raise _store_failure(e) from None
    return [PrintRecordModel.from_record(r) for r in records]


@router.get("/recent-names", response_model=list[str])
def list_recent_names(recent_names: RecentNames = Depends(get_recent_names)):
    """Names recently printed in client-name fields, most recent first."""
    return list(recent_names)
