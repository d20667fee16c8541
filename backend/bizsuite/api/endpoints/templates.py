# backend/bizsuite/api/endpoints/templates.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Any, Optional

from bizsuite import schemas
from bizsuite.api import deps
from bizsuite.services.template_manager import TemplateManager

router = APIRouter()


@router.get("/", response_model=List[schemas.DocumentTemplate])
async def read_templates(
    *,
    doc_type: Optional[schemas.DocumentTypeEnum] = Query(None, alias="type", description="Filter by document type"),
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Retrieve all document templates, optionally only those of one type.
    """
    if doc_type is not None:
        return template_manager.get_templates_by_type(doc_type)
    return template_manager.get_all_templates()


@router.post("/", response_model=schemas.DocumentTemplate, status_code=status.HTTP_201_CREATED)
async def create_new_template(
    *,
    template_in: schemas.DocumentTemplateCreate,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Create a new document template. It is not activated.
    """
    return template_manager.create_template(
        name=template_in.name,
        description=template_in.description,
        doc_type=template_in.type,
        design=template_in.design,
    )


@router.get("/active/{doc_type}", response_model=schemas.DocumentTemplate)
async def read_active_template(
    doc_type: schemas.DocumentTypeEnum,
    *,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Get the active template for a document type.
    """
    template = template_manager.get_active_template(doc_type)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No active {doc_type.value} template")
    return template


@router.put("/active/{doc_type}", response_model=schemas.DocumentTemplate)
async def set_active_template(
    doc_type: schemas.DocumentTypeEnum,
    *,
    active_in: schemas.ActiveTemplateUpdate,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Make a template the active one for its document type.
    """
    if not template_manager.set_active_template(doc_type, active_in.template_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Template '{active_in.template_id}' does not exist or is not a {doc_type.value} template.",
        )
    return template_manager.get_template(active_in.template_id)


@router.get("/{template_id}", response_model=schemas.DocumentTemplate)
async def read_template_by_id(
    template_id: str,
    *,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Get a specific template by ID.
    """
    template = template_manager.get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template


@router.put("/{template_id}", response_model=schemas.DocumentTemplate)
async def update_existing_template(
    template_id: str,
    *,
    template_in: schemas.DocumentTemplateUpdate,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Update a template's name, description or design.
    """
    if not template_manager.update_template(template_id, template_in):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template_manager.get_template(template_id)


@router.delete("/{template_id}", response_model=schemas.DocumentTemplate)
async def delete_existing_template(
    template_id: str,
    *,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Delete a template. Built-in default templates cannot be deleted.
    """
    template = template_manager.get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    if not template_manager.delete_template(template_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Default templates cannot be deleted.")
    return template


@router.post("/{template_id}/duplicate", response_model=schemas.DocumentTemplate, status_code=status.HTTP_201_CREATED)
async def duplicate_existing_template(
    template_id: str,
    *,
    duplicate_in: Optional[schemas.TemplateDuplicate] = None,
    template_manager: TemplateManager = Depends(deps.get_template_manager)
) -> Any:
    """
    Copy a template under a new id. The copy is neither active nor default.
    """
    new_name = duplicate_in.name if duplicate_in else None
    duplicate = template_manager.duplicate_template(template_id, new_name)
    if not duplicate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return duplicate
