import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth import Principal, require_principal
from app.exceptions import NotFoundError
from app.routers.contracts import get_contract_service
from app.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate
from app.services.contract_service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: TemplateCreate,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Create a private template, or a system template visible to everyone."""
    logger.info(f"Create template: name={payload.name!r} system={payload.is_system}")
    return await service.create_template(principal, payload)


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """List system templates and the caller's own templates."""
    result = await service.list_templates(principal)
    logger.info(f"List templates: count={len(result)}")
    return result


@router.patch("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    patch: TemplateUpdate,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Update only the fields present in the request body."""
    logger.info(f"Update template: template_id={template_id} fields={sorted(patch.model_fields_set)}")
    try:
        return await service.update_template(principal, template_id, patch)
    except NotFoundError:
        logger.warning(f"Update template not found: template_id={template_id}")
        raise HTTPException(status_code=404, detail="Template not found or not accessible.")
