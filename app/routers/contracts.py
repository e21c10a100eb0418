import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth import Principal, require_principal
from app.exceptions import NotFoundError
from app.schemas.clause import ClauseFields, ClauseResponse, ClauseSave
from app.schemas.contract import (
    ContractCreate,
    ContractResponse,
    ContractUpdate,
    ContractWithClausesResponse,
)
from app.services.contract_service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


def get_contract_service() -> ContractService:
    # Placeholder: overridden in main.py with real DB session injection
    raise NotImplementedError("Dependency override not configured")


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    payload: ContractCreate,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Create a contract, optionally instantiated from a template."""
    logger.info(f"Create contract: title={payload.title!r} template_id={payload.template_id}")
    try:
        return await service.create_contract(principal, payload)
    except NotFoundError as e:
        logger.warning(f"Create contract rejected, template not usable: template_id={payload.template_id}")
        raise _not_found(e)


@router.get("", response_model=list[ContractResponse])
async def list_contracts(
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """List the caller's contracts."""
    result = await service.list_contracts(principal)
    logger.info(f"List contracts: count={len(result)}")
    return result


@router.get("/{contract_id}", response_model=ContractWithClausesResponse)
async def get_contract(
    contract_id: str,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Get a contract together with its clauses."""
    logger.info(f"Get contract: contract_id={contract_id}")
    try:
        return await service.get_contract_with_clauses(principal, contract_id)
    except NotFoundError as e:
        logger.warning(f"Get contract not found: contract_id={contract_id}")
        raise _not_found(e)


@router.patch("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: str,
    patch: ContractUpdate,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Update only the fields present in the request body."""
    logger.info(f"Update contract: contract_id={contract_id} fields={sorted(patch.model_fields_set)}")
    try:
        return await service.update_contract(principal, contract_id, patch)
    except NotFoundError as e:
        logger.warning(f"Update contract, {e.entity} not found: contract_id={contract_id}")
        raise _not_found(e)


@router.delete("/{contract_id}", response_model=ContractResponse)
async def delete_contract(
    contract_id: str,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Delete a contract and its clauses. Returns the deleted contract."""
    logger.info(f"Delete contract: contract_id={contract_id}")
    try:
        return await service.delete_contract(principal, contract_id)
    except NotFoundError as e:
        logger.warning(f"Delete contract not found: contract_id={contract_id}")
        raise _not_found(e)


@router.put("/{contract_id}/clauses", response_model=ClauseResponse)
async def save_clause(
    contract_id: str,
    payload: ClauseFields,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Add a clause, or replace an existing one when the body carries its id."""
    logger.info(f"Save clause: contract_id={contract_id} clause_id={payload.id}")
    clause = ClauseSave(contract_id=contract_id, **payload.model_dump())
    try:
        return await service.save_clause(principal, clause)
    except NotFoundError as e:
        logger.warning(f"Save clause, {e.entity} not found: contract_id={contract_id} clause_id={payload.id}")
        raise _not_found(e)


@router.delete("/{contract_id}/clauses/{clause_id}", response_model=ClauseResponse)
async def delete_clause(
    contract_id: str,
    clause_id: str,
    principal: Principal = Depends(require_principal),
    service: ContractService = Depends(get_contract_service),
):
    """Delete one clause of a contract. Returns the deleted clause."""
    logger.info(f"Delete clause: contract_id={contract_id} clause_id={clause_id}")
    try:
        return await service.delete_clause(principal, clause_id, contract_id)
    except NotFoundError as e:
        logger.warning(f"Delete clause, {e.entity} not found: contract_id={contract_id} clause_id={clause_id}")
        raise _not_found(e)
