import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from app.auth import Principal
from app.exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from app.models.base import new_id
from app.models.template import ContractTemplate
from app.repositories.clause_repo import ClauseRepository
from app.repositories.contract_repo import ContractRepository
from app.repositories.template_repo import TemplateRepository
from app.schemas.clause import ClauseResponse, ClauseSave
from app.schemas.contract import (
    ContractCreate,
    ContractResponse,
    ContractUpdate,
    ContractWithClausesResponse,
)
from app.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_user(principal: Principal | None) -> str:
    if principal is None:
        raise UnauthorizedError()
    return principal.user_id


def _parse(schema: type[SchemaT], payload: SchemaT | Mapping[str, Any]) -> SchemaT:
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(e.errors(include_url=False, include_context=False)) from e


class ContractService:
    """Templates, contracts and clauses, scoped to the calling user.

    Every operation takes the caller's ``Principal`` first and fails with
    ``UnauthorizedError`` before looking at anything else when it is None.
    Inputs may be schema instances or plain mappings; mappings are validated
    before the store is touched.

    Rows the caller may not see raise ``NotFoundError`` exactly like rows that
    do not exist.
    """

    def __init__(
        self,
        templates: TemplateRepository,
        contracts: ContractRepository,
        clauses: ClauseRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.templates = templates
        self.contracts = contracts
        self.clauses = clauses
        self.clock = clock

    # --- templates -------------------------------------------------------

    async def create_template(
        self, principal: Principal | None, payload: TemplateCreate | Mapping[str, Any]
    ) -> TemplateResponse:
        user_id = _require_user(principal)
        data = _parse(TemplateCreate, payload)
        now = self.clock()

        template = await self.templates.create(
            id=data.id or new_id(),
            owner_id=None if data.is_system else user_id,
            name=data.name,
            description=data.description,
            category=data.category,
            base_language=data.base_language,
            body=data.body,
            is_system=data.is_system,
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Template created: template_id={template.id} system={template.is_system}")
        return TemplateResponse.model_validate(template)

    async def update_template(
        self,
        principal: Principal | None,
        template_id: str,
        patch: TemplateUpdate | Mapping[str, Any],
    ) -> TemplateResponse:
        user_id = _require_user(principal)
        data = _parse(TemplateUpdate, patch)

        changes = data.changes()
        # System templates (no owner) are writable by any signed-in user
        if not changes:
            template = await self.templates.get_visible(template_id, user_id)
        else:
            template = await self.templates.update_visible(
                template_id, user_id, **changes, updated_at=self.clock()
            )
        if template is None:
            raise NotFoundError("template", template_id)

        if changes:
            logger.info(f"Template updated: template_id={template_id} fields={sorted(changes)}")
        return TemplateResponse.model_validate(template)

    async def list_templates(self, principal: Principal | None) -> list[TemplateResponse]:
        user_id = _require_user(principal)
        templates = await self.templates.list_visible_to(user_id)
        return [TemplateResponse.model_validate(t) for t in templates]

    # --- contracts -------------------------------------------------------

    async def _get_usable_template(self, template_id: str, user_id: str) -> ContractTemplate:
        template = await self.templates.get_visible(template_id, user_id)
        if template is None:
            raise NotFoundError("template", template_id)
        return template

    async def create_contract(
        self, principal: Principal | None, payload: ContractCreate | Mapping[str, Any]
    ) -> ContractResponse:
        user_id = _require_user(principal)
        data = _parse(ContractCreate, payload)

        if data.template_id:
            await self._get_usable_template(data.template_id, user_id)

        now = self.clock()
        contract = await self.contracts.create(
            id=data.id or new_id(),
            owner_id=user_id,
            template_id=data.template_id or None,
            title=data.title,
            party_a_name=data.party_a_name,
            party_b_name=data.party_b_name,
            effective_date=data.effective_date,
            end_date=data.end_date,
            governing_law=data.governing_law,
            status=data.status,
            final_text=data.final_text,
            notes=data.notes,
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Contract created: contract_id={contract.id} template_id={contract.template_id}")
        return ContractResponse.model_validate(contract)

    async def update_contract(
        self,
        principal: Principal | None,
        contract_id: str,
        patch: ContractUpdate | Mapping[str, Any],
    ) -> ContractResponse:
        user_id = _require_user(principal)
        data = _parse(ContractUpdate, patch)

        existing = await self.contracts.get_owned(contract_id, user_id)
        if existing is None:
            raise NotFoundError("contract", contract_id)

        changes = data.changes()
        if "template_id" in changes:
            if changes["template_id"]:
                await self._get_usable_template(changes["template_id"], user_id)
            else:
                changes["template_id"] = None

        if not changes:
            return ContractResponse.model_validate(existing)

        contract = await self.contracts.update_owned(
            contract_id, user_id, **changes, updated_at=self.clock()
        )
        if contract is None:
            raise NotFoundError("contract", contract_id)
        logger.info(f"Contract updated: contract_id={contract_id} fields={sorted(changes)}")
        return ContractResponse.model_validate(contract)

    async def list_contracts(self, principal: Principal | None) -> list[ContractResponse]:
        user_id = _require_user(principal)
        contracts = await self.contracts.list_owned(user_id)
        return [ContractResponse.model_validate(c) for c in contracts]

    async def delete_contract(self, principal: Principal | None, contract_id: str) -> ContractResponse:
        user_id = _require_user(principal)
        deleted = await self.contracts.delete_owned(contract_id, user_id)
        if deleted is None:
            raise NotFoundError("contract", contract_id)
        logger.info(f"Contract deleted: contract_id={contract_id}")
        return ContractResponse.model_validate(deleted)

    # --- clauses ---------------------------------------------------------

    async def save_clause(
        self, principal: Principal | None, payload: ClauseSave | Mapping[str, Any]
    ) -> ClauseResponse:
        """Insert a clause, or fully replace the one named by ``id``.

        Replacing resets ``created_at`` along with every other value.
        """
        user_id = _require_user(principal)
        data = _parse(ClauseSave, payload)

        if await self.contracts.get_owned(data.contract_id, user_id) is None:
            raise NotFoundError("contract", data.contract_id)

        values = {
            "contract_id": data.contract_id,
            "order_index": data.order_index,
            "heading": data.heading,
            "body": data.body,
            "clause_key": data.clause_key,
            "created_at": self.clock(),
        }

        if data.id:
            clause = await self.clauses.replace_in_contract(data.id, data.contract_id, **values)
            if clause is None:
                raise NotFoundError("clause", data.id)
            logger.info(f"Clause replaced: clause_id={clause.id} contract_id={data.contract_id}")
        else:
            clause = await self.clauses.create(**values)
            logger.info(f"Clause created: clause_id={clause.id} contract_id={data.contract_id}")
        return ClauseResponse.model_validate(clause)

    async def delete_clause(
        self, principal: Principal | None, clause_id: str, contract_id: str
    ) -> ClauseResponse:
        user_id = _require_user(principal)

        if await self.contracts.get_owned(contract_id, user_id) is None:
            raise NotFoundError("contract", contract_id)

        deleted = await self.clauses.delete_from_contract(clause_id, contract_id)
        if deleted is None:
            raise NotFoundError("clause", clause_id)
        logger.info(f"Clause deleted: clause_id={clause_id} contract_id={contract_id}")
        return ClauseResponse.model_validate(deleted)

    async def get_contract_with_clauses(
        self, principal: Principal | None, contract_id: str
    ) -> ContractWithClausesResponse:
        user_id = _require_user(principal)

        contract = await self.contracts.get_owned(contract_id, user_id)
        if contract is None:
            raise NotFoundError("contract", contract_id)

        clauses = await self.clauses.get_by_contract_id(contract_id)
        return ContractWithClausesResponse(
            contract=ContractResponse.model_validate(contract),
            clauses=[ClauseResponse.model_validate(c) for c in clauses],
        )
