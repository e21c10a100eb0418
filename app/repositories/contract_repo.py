from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.clause import Clause
from app.models.contract import Contract


class ContractRepository:
    """Contract rows. Every lookup and every write is scoped to the owning user."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _owned(self, contract_id: str, owner_id: str):
        return (Contract.id == contract_id, Contract.owner_id == owner_id)

    async def create(self, **kwargs) -> Contract:
        contract = Contract(**kwargs)
        self.session.add(contract)
        await self.session.flush()
        await self.session.refresh(contract)
        return contract

    async def get_owned(self, contract_id: str, owner_id: str) -> Contract | None:
        result = await self.session.execute(
            select(Contract).where(*self._owned(contract_id, owner_id))
        )
        return result.scalar_one_or_none()

    async def list_owned(self, owner_id: str) -> list[Contract]:
        result = await self.session.execute(
            select(Contract).where(Contract.owner_id == owner_id).order_by(Contract.created_at)
        )
        return list(result.scalars().all())

    async def update_owned(self, contract_id: str, owner_id: str, **values) -> Contract | None:
        """UPDATE ... WHERE id AND owner_id. Returns the updated row, or None if no row matched."""
        result = await self.session.execute(
            update(Contract)
            .where(*self._owned(contract_id, owner_id))
            .values(**values)
            .returning(Contract)
        )
        return result.scalar_one_or_none()

    async def delete_owned(self, contract_id: str, owner_id: str):
        """Delete a contract and its clauses. Returns the deleted row, or None if no row matched."""
        result = await self.session.execute(
            delete(Contract)
            .where(*self._owned(contract_id, owner_id))
            .returning(*Contract.__table__.columns)
        )
        deleted = result.one_or_none()
        if deleted is None:
            return None
        # Explicit so the cascade does not depend on the backend enforcing FKs (SQLite)
        await self.session.execute(delete(Clause).where(Clause.contract_id == contract_id))
        return deleted
