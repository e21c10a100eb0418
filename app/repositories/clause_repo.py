from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.clause import Clause


class ClauseRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, clause_id: str) -> Clause | None:
        result = await self.session.execute(select(Clause).where(Clause.id == clause_id))
        return result.scalar_one_or_none()

    async def get_by_contract_id(self, contract_id: str) -> list[Clause]:
        result = await self.session.execute(
            select(Clause)
            .where(Clause.contract_id == contract_id)
            .order_by(Clause.order_index, Clause.created_at)
        )
        return list(result.scalars().all())

    async def create(self, **kwargs) -> Clause:
        clause = Clause(**kwargs)
        self.session.add(clause)
        await self.session.flush()
        await self.session.refresh(clause)
        return clause

    async def replace_in_contract(self, clause_id: str, contract_id: str, /, **values) -> Clause | None:
        """Overwrite every given column, including ones being reset to None.

        Only matches a clause that belongs to ``contract_id``.
        """
        result = await self.session.execute(
            update(Clause)
            .where(Clause.id == clause_id, Clause.contract_id == contract_id)
            .values(**values)
            .returning(Clause)
        )
        return result.scalar_one_or_none()

    async def delete_from_contract(self, clause_id: str, contract_id: str):
        result = await self.session.execute(
            delete(Clause)
            .where(Clause.id == clause_id, Clause.contract_id == contract_id)
            .returning(*Clause.__table__.columns)
        )
        return result.one_or_none()
