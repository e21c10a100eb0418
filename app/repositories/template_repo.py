from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.template import ContractTemplate


class TemplateRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible_to(self, user_id: str):
        # NULL owner: system template
        return or_(ContractTemplate.owner_id.is_(None), ContractTemplate.owner_id == user_id)

    async def create(self, **kwargs) -> ContractTemplate:
        template = ContractTemplate(**kwargs)
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def get_visible(self, template_id: str, user_id: str) -> ContractTemplate | None:
        result = await self.session.execute(
            select(ContractTemplate).where(
                ContractTemplate.id == template_id, self._visible_to(user_id)
            )
        )
        return result.scalar_one_or_none()

    async def list_visible_to(self, user_id: str) -> list[ContractTemplate]:
        """System templates plus the user's own."""
        result = await self.session.execute(
            select(ContractTemplate)
            .where(self._visible_to(user_id))
            .order_by(ContractTemplate.created_at)
        )
        return list(result.scalars().all())

    async def update_visible(self, template_id: str, user_id: str, **values) -> ContractTemplate | None:
        """UPDATE ... WHERE id AND (system OR owned by user). None if no row matched."""
        result = await self.session.execute(
            update(ContractTemplate)
            .where(ContractTemplate.id == template_id, self._visible_to(user_id))
            .values(**values)
            .returning(ContractTemplate)
        )
        return result.scalar_one_or_none()
