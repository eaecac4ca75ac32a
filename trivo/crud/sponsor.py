from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.crud.base import CRUDBase
from trivo.models.sponsor import Sponsor
from trivo.schemas.sponsor import SponsorCreate


class CRUDSponsor(CRUDBase[Sponsor, SponsorCreate, SponsorCreate]):
    conflict_message = "Ya existe un sponsor con ese nombre"

    def __init__(self):
        super().__init__(Sponsor)

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Sponsor]:
        result = await db.execute(
            select(Sponsor).where(func.lower(Sponsor.name) == name.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_all(self, db: AsyncSession) -> List[Sponsor]:
        result = await db.execute(select(Sponsor).order_by(Sponsor.name))
        return result.scalars().all()


sponsor = CRUDSponsor()
