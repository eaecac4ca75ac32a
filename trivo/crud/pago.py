from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.crud.base import CRUDBase
from trivo.models.pago import Pago
from trivo.schemas.pago import PagoCreate


class CRUDPago(CRUDBase[Pago, PagoCreate, PagoCreate]):
    def __init__(self):
        super().__init__(Pago)

    async def get_multi_by_estado(
        self, db: AsyncSession, estado: Optional[str] = None, limit: int = 500
    ) -> List[Pago]:
        query = select(Pago).order_by(Pago.created_at.desc(), Pago.id.desc()).limit(limit)
        if estado:
            query = query.where(Pago.estado == estado)
        result = await db.execute(query)
        return result.scalars().all()


pago = CRUDPago()
