from trivo.crud.base import CRUDBase
from trivo.models.team_social import TeamSocial
from trivo.schemas.team import TeamCreate, TeamUpdate


class CRUDTeam(CRUDBase[TeamSocial, TeamCreate, TeamUpdate]):
    def __init__(self):
        super().__init__(TeamSocial)


team = CRUDTeam()
