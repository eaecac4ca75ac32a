from pydantic import BaseModel


class Estadisticas(BaseModel):
    totalSalidas: int
    totalTeams: int
    totalAcademias: int
    totalMiembros: int
    pagosPendientes: int
    ingresosAprobados: float
