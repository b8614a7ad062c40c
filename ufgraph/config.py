from pydantic import BaseModel, Field


class GraphSettings(BaseModel):
    """
    Parámetros de construcción del grafo.
    bucket_size: cantidad de vértices por bucket (16 por defecto)
    default_directed: dirección por defecto de los grafos creados por el servicio
    """
    bucket_size: int = Field(default=16, gt=0)
    default_directed: bool = False


SETTINGS = GraphSettings()
