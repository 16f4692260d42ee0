from darkomen.prj.prj import (
    Attributes, Base, Furniture, Instance, Project, Terrain, TerrainBlock, Water,
    decode,
)

__all__ = [
    "Attributes", "Base", "Furniture", "Instance", "Project", "Terrain",
    "TerrainBlock", "Water", "decode",
]
