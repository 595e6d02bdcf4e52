from dataclasses import dataclass

@dataclass(slots=True)
class TileType:
    """Per-tile symbol assignment.

    Stores only the semantic type_name. Occupied/empty state is handled by ActiveSwitch,
    display glyphs live on the singleton TileTypeRegistry + TileTypes entity.
    """
    type_name: str
