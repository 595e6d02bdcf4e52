from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Union


@dataclass(slots=True)
class TileTypes:
    """Tile alphabet stored on a single entity.

    This component lives alongside TileTypeRegistry (tag). ``types`` maps each
    type name to the glyph a text front-end shows for it; random fills draw
    from the names in insertion order.
    """
    types: Dict[str, str]

    @classmethod
    def from_alphabet(cls, alphabet: Union[Mapping[str, str], Iterable[str]]) -> "TileTypes":
        """Build from a name->glyph mapping or a plain iterable of names (glyph = name)."""
        if isinstance(alphabet, Mapping):
            return cls(types=dict(alphabet))
        types: Dict[str, str] = {}
        for name in alphabet:
            types.setdefault(name, str(name))
        return cls(types=types)

    def glyph_for(self, type_name: str) -> str:
        return self.types[type_name]

    def all_types(self) -> List[str]:
        return list(self.types.keys())
