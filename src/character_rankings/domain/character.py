from dataclasses import dataclass
from typing import TypeAlias

CharacterId: TypeAlias = int | str


@dataclass(frozen=True)
class Character:
    id: CharacterId
    name: str
    debut_year: int

    def age_in(self, year: int) -> int:
        return year - self.debut_year
