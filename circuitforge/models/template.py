"""Data classes for circuit templates."""

from dataclasses import dataclass, field
from typing import Optional

from .circuit import CircuitSnapshot


@dataclass
class TemplateData:
    """A ready-made circuit with catalog metadata.

    Template files use the circuit interchange format plus the
    metadata keys at the top level.
    """

    template_id: str
    name: str
    description: str = ""
    category: str = "basic"
    difficulty: str = "beginner"
    circuit: CircuitSnapshot = field(default_factory=CircuitSnapshot)
    thumbnail: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.template_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "difficulty": self.difficulty,
        }
        if self.thumbnail:
            data["thumbnail"] = self.thumbnail
        data.update(self.circuit.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TemplateData":
        return cls(
            template_id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            category=data.get("category", "basic"),
            difficulty=data.get("difficulty", "beginner"),
            circuit=CircuitSnapshot.from_dict(data),
            thumbnail=data.get("thumbnail"),
        )
