"""Todo item model."""

from __future__ import annotations

import random
from dataclasses import dataclass

from todos.errors import EmptyNameError

# Asset identifiers a new todo can be illustrated with.
IMAGES: tuple[str, ...] = (
    "agac",
    "araba",
    "cicek",
    "damla",
    "gezegen",
    "gunes",
    "roket",
    "semsiye",
    "yildiz",
)

DEFAULT_IMAGE = "agac"


def random_image(rng: random.Random | None = None) -> str:
    """Pick an image identifier for a new todo."""
    return (rng or random).choice(IMAGES)


@dataclass(frozen=True)
class ToDo:
    """A todo item.

    Instances are immutable. ``name`` is stored trimmed and must not be empty.
    """

    id: int
    name: str
    image: str = DEFAULT_IMAGE

    def __post_init__(self) -> None:
        # bool is an int subclass, reject it explicitly
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise TypeError(f"ToDo id must be an int, got {type(self.id).__name__}")
        if self.id < 1:
            raise ValueError(f"ToDo id must be positive, got {self.id}")
        if not isinstance(self.name, str):
            raise TypeError(f"ToDo name must be a str, got {type(self.name).__name__}")
        if not isinstance(self.image, str):
            raise TypeError(f"ToDo image must be a str, got {type(self.image).__name__}")

        name = self.name.strip()
        if not name:
            raise EmptyNameError()
        object.__setattr__(self, "name", name)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ToDo:
        """Create from dictionary.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a dict, got {type(data).__name__}")
        missing = [key for key in ("id", "name") if key not in data]
        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                image=data.get("image", DEFAULT_IMAGE),
            )
        except TypeError as e:
            raise ValueError(str(e)) from e


SAMPLE_TODOS: tuple[ToDo, ...] = (
    ToDo(id=1, name="Buy a plane ticket", image="roket"),
    ToDo(id=2, name="Join the meeting", image="damla"),
    ToDo(id=3, name="Go to gym", image="simsek"),
)
