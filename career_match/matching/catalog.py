"""Career catalog loading."""

from __future__ import annotations

from pathlib import Path

from career_match.matching.models import Career
from career_match.utils.files import extract_items, load_document


class CareerCatalog:
    """Career catalog provider backed by a YAML/JSON file or a list."""

    def __init__(self, careers: list[Career | dict]) -> None:
        self.careers = [
            c if isinstance(c, Career) else Career.model_validate(c) for c in careers
        ]
        ids = [career.id for career in self.careers]
        if len(ids) != len(set(ids)):
            raise ValueError("Career ids must be unique")

    @classmethod
    def load(cls, path: Path | str) -> CareerCatalog:
        """Load careers from a list or a `{careers: [...]}` document."""
        data = load_document(path)
        return cls(extract_items(data, "careers", path))

    def matchable(self) -> list[Career]:
        """Return careers with at least one required skill."""
        return [career for career in self.careers if career.required_skills]

    def __len__(self) -> int:
        return len(self.careers)
