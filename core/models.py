"""Category data model and the JSON shapes exchanged with the oracle."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

HIERARCHY_SEPARATOR = " > "
DESCRIPTION_SEPARATOR = " - "


class Category(BaseModel):
    """A named group of items with its ancestry path carried as data."""

    name: str
    description: str = ""
    items: List[str] = Field(default_factory=list)
    path: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def default_path(self) -> "Category":
        # A category built without ancestry is top-level
        if not self.path:
            self.path = [self.name]
        return self

    @property
    def depth(self) -> int:
        """Number of subdivision levels above this category."""
        return len(self.path) - 1

    def nested_under(self, parent: "Category") -> "Category":
        """Return a copy of this category placed below ``parent``."""
        path = parent.path + self.path
        return Category(
            name=HIERARCHY_SEPARATOR.join(path),
            description=f"{parent.description}{DESCRIPTION_SEPARATOR}{self.description}",
            items=self.items,
            path=path,
        )


class ProposedCategory(BaseModel):
    name: str
    description: str


class CategoryProposal(BaseModel):
    """Reply shape for category creation calls."""

    categories: List[ProposedCategory]


class Assignment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item: str
    category_name: str = Field(alias="categoryName")


class AssignmentBatch(BaseModel):
    """Reply shape for item assignment calls."""

    assignments: List[Assignment]
