"""
Recipe and ingredient models for the recipe collection.

A Recipe is identified by its name: two recipes with the same name compare
equal, and recipes sort by name. Ingredients have no identity of their own and
only mean something inside the recipe that owns them.

# NOTE: The repository never hands out its own instances. Callers always get
    the result of clone(), so mutating a returned recipe has no effect on
    stored state.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    """A single ingredient row: amount, measure and name."""
    amount: str = Field(..., description="Amount as written in the file (e.g. '2', '1/2')")
    measure: str = Field(..., description="Unit of measure (e.g. 'dl', 'st', 'msk')")
    name: str = Field(..., description="Ingredient name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": "2",
                "measure": "dl",
                "name": "vetemjöl",
            }
        }
    )

    def clone(self) -> "Ingredient":
        """Return an independent copy of this ingredient."""
        return self.model_copy()


class Recipe(BaseModel):
    """
    A named dish with ordered ingredients and ordered instruction steps.

    Insertion order of both ingredients and instructions is kept; it is the
    cooking order. Equality and ordering only look at the name.
    """
    name: str = Field(..., min_length=1, description="Recipe name, also the sort and equality key")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ingredients in stated order")
    instructions: List[str] = Field(default_factory=list, description="Instruction steps in cooking order")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Pannkakor",
                "ingredients": [
                    {"amount": "2", "measure": "dl", "name": "vetemjöl"},
                    {"amount": "1", "measure": "st", "name": "ägg"},
                ],
                "instructions": ["Blanda", "Stek"],
            }
        }
    )

    def add_ingredient(self, ingredient: Ingredient) -> None:
        """Append an ingredient after the existing ones."""
        self.ingredients.append(ingredient)

    def add_instruction(self, instruction: str) -> None:
        """Append an instruction step after the existing ones."""
        self.instructions.append(instruction)

    def clone(self) -> "Recipe":
        """Return a deep copy; ingredient and instruction lists are not shared."""
        return self.model_copy(deep=True)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: "Recipe") -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)
