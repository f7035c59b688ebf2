"""
In-memory recipe repository backed by the recipe text file.

The repository:
- Holds an ordered list of recipes, replaced wholesale by load()
- Hands out deep copies only (get_all, get_at), never its own instances
- Deletes by recipe (identity first, then name equality) or by index
- Tracks whether the collection was modified with is_modified
- Fires a RecipesChanged notification after every successful add, delete,
  load and save

Failures are raised as RecipeRepositoryError subclasses. A failed operation
leaves the in-memory collection, the dirty flag and the subscribers untouched.

Note: There is no internal locking. Callers sharing a repository between
threads must serialize mutating calls themselves.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from . import codec
from .config import RecipesConfig
from .errors import NotFoundError, RangeError
from .events import ChangeCallback, ChangeKind, ChangeNotifier, RecipesChanged
from .models import Recipe

logger = logging.getLogger(__name__)


class RecipeRepository:
    """Holder for recipes read from and written to a single recipe file."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        """
        Create an empty repository bound to a recipe file.

        Nothing is read until load() is called.

        Args:
            path: Location of the recipe file
            encoding: Text encoding of the recipe file
        """
        self._path = Path(path).resolve()
        self._encoding = encoding
        self._recipes: List[Recipe] = []
        self._is_modified = False
        self._notifier = ChangeNotifier()

    @classmethod
    def from_config(cls) -> "RecipeRepository":
        """Create a repository for the file named by RecipesConfig."""
        return cls(RecipesConfig.get_path(), encoding=RecipesConfig.get_encoding())

    @property
    def path(self) -> Path:
        """Absolute path of the recipe file."""
        return self._path

    @property
    def is_modified(self) -> bool:
        """Dirty flag: cleared by load(), set by add(), delete() and save()."""
        return self._is_modified

    def __len__(self) -> int:
        return len(self._recipes)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> str:
        """
        Register a change callback.

        Args:
            callback: Called as callback(repository, event) after each change

        Returns:
            Handle for unsubscribe()
        """
        return self._notifier.subscribe(callback)

    def unsubscribe(self, handle: str) -> None:
        """Remove a change callback registered with subscribe()."""
        self._notifier.unsubscribe(handle)

    def _on_recipes_changed(self, kind: ChangeKind, recipe_name: Optional[str] = None) -> None:
        event = RecipesChanged(
            kind=kind,
            count=len(self._recipes),
            is_modified=self._is_modified,
            recipe_name=recipe_name,
        )
        self._notifier.fire(self, event)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> List[Recipe]:
        """
        Return all recipes in stored order.

        Returns:
            Deep copies of the stored recipes
        """
        return [recipe.clone() for recipe in self._recipes]

    def get_at(self, index: int) -> Recipe:
        """
        Return the recipe at a position.

        Args:
            index: Zero-based position, 0 <= index < len(repository)

        Returns:
            Deep copy of the stored recipe

        Raises:
            RangeError: If index is out of range
        """
        return self._recipes[self._check_index(index)].clone()

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._recipes):
            raise RangeError(f"Recipe index {index} out of range (count={len(self._recipes)})")
        return index

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, recipe: Recipe) -> None:
        """
        Append a copy of recipe to the collection.

        The collection is not re-sorted; the next load() sorts it.

        Args:
            recipe: Recipe to add

        Raises:
            FormatError: If the recipe could not be saved and read back
        """
        codec.validate_recipe(recipe)

        self._recipes.append(recipe.clone())
        self._is_modified = True
        logger.debug("Added recipe %r", recipe.name)
        self._on_recipes_changed(ChangeKind.ADDED, recipe.name)

    def delete(self, target: Union[Recipe, int]) -> None:
        """
        Delete a recipe.

        An int target deletes the recipe at that position. A Recipe target
        deletes that stored instance; if it is a copy (as returned by get_all
        or get_at), the stored recipe with the same name is deleted instead.

        Args:
            target: Recipe or zero-based index to delete

        Raises:
            RangeError: If an index target is out of range
            NotFoundError: If no stored recipe matches a Recipe target
            TypeError: If target is a bool or neither a Recipe nor an int
        """
        if isinstance(target, bool) or not isinstance(target, (int, Recipe)):
            raise TypeError(f"Cannot delete by {type(target).__name__}; expected Recipe or int")

        if isinstance(target, int):
            position = self._check_index(target)
        else:
            position = self._find(target)

        removed = self._recipes.pop(position)
        self._is_modified = True
        logger.debug("Deleted recipe %r", removed.name)
        self._on_recipes_changed(ChangeKind.DELETED, removed.name)

    def _find(self, recipe: Recipe) -> int:
        # The stored instance itself
        for position, stored in enumerate(self._recipes):
            if stored is recipe:
                return position

        # ...or the original of a copy
        for position, stored in enumerate(self._recipes):
            if stored == recipe:
                return position

        raise NotFoundError(f"Recipe {recipe.name!r} not found")

    def load(self) -> None:
        """
        Replace the collection with the recipes in the recipe file.

        On success the collection is sorted by name and is_modified is False.

        Raises:
            FormatError: If the file content is malformed
            StorageError: If the file cannot be read
        """
        recipes = codec.load(self._path, encoding=self._encoding)

        self._recipes = recipes
        self._is_modified = False
        logger.info("Loaded %d recipes from %s", len(recipes), self._path)
        self._on_recipes_changed(ChangeKind.LOADED)

    def save(self) -> None:
        """
        Write the collection to the recipe file in its current order.

        The file is truncated first. is_modified is set to True afterwards:
        the file now reflects the latest write rather than the loaded baseline.

        Raises:
            FormatError: If a recipe could not be read back after saving; the
                file is left untouched
            StorageError: If the file cannot be written
        """
        codec.save(self._recipes, self._path, encoding=self._encoding)

        self._is_modified = True
        logger.info("Saved %d recipes to %s", len(self._recipes), self._path)
        self._on_recipes_changed(ChangeKind.SAVED)
