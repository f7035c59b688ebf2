"""
Reader and writer for the section-delimited recipe text file.

File layout (one recipe after the other, no footer):

    [Recept]
    Pannkakor
    [Ingredienser]
    2;dl;vetemjöl
    1;st;ägg
    [Instruktioner]
    Blanda
    Stek

The reader is a single forward pass over the lines. Three exact-match marker
lines switch between reading recipe names, ingredient rows and instruction
steps; every other line is interpreted according to the current section.
Lines of at most one character are blank and skipped everywhere.

The whole load fails on the first malformed row. Nothing is returned for a
partially parsed file.
"""

import io
import logging
from enum import Enum
from pathlib import Path
from typing import IO, Iterable, List, Union

from .errors import FormatError, StorageError
from .models import Ingredient, Recipe

logger = logging.getLogger(__name__)

SECTION_RECIPE = "[Recept]"
SECTION_INGREDIENTS = "[Ingredienser]"
SECTION_INSTRUCTIONS = "[Instruktioner]"

INGREDIENT_SEPARATOR = ";"
INGREDIENT_FIELD_COUNT = 3


class ReadStatus(str, Enum):
    """How the next content line is interpreted."""
    INDEFINITE = "indefinite"
    NEW = "new"
    INGREDIENT = "ingredient"
    INSTRUCTION = "instruction"


_SECTIONS = {
    SECTION_RECIPE: ReadStatus.NEW,
    SECTION_INGREDIENTS: ReadStatus.INGREDIENT,
    SECTION_INSTRUCTIONS: ReadStatus.INSTRUCTION,
}


def parse_ingredient(line: str) -> Ingredient:
    """
    Parse an `amount;measure;name` row.

    Args:
        line: Ingredient row without line terminator

    Returns:
        Ingredient built from the three fields

    Raises:
        FormatError: If the row does not have exactly three fields
    """
    fields = line.split(INGREDIENT_SEPARATOR)
    if len(fields) != INGREDIENT_FIELD_COUNT:
        raise FormatError("Could not parse file. Row contains wrong number of values.")
    amount, measure, name = fields
    return Ingredient(amount=amount, measure=measure, name=name)


def _check_text(value: str, what: str) -> None:
    if "\n" in value or "\r" in value:
        raise FormatError(f"Could not write file. {what} contains a line break: {value!r}")


def _check_line(value: str, what: str) -> None:
    # Must survive the reader as one content line of its own
    _check_text(value, what)
    if len(value) <= 1:
        raise FormatError(f"Could not write file. {what} is too short to be read back: {value!r}")
    if value in _SECTIONS:
        raise FormatError(f"Could not write file. {what} equals a section marker: {value!r}")


def format_ingredient(ingredient: Ingredient) -> str:
    """
    Format an ingredient as an `amount;measure;name` row.

    Raises:
        FormatError: If a field contains the separator or a line break
    """
    fields = (ingredient.amount, ingredient.measure, ingredient.name)
    for field in fields:
        _check_text(field, "Ingredient field")
        if INGREDIENT_SEPARATOR in field:
            raise FormatError(f"Could not write file. Ingredient field contains {INGREDIENT_SEPARATOR!r}: {field!r}")
    return INGREDIENT_SEPARATOR.join(fields)


def validate_recipe(recipe: Recipe) -> None:
    """
    Check that a recipe can be written and read back unchanged.

    Names and instructions must be single lines longer than one character
    that are not section markers. Ingredient fields must not contain ';' or
    line breaks.

    Raises:
        FormatError: If any value would be lost or misread by read_recipes()
    """
    _check_line(recipe.name, "Recipe name")
    for ingredient in recipe.ingredients:
        format_ingredient(ingredient)
    for instruction in recipe.instructions:
        _check_line(instruction, "Instruction")


def read_recipes(lines: Iterable[str]) -> List[Recipe]:
    """
    Parse recipes from an iterable of lines (an open text file works).

    Args:
        lines: Lines of the recipe file, with or without line terminators

    Returns:
        Recipes sorted ascending by name

    Raises:
        FormatError: On an ingredient row without exactly three fields, on
            content before any section marker, or on ingredient/instruction
            rows before any recipe name
    """
    recipes: List[Recipe] = []
    status = ReadStatus.INDEFINITE

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")

        # Blank line
        if len(line) <= 1:
            continue

        if line in _SECTIONS:
            status = _SECTIONS[line]
            continue

        if status is ReadStatus.INDEFINITE:
            raise FormatError("Could not parse file. No known sections found.", line_number, line)

        if status is ReadStatus.NEW:
            recipes.append(Recipe(name=line))
            continue

        if not recipes:
            raise FormatError("Could not parse file. Row appears before any recipe name.", line_number, line)

        if status is ReadStatus.INGREDIENT:
            try:
                ingredient = parse_ingredient(line)
            except FormatError as exc:
                raise FormatError(str(exc), line_number, line) from None
            recipes[-1].add_ingredient(ingredient)
        else:
            recipes[-1].add_instruction(line)

    recipes.sort(key=lambda recipe: recipe.name)
    logger.debug("Parsed %d recipes", len(recipes))
    return recipes


def write_recipes(recipes: Iterable[Recipe], stream: IO[str]) -> None:
    """
    Write recipes to a text stream in the order given.

    Every recipe is validated before anything is written, so a rejected
    collection leaves the stream untouched.

    Args:
        recipes: Recipes to serialize
        stream: Writable text stream

    Raises:
        FormatError: If a recipe could not be read back (see validate_recipe())
    """
    recipes = list(recipes)
    for recipe in recipes:
        validate_recipe(recipe)

    for recipe in recipes:
        stream.write(SECTION_RECIPE + "\n")
        stream.write(recipe.name + "\n")

        stream.write(SECTION_INGREDIENTS + "\n")
        for ingredient in recipe.ingredients:
            stream.write(format_ingredient(ingredient) + "\n")

        stream.write(SECTION_INSTRUCTIONS + "\n")
        for instruction in recipe.instructions:
            stream.write(instruction + "\n")


def loads(text: str) -> List[Recipe]:
    """Parse recipes from a string. See read_recipes()."""
    return read_recipes(io.StringIO(text))


def dumps(recipes: Iterable[Recipe]) -> str:
    """Serialize recipes to a string using '\\n' line endings."""
    buffer = io.StringIO()
    write_recipes(recipes, buffer)
    return buffer.getvalue()


def load(path: Union[str, Path], encoding: str = "utf-8") -> List[Recipe]:
    """
    Read and parse the recipe file at path.

    Raises:
        FormatError: If the file content is malformed
        StorageError: If the file cannot be opened or read
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            return read_recipes(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"Could not read recipe file {path}: {exc}") from exc


def save(recipes: Iterable[Recipe], path: Union[str, Path], encoding: str = "utf-8") -> None:
    """
    Write recipes to path, replacing any existing content.

    Lines end with the platform line separator. Recipes are validated before
    the file is opened, so a rejected save leaves the file as it was.

    Raises:
        FormatError: If a recipe could not be read back (see validate_recipe())
        StorageError: If the file cannot be opened or written
    """
    recipes = list(recipes)
    for recipe in recipes:
        validate_recipe(recipe)

    try:
        with open(path, "w", encoding=encoding) as f:
            write_recipes(recipes, f)
    except (OSError, UnicodeEncodeError) as exc:
        raise StorageError(f"Could not write recipe file {path}: {exc}") from exc
