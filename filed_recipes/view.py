"""
Terminal rendering of recipes.

Recipes are shown as a header panel with the recipe name, followed by an
ingredients panel and an instructions panel. Instruction steps are numbered
from 1. All output goes through one shared rich Console.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .codec import SECTION_INGREDIENTS, SECTION_INSTRUCTIONS
from .models import Ingredient, Recipe

console = Console()


def _section_title(marker: str) -> str:
    # "[Ingredienser]" -> "Ingredienser"
    return marker.strip("[]")


def format_ingredient_line(ingredient: Ingredient) -> str:
    """Format an ingredient in aligned columns: amount, measure, name."""
    return f" {ingredient.amount:>4} {ingredient.measure:<6} {ingredient.name}"


def render_recipe(recipe: Recipe, out: Optional[Console] = None) -> None:
    """
    Print one recipe.

    Args:
        recipe: Recipe snapshot to render
        out: Console to print to (default: the shared console)
    """
    out = console if out is None else out

    out.print(Panel(Text(recipe.name, style="bold white"), style="white on blue", expand=True))

    out.print(Panel(_section_title(SECTION_INGREDIENTS), style="bold"))
    for ingredient in recipe.ingredients:
        out.print(Text(format_ingredient_line(ingredient)))

    out.print(Panel(_section_title(SECTION_INSTRUCTIONS), style="bold"))
    for number, instruction in enumerate(recipe.instructions, start=1):
        out.print(f"({number})")
        out.print(Text(instruction))


def render_recipes(recipes: Iterable[Recipe], out: Optional[Console] = None) -> None:
    """Print several recipes one after the other, separated by a rule."""
    out = console if out is None else out
    for position, recipe in enumerate(recipes):
        if position:
            out.rule()
        render_recipe(recipe, out)


def render_recipe_list(recipes: Iterable[Recipe], out: Optional[Console] = None) -> None:
    """Print recipe names numbered from 0, matching repository indices."""
    out = console if out is None else out
    for index, recipe in enumerate(recipes):
        out.print(Text(f"{index:>3}. {recipe.name}"))
