"""
Console entry point for Filed Recipes.

Usage:
    python -m filed_recipes list
    python -m filed_recipes show 2
    python -m filed_recipes show --all
    python -m filed_recipes delete 2
    python -m filed_recipes --file path/to/Recipes.txt list

Repository failures are logged and turn into exit status 1.
"""

# Import config early to load .env before any setting is read
from filed_recipes.config import RecipesConfig, configure_logging

import argparse
import logging
import sys
from typing import List, Optional

from filed_recipes.errors import RecipeRepositoryError
from filed_recipes.events import log_change
from filed_recipes.repository import RecipeRepository
from filed_recipes.view import render_recipe, render_recipe_list, render_recipes

logger = logging.getLogger("filed_recipes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="filed_recipes", description="Show and edit the recipe file.")
    parser.add_argument("--file", help="Recipe file (default: FILED_RECIPES_PATH or App_Data/Recipes.txt)")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List recipe names with their index")

    show = commands.add_parser("show", help="Show one recipe or all of them")
    target = show.add_mutually_exclusive_group(required=True)
    target.add_argument("index", nargs="?", type=int, help="Index from 'list'")
    target.add_argument("--all", action="store_true", help="Show every recipe")

    delete = commands.add_parser("delete", help="Delete a recipe and save the file")
    delete.add_argument("index", type=int, help="Index from 'list'")

    return parser


def run(args: argparse.Namespace, repository: RecipeRepository) -> None:
    """Execute one command against a repository."""
    repository.load()

    if args.command == "list":
        render_recipe_list(repository.get_all())
    elif args.command == "show":
        if args.all:
            render_recipes(repository.get_all())
        else:
            render_recipe(repository.get_at(args.index))
    elif args.command == "delete":
        repository.delete(args.index)
        repository.save()


def main(argv: Optional[List[str]] = None) -> int:
    try:
        configure_logging()
    except ValueError as exc:
        logging.basicConfig()
        logger.error("%s", exc)
        return 1

    args = build_parser().parse_args(argv)

    if args.file:
        repository = RecipeRepository(args.file, encoding=RecipesConfig.get_encoding())
    else:
        repository = RecipeRepository.from_config()
    repository.subscribe(log_change)

    try:
        run(args, repository)
    except RecipeRepositoryError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
