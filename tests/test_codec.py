"""
Tests for the recipe text file reader and writer.

This module tests:
- Parsing sections into recipes, ingredients and instructions
- Sorting by name after a load
- Blank line handling
- FormatError for malformed rows and content outside any section
- Writing the exact file layout and reading it back
- File I/O wrappers and StorageError
"""

import io

import pytest

from filed_recipes import codec
from filed_recipes.errors import FormatError, StorageError
from filed_recipes.models import Ingredient, Recipe


PANCAKES = (
    "[Recept]\n"
    "Pancakes\n"
    "[Ingredienser]\n"
    "2;dl;flour\n"
    "1;st;egg\n"
    "[Instruktioner]\n"
    "Mix\n"
    "Fry\n"
)


def make_recipe(name, ingredients=(), instructions=()):
    return Recipe(
        name=name,
        ingredients=[Ingredient(amount=a, measure=m, name=n) for a, m, n in ingredients],
        instructions=list(instructions),
    )


class TestReadRecipes:
    """Test cases for read_recipes / loads."""

    def test_pancakes_example(self):
        """Test that a single recipe is parsed with ordered ingredients and steps."""
        recipes = codec.loads(PANCAKES)

        assert len(recipes) == 1
        recipe = recipes[0]
        assert recipe.name == "Pancakes"
        assert [(i.amount, i.measure, i.name) for i in recipe.ingredients] == [
            ("2", "dl", "flour"),
            ("1", "st", "egg"),
        ]
        assert recipe.instructions == ["Mix", "Fry"]

    def test_sorted_by_name(self):
        """Test that recipes are sorted ascending by name regardless of file order."""
        text = (
            "[Recept]\nWaffles\n[Ingredienser]\n[Instruktioner]\n"
            "[Recept]\nBread\n[Ingredienser]\n[Instruktioner]\n"
            "[Recept]\nPancakes\n[Ingredienser]\n[Instruktioner]\n"
        )
        recipes = codec.loads(text)
        assert [r.name for r in recipes] == ["Bread", "Pancakes", "Waffles"]

    def test_blank_lines_skipped(self):
        """Test that empty lines and one-character lines are ignored everywhere."""
        text = (
            "\n"
            " \n"
            "[Recept]\n"
            "\n"
            "Pancakes\n"
            "[Ingredienser]\n"
            "\n"
            "2;dl;flour\n"
            "x\n"
            "[Instruktioner]\n"
            "\n"
            "Mix\n"
        )
        recipes = codec.loads(text)
        assert len(recipes) == 1
        assert len(recipes[0].ingredients) == 1
        assert recipes[0].instructions == ["Mix"]

    def test_crlf_line_endings(self):
        """Test that Windows line endings are stripped."""
        recipes = codec.read_recipes(PANCAKES.replace("\n", "\r\n").splitlines(keepends=True))
        assert recipes[0].name == "Pancakes"
        assert recipes[0].instructions == ["Mix", "Fry"]

    def test_instruction_kept_verbatim(self):
        """Test that instruction lines keep semicolons and surrounding spaces."""
        text = "[Recept]\nSoup\n[Instruktioner]\n  Boil; then simmer  \n"
        recipes = codec.loads(text)
        assert recipes[0].instructions == ["  Boil; then simmer  "]

    def test_several_names_in_recipe_section(self):
        """Test that each line in a recipe section starts a new recipe."""
        text = "[Recept]\nSoup\nStew\n[Instruktioner]\nCook\n"
        recipes = codec.loads(text)
        assert [r.name for r in recipes] == ["Soup", "Stew"]
        assert recipes[0].instructions == []
        assert recipes[1].instructions == ["Cook"]

    def test_empty_ingredient_fields(self):
        """Test that an ingredient row may have empty amount and measure."""
        text = "[Recept]\nSoup\n[Ingredienser]\n;;salt\n"
        ingredient = codec.loads(text)[0].ingredients[0]
        assert (ingredient.amount, ingredient.measure, ingredient.name) == ("", "", "salt")

    def test_empty_input(self):
        """Test that an empty file yields no recipes."""
        assert codec.loads("") == []

    def test_two_field_ingredient_row(self):
        """Test that an ingredient row with only two fields is a FormatError."""
        text = "[Recept]\nPancakes\n[Ingredienser]\n2;cups\n"
        with pytest.raises(FormatError) as exc_info:
            codec.loads(text)
        assert exc_info.value.line_number == 4
        assert exc_info.value.line == "2;cups"

    def test_four_field_ingredient_row(self):
        """Test that an ingredient row with four fields is a FormatError."""
        text = "[Recept]\nPancakes\n[Ingredienser]\n2;dl;flour;extra\n"
        with pytest.raises(FormatError):
            codec.loads(text)

    def test_content_before_any_section(self):
        """Test that content before any section marker is a FormatError."""
        with pytest.raises(FormatError, match="No known sections"):
            codec.loads("Pancakes\n[Recept]\nWaffles\n")

    def test_rows_before_any_recipe(self):
        """Test that ingredient rows with no recipe to attach to are a FormatError."""
        with pytest.raises(FormatError):
            codec.loads("[Ingredienser]\n2;dl;flour\n")

    def test_marker_must_match_exactly(self):
        """Test that a marker with trailing text is treated as content."""
        text = "[Recept]\nSoup\n[Instruktioner] \nBoil\n"
        recipes = codec.loads(text)
        assert [r.name for r in recipes] == ["Boil", "Soup", "[Instruktioner] "]


class TestWriteRecipes:
    """Test cases for write_recipes / dumps."""

    def test_exact_layout(self):
        """Test that the pancakes recipe is written in the exact file layout."""
        recipe = make_recipe(
            "Pancakes",
            [("2", "dl", "flour"), ("1", "st", "egg")],
            ["Mix", "Fry"],
        )
        assert codec.dumps([recipe]) == PANCAKES

    def test_keeps_given_order(self):
        """Test that recipes are written in the order given, not sorted."""
        text = codec.dumps([make_recipe("Waffles"), make_recipe("Bread")])
        assert text == (
            "[Recept]\nWaffles\n[Ingredienser]\n[Instruktioner]\n"
            "[Recept]\nBread\n[Ingredienser]\n[Instruktioner]\n"
        )

    def test_empty_collection(self):
        """Test that no recipes produce an empty file."""
        assert codec.dumps([]) == ""

    @pytest.mark.parametrize(
        "recipe",
        [
            make_recipe("C", [("1", "st", "egg")], ["Boil"]),
            make_recipe("Soup", [], ["Boil", "1"]),
            make_recipe("Soup", [], ["Boil\n[Recept]\nGhost"]),
            make_recipe("Soup\nStew"),
            make_recipe("Soup", [], ["Boil\r"]),
            make_recipe("[Ingredienser]"),
            make_recipe("Soup", [], ["[Recept]"]),
            make_recipe("Soup", [("1;2", "st", "egg")]),
            make_recipe("Soup", [("1", "st", "egg;yolk")]),
            make_recipe("Soup", [("1", "st\n", "egg")]),
        ],
        ids=[
            "one-char-name",
            "one-char-instruction",
            "instruction-with-newline",
            "name-with-newline",
            "instruction-with-carriage-return",
            "name-is-marker",
            "instruction-is-marker",
            "separator-in-amount",
            "separator-in-name",
            "newline-in-measure",
        ],
    )
    def test_unreadable_values_rejected(self, recipe):
        """Test that values the reader would drop, split or misread raise FormatError."""
        with pytest.raises(FormatError):
            codec.validate_recipe(recipe)
        with pytest.raises(FormatError):
            codec.dumps([make_recipe("Bread"), recipe])

    def test_rejected_write_leaves_stream_empty(self):
        """Test that nothing is written when any recipe is rejected."""
        buffer = io.StringIO()
        with pytest.raises(FormatError):
            codec.write_recipes([make_recipe("Bread"), make_recipe("C")], buffer)
        assert buffer.getvalue() == ""

    def test_two_character_values_accepted(self):
        """Test that the shortest readable values round-trip."""
        recipe = make_recipe("Te", [("", "", "te")], ["Ok"])
        assert [r.model_dump() for r in codec.loads(codec.dumps([recipe]))] == [recipe.model_dump()]

    def test_round_trip(self):
        """Test that written recipes read back equal in content, sorted by name."""
        original = [
            make_recipe("Waffles", [("3", "dl", "milk")], ["Whisk", "Bake"]),
            make_recipe("Bread", [("5", "dl", "flour"), ("25", "g", "yeast")], ["Knead"]),
        ]
        recipes = codec.loads(codec.dumps(original))

        assert [r.model_dump() for r in recipes] == [
            original[1].model_dump(),
            original[0].model_dump(),
        ]


class TestFileIO:
    """Test cases for load and save against real files."""

    def test_save_then_load(self, tmp_path):
        """Test that save writes a file load can read."""
        path = tmp_path / "Recipes.txt"
        codec.save([make_recipe("Pancakes", [("2", "dl", "flour"), ("1", "st", "egg")], ["Mix", "Fry"])], path)

        with open(path, "r", encoding="utf-8") as f:
            assert f.read() == PANCAKES

        recipes = codec.load(path)
        assert recipes[0].name == "Pancakes"

    def test_save_truncates(self, tmp_path):
        """Test that save replaces existing content."""
        path = tmp_path / "Recipes.txt"
        path.write_text(PANCAKES * 3, encoding="utf-8")
        codec.save([make_recipe("Soup")], path)
        assert [r.name for r in codec.load(path)] == ["Soup"]

    def test_non_ascii_content(self, tmp_path):
        """Test that Swedish characters survive a save and load."""
        path = tmp_path / "Recipes.txt"
        codec.save([make_recipe("Kålpudding", [("1", "st", "vitkålshuvud")], ["Stek kålen"])], path)
        recipe = codec.load(path)[0]
        assert recipe.name == "Kålpudding"
        assert recipe.ingredients[0].name == "vitkålshuvud"

    def test_rejected_save_keeps_file(self, tmp_path):
        """Test that a rejected save does not truncate the existing file."""
        path = tmp_path / "Recipes.txt"
        path.write_text(PANCAKES, encoding="utf-8")
        with pytest.raises(FormatError):
            codec.save([make_recipe("Soup", [], ["Boil\n[Recept]\nGhost"])], path)
        assert path.read_text(encoding="utf-8") == PANCAKES

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises StorageError."""
        with pytest.raises(StorageError):
            codec.load(tmp_path / "missing.txt")

    def test_save_to_missing_directory(self, tmp_path):
        """Test that an unwritable location raises StorageError."""
        with pytest.raises(StorageError):
            codec.save([], tmp_path / "no" / "such" / "dir" / "Recipes.txt")

    def test_load_malformed_file(self, tmp_path):
        """Test that FormatError from a file is not wrapped."""
        path = tmp_path / "Recipes.txt"
        path.write_text("Pancakes\n", encoding="utf-8")
        with pytest.raises(FormatError):
            codec.load(path)
