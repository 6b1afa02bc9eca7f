from bs4 import BeautifulSoup

from recipe_importer.app.services.html_import.dom_extractor import (
    extract_servings,
    extract_title,
    html_to_text,
    select_equipment_lines,
    select_ingredient_lines,
    select_instruction_lines,
    split_inline_ingredients,
    split_into_step_lines,
    try_extract_from_dom,
)
from recipe_importer.app.services.segmentation.normalizer import split_lines


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


MICRODATA_HTML = """
<html>
  <head><title>Site | Tomato Soup</title></head>
  <body>
    <h1 class="entry-title">Tomato Soup</h1>
    <span itemprop="recipeYield">Serves 6</span>
    <ul>
      <li itemprop="recipeIngredient">2 cups tomatoes</li>
      <li itemprop="recipeIngredient">1 tsp salt &amp; pepper</li>
    </ul>
    <div itemprop="recipeInstructions">
      <ol>
        <li>Simmer the tomatoes.</li>
        <li>Blend until smooth.</li>
      </ol>
    </div>
    <h3>Equipment</h3>
    <ul>
      <li>Blender</li>
      <li>Large pot</li>
    </ul>
  </body>
</html>
"""


def test_try_extract_from_dom_microdata():
    result = try_extract_from_dom(_soup(MICRODATA_HTML))
    assert result is not None
    assert result.title == "Tomato Soup"
    assert result.servings == "6"
    assert result.ingredients == "2 cups tomatoes\n1 tsp salt & pepper"
    assert result.steps == "Simmer the tomatoes.\nBlend until smooth."
    assert result.equipment == "Blender\nLarge pot"


def test_class_hinted_containers():
    html = """
    <html><body>
      <h1>Plain Title</h1>
      <div class="recipe-servings">Yield: 8 cookies</div>
      <div class="wprm-recipe-ingredients">
        <ul><li>1 cup sugar</li><li>2 cups flour</li></ul>
      </div>
      <div id="directions">
        <ol><li>Cream the butter.</li><li>Bake 10 minutes.</li></ol>
      </div>
      <div class="recipe-equipment"><ul><li>Baking sheet</li></ul></div>
    </body></html>
    """
    soup = _soup(html)
    assert extract_title(soup) == "Plain Title"
    assert extract_servings(soup) == "8"
    assert select_ingredient_lines(soup) == ["1 cup sugar", "2 cups flour"]
    assert select_instruction_lines(soup) == ["Cream the butter.", "Bake 10 minutes."]
    assert select_equipment_lines(soup) == ["Baking sheet"]


def test_title_fallbacks():
    assert extract_title(_soup("<html><body><span itemprop='name'>Stew</span></body></html>")) == "Stew"
    assert extract_title(_soup("<html><head><title>Chili</title></head></html>")) == "Chili"
    assert extract_title(_soup("<html><body><p>nothing</p></body></html>")) == "Imported Recipe"


def test_servings_from_label_text():
    html = "<html><body><div><p>Servings: 4 people</p></div></body></html>"
    assert extract_servings(_soup(html)) == "4"
    assert extract_servings(_soup("<html><body><p>Nothing</p></body></html>")) == ""


def test_inline_ingredient_blob_is_split_on_quantities():
    html = """
    <html><body>
      <div class="ingredients">3 chicken breasts 1/2 cup flour 1 1/2 cups milk ½ tsp salt</div>
    </body></html>
    """
    assert select_ingredient_lines(_soup(html)) == [
        "3 chicken breasts",
        "1/2 cup flour",
        "1 1/2 cups milk",
        "½ tsp salt",
    ]


def test_split_inline_ingredients_needs_two_fragments():
    assert split_inline_ingredients("salt and pepper") == []


def test_instructions_blob_split():
    assert split_into_step_lines("Mix.\nBake.") == ["Mix.", "Bake."]
    assert split_into_step_lines("1. Mix the batter. 2. Pour it in. 3) Bake.") == [
        "1. Mix the batter.",
        "2. Pour it in.",
        "3) Bake.",
    ]
    assert split_into_step_lines("Just bake it.") == ["Just bake it."]


def test_instructions_text_descendants():
    html = """
    <html><body>
      <div itemprop="recipeInstructions">
        <div><span itemprop="text">Boil water.</span></div>
        <div><span itemprop="text">Add pasta.</span></div>
      </div>
    </body></html>
    """
    assert select_instruction_lines(_soup(html)) == ["Boil water.", "Add pasta."]


def test_equipment_limits():
    items = "".join(f"<li>Tool number {i}</li>" for i in range(8))
    html = f"<html><body><h2>Tools</h2><ul>{items}<li>{'x' * 70}</li></ul></body></html>"
    lines = select_equipment_lines(_soup(html))
    assert len(lines) == 6
    assert lines[0] == "Tool number 0"


def test_try_extract_from_dom_returns_none_without_sections():
    assert try_extract_from_dom(_soup("<html><body><h1>Title</h1><p>Hello</p></body></html>")) is None


def test_html_to_text_one_line_per_block():
    html = """
    <html><head><style>p { color: red; }</style></head>
    <body>
      <nav>Home | Recipes</nav>
      <h1>Pancakes</h1>
      <ul><li>1 <b>cup</b> flour</li><li>2 eggs</li></ul>
      <p>Whisk together.<br>Cook on a griddle.</p>
      <script>var x = 1;</script>
      <footer>Copyright</footer>
    </body></html>
    """
    text = html_to_text(html)
    assert split_lines(text) == ["Pancakes", "1 cup flour", "2 eggs", "Whisk together.", "Cook on a griddle."]
