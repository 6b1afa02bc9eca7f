from bs4 import BeautifulSoup

from recipe_importer.app.services.html_import.schema_org import (
    extract_instruction_lines,
    extract_recipe_from_schema_org,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def test_extract_recipe_from_schema_org():
    html = """
    <html>
      <head>
        <script type="application/ld+json">
        {
          "@context": "https://schema.org",
          "@type": "Recipe",
          "name": "Test Recipe",
          "recipeIngredient": ["1 cup flour", "2 eggs"],
          "recipeInstructions": ["Mix", "Bake"],
          "prepTime": "PT10M",
          "cookTime": "PT1H5M",
          "totalTime": "PT1H15M",
          "recipeYield": ["4", "4 servings"],
          "tool": [{"@type": "HowToTool", "name": "Whisk"}, "Loaf pan"]
        }
        </script>
      </head>
    </html>
    """
    parsed = extract_recipe_from_schema_org(_soup(html))
    assert parsed is not None
    assert parsed.title == "Test Recipe"
    assert parsed.servings == "4"
    assert parsed.ingredients == "1 cup flour\n2 eggs"
    assert parsed.steps == "Mix\nBake"
    assert parsed.equipment == "Whisk\nLoaf pan"
    assert parsed.prep_minutes == 10
    assert parsed.cook_minutes == 65
    assert parsed.total_minutes == 75


def test_extract_recipe_from_graph():
    html = """
    <script type="application/ld+json">
    {"@graph": [
      {"@type": "WebPage", "name": "Page"},
      {"@type": ["Recipe"], "name": "Graph Soup", "recipeIngredient": ["2 cups stock"],
       "recipeInstructions": [{"@type": "HowToStep", "text": "Heat the stock."}]}
    ]}
    </script>
    """
    parsed = extract_recipe_from_schema_org(_soup(html))
    assert parsed is not None
    assert parsed.title == "Graph Soup"
    assert parsed.steps == "Heat the stock."


def test_how_to_sections_become_tags():
    instructions = [
        {
            "@type": "HowToSection",
            "name": "Cheese Filling",
            "itemListElement": [{"@type": "HowToStep", "text": "Mix the ricotta."}],
        },
        {"@type": "HowToStep", "text": "Assemble the lasagna."},
    ]
    assert extract_instruction_lines(instructions) == [
        "[Cheese Filling]",
        "Mix the ricotta.",
        "Assemble the lasagna.",
    ]


def test_invalid_or_missing_json_ld():
    html = """
    <script type="application/ld+json">{not json</script>
    <script type="application/ld+json">{"@type": "Recipe", "name": "Empty"}</script>
    """
    assert extract_recipe_from_schema_org(_soup(html)) is None
    assert extract_recipe_from_schema_org(_soup("<html><body>No data</body></html>")) is None


def test_list_valued_fields_use_first_string():
    html = """
    <script type="application/ld+json">
    {"@type": "Recipe", "name": ["Cookies", "Best Cookies"],
     "recipeIngredient": ["1 cup butter", ["2 cups flour"], {"name": ["1 egg"]}, 3],
     "recipeInstructions": [{"@type": ["HowToStep"], "text": ["Cream the butter."]}],
     "tool": {"name": "Mixer"}}
    </script>
    """
    parsed = extract_recipe_from_schema_org(_soup(html))
    assert parsed is not None
    assert parsed.title == "Cookies"
    assert parsed.ingredients == "1 cup butter\n2 cups flour\n1 egg"
    assert parsed.steps == "Cream the butter."
    assert parsed.equipment == "Mixer"


def test_json_ld_text_is_entity_decoded():
    html = """
    <script type="application/ld+json">
    {"@type": "Recipe", "name": "Mac &amp; Cheese",
     "recipeIngredient": ["2 cups macaroni", "1 cup cheddar &#39;sharp&#39;"],
     "recipeInstructions": [{"@type": "HowToSection", "name": "Sauce &amp; Pasta",
       "itemListElement": [{"@type": "HowToStep", "text": "Boil &quot;al dente&quot;."}]}]}
    </script>
    """
    parsed = extract_recipe_from_schema_org(_soup(html))
    assert parsed is not None
    assert parsed.title == "Mac & Cheese"
    assert parsed.ingredients == "2 cups macaroni\n1 cup cheddar 'sharp'"
    assert parsed.steps == '[Sauce & Pasta]\nBoil "al dente".'
