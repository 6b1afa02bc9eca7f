"""Shared vocabularies and character classes for recipe text segmentation."""

FRACTION_MAP = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}
FRACTION_CHARS = "".join(FRACTION_MAP.keys())

DEFAULT_TITLE = "Imported Recipe"

# Words that make up a whole line when it is a section heading.
HEADING_WORDS = (
    r"ingredients?",
    r"equipment",
    r"tools?",
    r"instructions?",
    r"directions?",
    r"method",
    r"steps",
    r"notes",
    r"yield",
    r"serves",
    r"servings?",
    r"chef's\s+notes",
    r"nutrition\s+facts",
)

# Named parts of a multi-component recipe.
SUBSECTION_WORDS = (
    r"cheese\s*filling",
    r"meat\s*sauce",
    r"lasagna\s*noodles.*topping",
    r"prep\s*work",
    r"make\s*the\s*meat\s*sauce",
    r"preheat.*noodles",
    r"assemble",
    r"bake",
    r"pro\s*tips?",
    r"notes?",
    r"nutrition\s*facts?",
)

IMPERATIVE_VERBS = (
    "Heat",
    "Add",
    "Stir",
    "Bake",
    "Combine",
    "Serve",
    "Wrap",
    "Slice",
    "Preheat",
    "Whisk",
    "Cook",
    "Mix",
    "Saute",
    "Sauté",
    "Simmer",
    "Bring",
    "Reduce",
    "Pour",
    "Spread",
    "Season",
    "Fold",
    "Arrange",
    "Gather",
    "Place",
    "Pound",
    "Transfer",
    "Beat",
    "Layer",
    "Make",
    "Assemble",
)

# Units recognised right after a step number ("1. 2 cups ..." is not a step).
STEP_UNIT_WORDS = (
    r"cups?",
    r"tbsp",
    r"tablespoons?",
    r"tsp",
    r"teaspoons?",
    r"g",
    r"grams?",
    r"kg",
    r"kilograms?",
    r"ml",
    r"milli?liters?",
    r"l",
    r"liters?",
    r"oz",
    r"ounces?",
    r"lbs?",
    r"pounds?",
    r"cloves?",
    r"slices?",
    r"cans?",
    r"packages?",
    r"sticks?",
    r"pinch",
    r"dash",
    r"sprig",
    r"bunch",
)

# Loose unit-ish words accepted after an ingredient quantity.
INGREDIENT_UNIT_WORDS = (
    r"cups?",
    r"tablespoons?",
    r"tbsp",
    r"teaspoons?",
    r"tsp",
    r"pounds?",
    r"lbs?",
    r"oz",
    r"ounces?",
    r"grams?",
    r"g",
    r"kilograms?",
    r"kg",
    r"milliliters?",
    r"ml",
    r"liters?",
    r"l",
    r"cloves?",
    r"heads?",
    r"cans?",
    r"packages?",
    r"packets?",
    r"sticks?",
    r"sprigs?",
    r"bunch(?:es)?",
    r"pears?",
    r"onions?",
    r"seeds?",
    r"oil",
    r"sauce",
    r"ginger",
    r"garlic",
    r"gochujang",
    r"steak",
)

COOKWARE_WORDS = (
    "pan",
    "skillet",
    "pot",
    "sheet",
    "grill",
    "griddle",
    "baking",
    "tray",
    "dish",
    "bowl",
    "whisk",
    "spatula",
    "tongs",
    "knife",
    "foil",
    "paper",
    "rack",
    "oven",
    r"cast\s+iron",
)

# Print headers/footers of recipe sites that leak into PDF text.
KNOWN_SOURCE_DOMAINS = (
    "allrecipes.com",
    "foodnetwork.com",
    "food.com",
    "simplyrecipes.com",
    "seriouseats.com",
)

MAX_EQUIPMENT_LINE_LENGTH = 64
MAX_EQUIPMENT_LINES = 4
MAX_DOM_EQUIPMENT_ITEMS = 6
INGREDIENT_RUN_GRACE = 2
BANNER_SCAN_LINES = 8
