from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
CATALOG_DIR = DATA_DIR / "catalog"

# CSV exports read by the importer
FILE_NAMES = {
    "sports": "sports.csv",
    "measures": "measures.csv",
    "templates": "templates.csv",
}

# Fixed columns; every other column of a sports/templates file is a variable
SPORT_NAME_COLUMN = "Sport"
SPORT_DISABLED_COLUMN = "Disabled"
MEASURE_COLUMNS = ["Key", "Type", "Options"]

# Separator between allowed values in the Options column
OPTIONS_SEPARATOR = "|"

# Measure type spellings found in exports -> canonical type
MEASURE_TYPE_ALIASES = {
    "number": "number",
    "numeric": "number",
    "int": "number",
    "float": "number",
    "string": "string",
    "text": "string",
    "str": "string",
    "boolean": "boolean",
    "bool": "boolean",
}

# Row of templates.csv holding the blank template for new sports
BLANK_TEMPLATE_KEY = "template"
