from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
CATALOG_DIR = PROJECT_ROOT / "data" / "catalog"
CATALOG_FILE = CATALOG_DIR / "catalog.json"

# Remote template service
TEMPLATE_SERVICE_URL = "http://localhost:8080/api/admin"
TEMPLATE_FETCH_TIMEOUT_SECONDS = 10

# Variables every new sport starts with when the catalog has no template
DEFAULT_SPORT_TEMPLATE = {
    "minHeight": 0,
    "maxHeight": 0,
    "minAge": 0,
}

# Worker threads shared by all template fetches of one SportSync
TEMPLATE_FETCH_WORKERS = 4
