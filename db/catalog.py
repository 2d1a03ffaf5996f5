"""Equipment catalog loading."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from models import EquipmentRecord
from utils.exceptions import CatalogUnavailableError

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(list[EquipmentRecord])

BUNDLED_CATALOG = Path(__file__).parent / "data" / "equipment.json"


def parse_catalog(raw: str | bytes) -> list[EquipmentRecord]:
    """Parse and validate a JSON array of equipment records."""
    try:
        catalog = _catalog_adapter.validate_json(raw)
    except ValidationError as e:
        raise CatalogUnavailableError(f"invalid catalog data ({e.error_count()} errors)") from e

    if not catalog:
        raise CatalogUnavailableError("catalog is empty")
    return catalog


def load_catalog(path: Optional[str | Path] = None) -> list[EquipmentRecord]:
    """Load the equipment catalog from a JSON file.

    With no path, the catalog shipped with the game is used.
    """
    path = Path(path) if path else BUNDLED_CATALOG
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CatalogUnavailableError(f"can't read {path}: {e}") from e

    catalog = parse_catalog(raw)
    categories = sorted({item.category for item in catalog})
    logger.info(f"Loaded {len(catalog)} equipment records from {path} ({', '.join(categories)})")
    return catalog


def catalog_categories(catalog: list[EquipmentRecord]) -> list[str]:
    """Distinct categories in catalog order."""
    return list(dict.fromkeys(item.category for item in catalog))
