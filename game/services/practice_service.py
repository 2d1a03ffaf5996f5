"""Practice hub: browse the catalog by category without scoring."""

from collections.abc import Sequence
from typing import Optional

from db.catalog import catalog_categories
from models import EquipmentRecord, PracticeState

ALL_CATEGORIES = "all"


class PracticeBrowser:
    """Category filter and selection over the equipment catalog."""

    def __init__(self, catalog: Sequence[EquipmentRecord]):
        self.catalog = list(catalog)
        self.state = PracticeState()

    @property
    def categories(self) -> list[str]:
        return [ALL_CATEGORIES, *catalog_categories(self.catalog)]

    def open(self) -> list[EquipmentRecord]:
        """Reset to the full catalog with nothing selected."""
        self.state = PracticeState()
        return self.visible()

    def set_category(self, category: str) -> list[EquipmentRecord]:
        """Filter by a category tag; unknown categories show nothing."""
        self.state.category = category
        self.state.selected = None
        return self.visible()

    def visible(self) -> list[EquipmentRecord]:
        if self.state.category == ALL_CATEGORIES:
            return list(self.catalog)
        return [item for item in self.catalog if item.category == self.state.category]

    def select(self, name: str) -> Optional[EquipmentRecord]:
        """Select an item by name (case-insensitive) from the full catalog."""
        wanted = name.strip().lower()
        for item in self.catalog:
            if item.name.lower() == wanted:
                self.state.selected = item
                return item
        return None

    def clear_selection(self) -> None:
        self.state.selected = None
