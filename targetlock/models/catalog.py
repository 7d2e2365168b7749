"""
Priced Work Item Catalog

The catalog is the static price list the worker is paid against.
It is loaded once and never changes during a run.

DESIGN DECISION: Records reference items by id only. A record that
mentions an id the catalog no longer knows is not an error - the
calculator skips it - so the price list can evolve without breaking
old records or backups.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


# Items at or above this price count as premium (within premium categories)
PREMIUM_PRICE_THRESHOLD = 15_000


class ItemCategory(str, Enum):
    """
    Price tier of a work item.

    Colors follow the tier stickers on the workshop price board.
    OPERATIONAL entries (overtime, double shift, shuttle) add income
    but are not physical pairs of shoes.
    """
    YELLOW = "YELLOW"
    ORANGE = "ORANGE"
    RED = "RED"
    WHITE = "WHITE"
    BLUE = "BLUE"
    PURPLE = "PURPLE"
    OPERATIONAL = "OPERATIONAL"


# Categories eligible for the premium heuristic
PREMIUM_CATEGORIES = frozenset({
    ItemCategory.BLUE,
    ItemCategory.PURPLE,
    ItemCategory.WHITE,
})

# Order used when laying out input panels
DISPLAY_ORDER = (
    ItemCategory.YELLOW,
    ItemCategory.RED,
    ItemCategory.ORANGE,
    ItemCategory.BLUE,
    ItemCategory.PURPLE,
    ItemCategory.WHITE,
    ItemCategory.OPERATIONAL,
)


class CatalogItem(BaseModel):
    """A single priced work item."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique item key referenced by daily records"
    )
    label: str = Field(
        ...,
        min_length=1,
        description="Name shown on the input panel"
    )
    unit_price: int = Field(
        ...,
        ge=0,
        description="Price paid per unit in Rupiah"
    )
    category: ItemCategory

    @property
    def counts_as_pair(self) -> bool:
        """Operational entries are income, not production."""
        return self.category != ItemCategory.OPERATIONAL

    @property
    def is_premium(self) -> bool:
        """
        Premium = premium category AND (named premium OR priced at threshold).

        The category gate comes first: an expensive YELLOW item is never premium.
        """
        if self.category not in PREMIUM_CATEGORIES:
            return False
        return "premium" in self.id or self.unit_price >= PREMIUM_PRICE_THRESHOLD


class Catalog:
    """
    Read-only lookup table of catalog items keyed by id.
    """

    def __init__(self, items: Iterable[CatalogItem]):
        self._items: dict[str, CatalogItem] = {}
        for item in items:
            if item.id in self._items:
                raise ValueError(f"Duplicate catalog item id: {item.id}")
            self._items[item.id] = item

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        """Return the item for an id, or None if the catalog does not know it."""
        return self._items.get(item_id)

    def by_category(self, category: ItemCategory) -> list[CatalogItem]:
        return [item for item in self._items.values() if item.category == category]

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._items)

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items


def _item(item_id: str, label: str, price: int, category: ItemCategory) -> CatalogItem:
    return CatalogItem(id=item_id, label=label, unit_price=price, category=category)


MENU_ITEMS: tuple[CatalogItem, ...] = (
    # Rp10.000
    _item("basic_cleaning", "Basic Cleaning", 10_000, ItemCategory.YELLOW),
    _item("special_white_basic", "Sp. White Basic", 10_000, ItemCategory.YELLOW),
    _item("topi", "Topi", 10_000, ItemCategory.YELLOW),
    _item("unyellowing", "Unyellowing", 10_000, ItemCategory.YELLOW),

    # Rp13.000
    _item("leather_care", "Leather Care", 13_000, ItemCategory.ORANGE),
    _item("tas", "Tas", 13_000, ItemCategory.ORANGE),
    _item("extra_hard", "Ekstra Hard", 13_000, ItemCategory.ORANGE),
    _item("jaket", "Jaket", 13_000, ItemCategory.ORANGE),

    # Rp12.000
    _item("reguler_cleaning", "Reguler Cleaning", 12_000, ItemCategory.RED),
    _item("sw_reguler", "SW Reguler", 12_000, ItemCategory.RED),

    # Rp25.000
    _item("wearpack", "Wearpack", 25_000, ItemCategory.WHITE),
    _item("stroller", "Stroller", 25_000, ItemCategory.WHITE),

    # Rp15.000
    _item("premium_cleaning", "Premium Cleaning", 15_000, ItemCategory.BLUE),
    _item("sw_premium", "SW Premium", 15_000, ItemCategory.BLUE),
    _item("koper", "Koper XXL", 15_000, ItemCategory.BLUE),

    # Rp20.000
    _item("boots_hard", "Boots Hard", 20_000, ItemCategory.PURPLE),
    _item("boots_trail", "Boots Trail/Balap", 20_000, ItemCategory.PURPLE),

    # Operational (adds income, not pairs)
    _item("lembur", "Lembur", 15_000, ItemCategory.OPERATIONAL),
    _item("shift_2", "Jaga 2 Shift", 15_000, ItemCategory.OPERATIONAL),
    _item("antar_jemput", "Antar Jemput", 12_000, ItemCategory.OPERATIONAL),
)

DEFAULT_CATALOG = Catalog(MENU_ITEMS)
