import os
import random
from enum import Enum

from grocery.errors import ConfigurationError, InvariantViolation, NotFoundError

# Seed campaigns, installed as package data
STORE_DATA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "campaigns")


def normalize_name(raw):
    """Lowercase, trim and collapse inner whitespace so synonyms compare equal."""
    if raw is None:
        return ""
    return " ".join(str(raw).lower().split())


class ItemRole(Enum):
    GENERIC = "generic"
    CART = "cart"
    SHOPPING_LIST = "shopping_list"


# ==========================================================
# 1. ENTITIES
# ==========================================================
class Item:
    def __init__(self, name, data):
        self.name = normalize_name(name)
        self.synonyms = [normalize_name(s) for s in data.get('synonyms', [])]
        self.description = data.get('description', "")
        self.contents = list(data.get('contents', []))
        self.takeable = bool(data.get('takeable', False))
        try:
            self.role = ItemRole(data.get('role', 'generic'))
        except ValueError:
            raise ConfigurationError(f"item {self.name!r} has unknown role {data.get('role')!r}")

    def has(self, target):
        """
        Membership in contents. A positive answer is confirmed by locating the
        entry; if it cannot be found the contents are corrupt and
        InvariantViolation is raised.
        """
        return self._index_of(target) is not None

    def add(self, target):
        self.contents.append(target)

    def remove(self, target):
        """Removes one occurrence of target. Returns False when there is nothing to remove."""
        index = self._index_of(target)
        if index is None:
            return False
        del self.contents[index]
        return True

    def _index_of(self, target):
        if target not in self.contents:
            return None
        try:
            return self.contents.index(target)
        except ValueError:
            raise InvariantViolation(
                f"{self.name}.has({target!r}) is True but {target!r} is missing from its contents"
            )

    def __repr__(self):
        return f"Item({self.name!r}, role={self.role.value}, contents={self.contents!r})"


class Location:
    def __init__(self, name, data):
        self.name = normalize_name(name)
        self.synonyms = [normalize_name(s) for s in data.get('synonyms', [])]
        self.description = data.get('description', "")
        self.items = [normalize_name(i) for i in data.get('items', [])]
        self.exits = [normalize_name(e) for e in data.get('exits', [])]

    def __repr__(self):
        return f"Location({self.name!r})"


# ==========================================================
# 2. REGISTRIES
# ==========================================================
class _Registry:
    kind = "entry"

    def __init__(self):
        self.entries = {}
        self.lookup = {}

    def _register(self, entry):
        if entry.name in self.entries:
            raise ConfigurationError(f"duplicate {self.kind} {entry.name!r}")
        self.entries[entry.name] = entry
        for alias in [entry.name] + entry.synonyms:
            owner = self.lookup.get(alias)
            if owner is not None and owner != entry.name:
                raise ConfigurationError(
                    f"{self.kind} name {alias!r} is claimed by both {owner!r} and {entry.name!r}"
                )
            self.lookup[alias] = entry.name

    def resolve_name(self, raw):
        """Maps any synonym to the canonical name, or raises NotFoundError."""
        canonical = self.lookup.get(normalize_name(raw))
        if canonical is None:
            raise NotFoundError(self.kind, raw)
        return canonical

    def exists(self, name):
        return normalize_name(name) in self.lookup

    def get(self, name):
        return self.entries[self.resolve_name(name)]

    def __iter__(self):
        return iter(self.entries.values())


class ItemRegistry(_Registry):
    kind = "item"

    def __init__(self, items, produce_inventory=()):
        super().__init__()
        for item in items:
            self._register(item)
        self.produce = list(dict.fromkeys(normalize_name(p) for p in produce_inventory))

    def describe(self, name):
        return self.get(name).description

    def is_takeable(self, name):
        return self.get(name).takeable

    def role(self, name):
        return self.get(name).role

    def is_produce(self, name):
        return normalize_name(name) in self.produce

    def with_role(self, role):
        for item in self:
            if item.role is role:
                return item
        return None


class LocationRegistry(_Registry):
    kind = "location"

    def __init__(self, locations):
        super().__init__()
        for location in locations:
            self._register(location)

    def describe_location(self, name):
        return self.get(name).description

    def is_adjacent(self, from_name, to_name):
        origin = self.get(from_name)
        return self.resolve_name(to_name) in origin.exits


class Catalog:
    """Everything static about the store, plus the produce inventory."""

    def __init__(self, items, locations, manifest=None):
        self.items = items
        self.locations = locations
        self.manifest = manifest or {}

    @property
    def title(self):
        return self.manifest.get('title', "Grocery Run")

    @property
    def start_location(self):
        return self.locations.resolve_name(self.manifest.get('start_location', ""))

    def is_item_present_at(self, location, item_name, player):
        """
        True when the item (or produce) is on the location's shelf, or when it
        is the cart or shopping list and the player is carrying it.
        """
        here = self.locations.get(location)
        if not self.items.exists(item_name):
            return normalize_name(item_name) in here.items

        item = self.items.get(item_name)
        if item.name in here.items:
            return True
        if item.role is ItemRole.CART:
            return player.cart is item
        if item.role is ItemRole.SHOPPING_LIST:
            return player.shopping_list is item
        return False


# ==========================================================
# 3. BUILDER
# ==========================================================
def create_shopping_list(inventory, list_length, rng=None):
    """Draws list_length distinct produce names, uniformly at random."""
    rng = rng or random
    if list_length > len(inventory):
        raise ConfigurationError(
            f"shopping list of {list_length} needs at least that many produce names, "
            f"inventory has {len(inventory)}"
        )
    return rng.sample(list(inventory), list_length)


def build_catalog(campaign_db, list_length=5, rng=None):
    """
    Turns the merged campaign data (manifest, scenes, assets) into registries
    and rolls a fresh shopping list.
    """
    assets = campaign_db.get('assets') or {}
    scenes = campaign_db.get('scenes') or {}
    manifest = campaign_db.get('manifest') or {}

    items = ItemRegistry(
        [Item(name, data or {}) for name, data in (assets.get('items') or {}).items()],
        assets.get('produce_inventory') or [],
    )
    locations = LocationRegistry(
        [Location(name, data or {}) for name, data in scenes.items()]
    )

    # Wire up exits and shelves using canonical names only
    for location in locations:
        exits = []
        for exit_name in location.exits:
            if not locations.exists(exit_name):
                raise ConfigurationError(f"{location.name!r} has an exit to unknown location {exit_name!r}")
            exits.append(locations.resolve_name(exit_name))
        location.exits = exits

        shelf = []
        for entry in location.items:
            if items.exists(entry):
                shelf.append(items.resolve_name(entry))
            elif items.is_produce(entry):
                shelf.append(entry)
            else:
                raise ConfigurationError(f"{location.name!r} stocks unknown item {entry!r}")
        location.items = shelf

    cart = items.with_role(ItemRole.CART)
    shopping_list = items.with_role(ItemRole.SHOPPING_LIST)
    if cart is None or shopping_list is None:
        raise ConfigurationError("the store needs one cart item and one shopping list item")

    shopping_list.contents = create_shopping_list(items.produce, list_length, rng)

    catalog = Catalog(items, locations, manifest)
    if not locations.exists(manifest.get('start_location', "")):
        raise ConfigurationError(f"unknown start location {manifest.get('start_location')!r}")
    return catalog
