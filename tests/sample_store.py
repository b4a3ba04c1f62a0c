import copy
import random

from grocery.catalog import build_catalog

# A tiny store with a two-item produce inventory, so the shopping list is
# always tomatoes and plums in some order.
STORE = {
    "manifest": {
        "title": "Test Store",
        "intro": "A store small enough to test.",
        "start_location": "main entrance",
    },
    "scenes": {
        "main entrance": {
            "synonyms": ["entrance", "front"],
            "description": "The doors. A list is pinned to a board.",
            "items": ["main entrance doors", "shopping list"],
            "exits": ["cart corral", "produce aisle"],
        },
        "cart corral": {
            "synonyms": ["cart room"],
            "description": "Carts everywhere.",
            "items": ["small cart", "big cart", "hand basket"],
            "exits": ["main entrance"],
        },
        "produce aisle": {
            "synonyms": ["produce"],
            "description": "Vegetables.",
            "items": ["tomatoes"],
            "exits": ["main entrance", "fruit stand", "checkout"],
        },
        "fruit stand": {
            "synonyms": ["fruit"],
            "description": "Fruit.",
            "items": ["plums"],
            "exits": ["produce aisle"],
        },
        "checkout": {
            "synonyms": ["checkout lane"],
            "description": "Beep.",
            "items": ["cash register"],
            "exits": ["main entrance", "produce aisle"],
        },
    },
    "assets": {
        "items": {
            "main entrance doors": {
                "synonyms": ["doors", "big doors"],
                "description": "Please leave them where they are.",
            },
            "small cart": {
                "synonyms": ["cart"],
                "description": "This is your shopping cart.",
                "takeable": True,
                "role": "cart",
            },
            "big cart": {
                "synonyms": ["large cart"],
                "description": "Tied & locked with the rest.",
            },
            "hand basket": {
                "synonyms": ["basket"],
                "description": "A plastic basket.",
                "takeable": True,
            },
            "shopping list": {
                "synonyms": ["list"],
                "description": "This is your shopping list.",
                "takeable": True,
                "role": "shopping_list",
            },
            "cash register": {
                "synonyms": ["register"],
                "description": "It's not for you.",
                "contents": [1, 5, 20],
            },
        },
        "produce_inventory": ["tomatoes", "plums"],
    },
}


def store_data():
    return copy.deepcopy(STORE)


def make_store(list_length=2, seed=7):
    return build_catalog(store_data(), list_length, random.Random(seed))


class LyingContents(list):
    """Claims to hold everything, so has() and index() disagree."""

    def __contains__(self, target):
        return True
