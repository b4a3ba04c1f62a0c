ACTIONS = ("look", "go to", "examine", "take", "get", "drop", "pay", "leave")


class PlayerState:
    """
    The session's single source of truth for progress. The Director is the
    only thing that writes to it.
    """

    def __init__(self, current_location, actions=ACTIONS):
        self.current_location = current_location
        self.cart = None
        self.shopping_list = None
        self.has_receipt = False
        self.actions = tuple(actions)
        self.terminated = False
        self.exit_code = None

    def has_cart(self):
        return self.cart is not None

    def has_list(self):
        return self.shopping_list is not None
