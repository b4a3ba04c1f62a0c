import logging

from grocery.catalog import ItemRole, normalize_name
from grocery.errors import InvariantViolation, NotFoundError, PreconditionError

logger = logging.getLogger(__name__)

EXIT_QUIT = 0
EXIT_CHECKOUT = 0
EXIT_INTERNAL_ERROR = 70


class Director:
    def __init__(self, catalog, session, inventory_keyword="inventory", echo_intent=True):
        """
        The Director is the STATE MACHINE.
        It does not generate text. It checks the catalog, updates the session
        and reports what happened as a list of event dicts for the Narrator.
        """
        self.catalog = catalog
        self.session = session
        self.inventory_keyword = normalize_name(inventory_keyword)
        self.echo_intent = echo_intent

    # ==========================================================
    # 1. MASTER ROUTER
    # ==========================================================
    def execute(self, command):
        """
        Input: {"action": "take", "target": "tomatoes"}
        Returns: a LIST of events. Lookup and precondition failures come back
        as error events; InvariantViolation is not caught.
        """
        action = command.get('action', "")
        target = command.get('target', "")
        logger.debug("command action=%r target=%r at %r", action, target, self.session.current_location)

        if self.session.terminated:
            return [self._return_error("session_over")]

        if action not in self.session.actions:
            return [self._return_error("unknown_action", {"action": action, "target": target})]

        results = []
        if self.echo_intent:
            results.append({"event_type": "intent", "status": "INFO", "action": action, "target": target})

        try:
            if action == "look":
                results.extend(self.look_around())
            elif action == "go to":
                results.extend(self.go_to(target))
            elif action == "examine":
                results.extend(self.examine(target))
            elif action in ("take", "get"):
                results.extend(self.take(target))
            elif action == "drop":
                results.extend(self.drop(target))
            elif action == "pay":
                results.extend(self.pay())
            elif action == "leave":
                results.extend(self.leave())
        except NotFoundError as e:
            reason = "unknown_location" if e.kind == "location" else "not_found"
            results.append(self._return_error(reason, {"target": target}))
        except PreconditionError as e:
            results.append(self._return_error(e.reason, e.details))
        except InvariantViolation:
            logger.error("invariant violated while running %r %r", action, target, exc_info=True)
            raise

        return results

    # ==========================================================
    # 2. MOVEMENT
    # ==========================================================
    def look_around(self):
        location = self.catalog.locations.get(self.session.current_location)
        return [{
            "event_type": "location_description",
            "status": "INFO",
            "data": {
                "name": location.name,
                "description": location.description,
                "items": list(location.items),
                "exits": list(location.exits),
            }
        }]

    def go_to(self, target):
        locations = self.catalog.locations
        destination = locations.resolve_name(target)
        current = self.session.current_location

        if not locations.is_adjacent(current, destination):
            raise PreconditionError("invalid_move", {"from": current, "to": destination})

        self.session.current_location = destination
        logger.debug("moved %r -> %r", current, destination)
        return [{
            "event_type": "location_change",
            "status": "SUCCESS",
            "data": {"left": current, "entered": destination}
        }]

    # ==========================================================
    # 3. ITEMS
    # ==========================================================
    def examine(self, target):
        items = self.catalog.items

        if items.exists(target):
            item = items.get(target)
            if item.role is ItemRole.CART:
                if not self.session.has_cart():
                    raise PreconditionError("cart_not_held", {"target": target})
                return [self._return_contents("cart_contents", self.session.cart)]

            if item.role is ItemRole.SHOPPING_LIST:
                if not self.session.has_list():
                    raise PreconditionError("list_not_held", {"target": target})
                return [self._return_contents("list_contents", self.session.shopping_list)]

            if not self._is_here(item.name):
                raise PreconditionError("not_here", {"target": target})
            return [{
                "event_type": "item_description",
                "status": "INFO",
                "data": {"item": item.name, "description": item.description}
            }]

        if items.is_produce(target):
            return [{"event_type": "produce_flavor", "status": "INFO", "data": {"target": target}}]

        raise PreconditionError("nothing_there", {"target": target})

    def take(self, target):
        items = self.catalog.items

        if items.exists(target):
            item = items.get(target)

            # Once carried, the cart and list travel with the player
            if item.role is ItemRole.SHOPPING_LIST and self.session.has_list():
                return self.examine(target)
            if item.role is ItemRole.CART and self.session.has_cart():
                return self.examine(target)

            if not self._is_here(item.name):
                raise PreconditionError("not_available", {"target": target})
            if not item.takeable:
                raise PreconditionError("not_takeable", {"target": target, "description": item.description})

            if item.role is ItemRole.SHOPPING_LIST:
                self._pick_up(item)
                self.session.shopping_list = item
                return [self._return_contents("list_acquired", item, status="SUCCESS")]

            if item.role is ItemRole.CART:
                self._pick_up(item)
                self.session.cart = item
                return [{"event_type": "cart_acquired", "status": "SUCCESS", "data": {"item": item.name}}]

            raise PreconditionError("no_handler", {"target": item.name})

        if items.is_produce(target):
            produce = normalize_name(target)
            if not self.session.has_cart():
                raise PreconditionError("needs_cart", {"target": produce})
            if not self._is_here(produce):
                raise PreconditionError("produce_not_here", {"target": produce})
            self.session.cart.add(produce)
            logger.debug("cart now holds %r", self.session.cart.contents)
            return [{"event_type": "produce_added", "status": "SUCCESS", "data": {"target": produce}}]

        if normalize_name(target) == self.inventory_keyword:
            if not self.session.has_cart():
                raise PreconditionError("needs_cart", {"target": target})
            return [self._return_contents("inventory", self.session.cart)]

        raise PreconditionError("not_found", {"target": target, "location": self.session.current_location})

    def drop(self, target):
        raise PreconditionError("drop_unsupported", {"target": target})

    # ==========================================================
    # 4. CHECKOUT
    # ==========================================================
    def pay(self):
        if not self.session.has_list():
            raise PreconditionError("needs_list")
        if not self.session.has_cart():
            raise PreconditionError("needs_cart", {"target": "pay"})

        cart = self.session.cart
        for wanted in self.session.shopping_list.contents:
            if not cart.has(wanted):
                raise PreconditionError("missing_item", {"item": wanted})

        self.session.has_receipt = True
        logger.debug("receipt issued")
        return [{"event_type": "payment_accepted", "status": "SUCCESS", "data": {}}]

    def leave(self):
        if self.session.has_receipt:
            outcome, exit_code, status = "CHECKOUT", EXIT_CHECKOUT, "SUCCESS"
        else:
            outcome, exit_code, status = "QUIT", EXIT_QUIT, "FAILURE"

        self.session.terminated = True
        self.session.exit_code = exit_code
        return [{"event_type": "session_end", "status": status, "outcome": outcome, "exit_code": exit_code}]

    # ==========================================================
    # 5. INTERNAL HELPERS
    # ==========================================================
    def _is_here(self, name):
        return self.catalog.is_item_present_at(self.session.current_location, name, self.session)

    def _pick_up(self, item):
        """The item leaves the shelf it was on; from now on the player holds it."""
        location = self.catalog.locations.get(self.session.current_location)
        if item.name in location.items:
            location.items.remove(item.name)
        logger.debug("player picked up %r at %r", item.name, location.name)

    def _return_contents(self, event_type, item, status="INFO"):
        return {
            "event_type": event_type,
            "status": status,
            "data": {"item": item.name, "contents": list(item.contents)}
        }

    def _return_error(self, reason, details=None):
        return {
            "event_type": "error",
            "status": "FAILURE",
            "reason": reason,
            "details": details or {}
        }
