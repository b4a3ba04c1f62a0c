from rich.markup import escape

HELP_TEXT = (
    "Dear Shopper. You're limited to a few commands.\n"
    "You can go to [place], take [item], examine [item], drop [item], pay, leave... Plz, try again."
)

MESSAGES = {
    "intent": "Ah, so you want to {action} {target}.",
    "location_change": "Good guess! You left {left} and are now in {entered}.",
    "cart_contents": "Here's what you got in your cart: {contents}",
    "list_contents": "Here's what you need to get: {contents}",
    "list_acquired": "Awesome! Here's what you need to get: {contents}",
    "inventory": "Here's what you got so far: {contents}",
    "cart_acquired": "You got yourself a {item} -- now let's get shopping!",
    "item_description": "{description}",
    "produce_flavor": "That vegetable looks fine. Or is it a fruit? Who cares.",
    "produce_added": "Good call! {target} now in your cart.",
    "payment_accepted": (
        "Thanks for the cashless exchange! You're all set.\n"
        "You can leave now. You remember where you came from, don't you?"
    ),
}

FAREWELLS = {
    "QUIT": "So you're just gonna quit? Just like that? Too bad. Better luck next time.",
    "CHECKOUT": "Thank you for all you do! Bye for now <3",
}

ERRORS = {
    "unknown_action": HELP_TEXT,
    "unknown_location": "Hmmm, don't know {target}. Look around! Clues, shopper, clues.",
    "invalid_move": "Can't go from {from} to {to}. Clues, shopper, clues.",
    "cart_not_held": "Hey, you'll need to get a {target} first.",
    "list_not_held": "Hey, you'll need a {target} first.",
    "not_here": "Where are you seeing this {target}? Not here! Clues, shopper, clues!",
    "nothing_there": "Hmmm...not much there really. Keep it moving.",
    "not_available": "Sorry shopper, {target} isn't available here.",
    "not_takeable": "{description}",
    "no_handler": "You could carry the {target} around, but it won't help you shop. Leave it be.",
    "needs_cart": "Nope. Gotta go get a cart first.",
    "needs_list": "You don't have a shopping list yet. How would you know what to pay for?",
    "produce_not_here": "Not sure we have {target} here. Don't be discouraged though. It's a big store!",
    "not_found": "Hmmm, look closer. Where do you see {target} in this {location}?",
    "drop_unsupported": "Shopper, you're playing the basic version. I'm afraid you're stuck with {target}.",
    "missing_item": "Not so fast, shopper. Your list says {item} and it isn't in your cart.",
    "session_over": "You already left the store. Start a new trip to keep shopping.",
}


class _Fields(dict):
    def __missing__(self, key):
        return ""


def format_contents(contents):
    if not contents:
        return "nothing yet"
    return ", ".join(str(entry) for entry in contents)


class Narrator:
    """
    Turns the Director's events into console text (rich markup).
    Every value that came from the player or the seed data is escaped.
    """

    def narrate(self, event):
        event_type = event.get('event_type')

        if event_type == "error":
            template = ERRORS.get(event.get('reason'))
            if template is None:
                return escape(f"[SYSTEM ERROR] {event.get('reason')}: {event.get('details')}")
            return self._fill(template, event.get('details', {}))

        if event_type == "location_description":
            return self.describe_location(event['data'])

        if event_type == "session_end":
            return escape(FAREWELLS[event['outcome']])

        if event_type == "intent":
            return self._fill(MESSAGES["intent"], event).rstrip(" .") + "."

        template = MESSAGES.get(event_type)
        if template is None:
            return escape(f"[SYSTEM ERROR] unknown event {event_type}")
        return self._fill(template, event.get('data', {}))

    def describe_location(self, data):
        lines = [f"[bold]{escape(data['name'].title())}[/bold]", escape(data['description'])]
        if data.get('items'):
            lines.append(f"[dim]You notice:[/dim] {escape(format_contents(data['items']))}")
        if data.get('exits'):
            lines.append(f"[dim]From here you can go to:[/dim] {escape(format_contents(data['exits']))}")
        return "\n".join(lines)

    def style_for(self, event):
        """Console style for an event, following the outcome colors of the theme."""
        status = event.get('status')
        if status == "SUCCESS":
            return "success"
        if status == "FAILURE":
            return "warning"
        if event.get('event_type') == "intent":
            return "dim"
        return "text"

    def _fill(self, template, values):
        fields = _Fields()
        for key, value in values.items():
            if key == "contents":
                value = format_contents(value)
            fields[key] = value
        return escape(template.format_map(fields))
