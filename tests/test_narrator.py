import unittest
import sys
import os

# Ensure the project root is on the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grocery.narrator import Narrator, format_contents


def error(reason, **details):
    return {"event_type": "error", "status": "FAILURE", "reason": reason, "details": details}


class TestNarrator(unittest.TestCase):
    def setUp(self):
        self.narrator = Narrator()

    def test_needs_cart(self):
        self.assertEqual(
            self.narrator.narrate(error("needs_cart", target="tomatoes")),
            "Nope. Gotta go get a cart first.",
        )

    def test_location_change(self):
        event = {"event_type": "location_change", "status": "SUCCESS",
                 "data": {"left": "main entrance", "entered": "produce aisle"}}
        self.assertEqual(
            self.narrator.narrate(event),
            "Good guess! You left main entrance and are now in produce aisle.",
        )

    def test_invalid_move_uses_both_names(self):
        text = self.narrator.narrate(error("invalid_move", **{"from": "main entrance", "to": "checkout"}))
        self.assertEqual(text, "Can't go from main entrance to checkout. Clues, shopper, clues.")

    def test_contents(self):
        event = {"event_type": "list_contents", "status": "INFO",
                 "data": {"item": "shopping list", "contents": ["tomatoes", "plums"]}}
        self.assertEqual(self.narrator.narrate(event), "Here's what you need to get: tomatoes, plums")
        self.assertEqual(format_contents([]), "nothing yet")

    def test_intent(self):
        event = {"event_type": "intent", "status": "INFO", "action": "go to", "target": "produce aisle"}
        self.assertEqual(self.narrator.narrate(event), "Ah, so you want to go to produce aisle.")
        event = {"event_type": "intent", "status": "INFO", "action": "look", "target": ""}
        self.assertEqual(self.narrator.narrate(event), "Ah, so you want to look.")

    def test_help_text_is_escaped(self):
        text = self.narrator.narrate(error("unknown_action", action="dance", target=""))
        self.assertIn("\\[place]", text)

    def test_player_text_is_escaped(self):
        text = self.narrator.narrate(error("unknown_location", target="[bold]moon"))
        self.assertIn("\\[bold]moon", text)

    def test_farewells(self):
        quit_text = self.narrator.narrate({"event_type": "session_end", "status": "FAILURE", "outcome": "QUIT", "exit_code": 0})
        self.assertTrue(quit_text.startswith("So you're just gonna quit?"))
        win_text = self.narrator.narrate({"event_type": "session_end", "status": "SUCCESS", "outcome": "CHECKOUT", "exit_code": 0})
        self.assertEqual(win_text, "Thank you for all you do! Bye for now <3")

    def test_location_description(self):
        text = self.narrator.describe_location({
            "name": "produce aisle",
            "description": "Vegetables.",
            "items": ["tomatoes"],
            "exits": ["main entrance"],
        })
        self.assertIn("[bold]Produce Aisle[/bold]", text)
        self.assertIn("tomatoes", text)
        self.assertIn("main entrance", text)

    def test_unknown_reason_falls_back(self):
        text = self.narrator.narrate(error("gremlins"))
        self.assertIn("gremlins", text)

    def test_style(self):
        self.assertEqual(self.narrator.style_for(error("needs_cart")), "warning")
        self.assertEqual(self.narrator.style_for({"status": "SUCCESS"}), "success")
        self.assertEqual(self.narrator.style_for({"event_type": "intent", "status": "INFO"}), "dim")


if __name__ == '__main__':
    unittest.main()
