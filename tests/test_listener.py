import unittest
import sys
import os

# Ensure the project root is on the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grocery.listener import Listener


class TestListener(unittest.TestCase):
    def setUp(self):
        self.listener = Listener()

    def test_action_and_target(self):
        self.assertEqual(self.listener.parse("take tomatoes"), {"action": "take", "target": "tomatoes"})

    def test_case_and_whitespace(self):
        self.assertEqual(
            self.listener.parse("  EXAMINE   Shopping    List  "),
            {"action": "examine", "target": "shopping list"},
        )

    def test_go_to(self):
        self.assertEqual(
            self.listener.parse("go to produce aisle"),
            {"action": "go to", "target": "produce aisle"},
        )

    def test_bare_go(self):
        self.assertEqual(
            self.listener.parse("go produce aisle"),
            {"action": "go to", "target": "produce aisle"},
        )
        self.assertEqual(self.listener.parse("go"), {"action": "go to", "target": ""})

    def test_single_word(self):
        self.assertEqual(self.listener.parse("look"), {"action": "look", "target": ""})

    def test_unknown_action_is_passed_through(self):
        self.assertEqual(self.listener.parse("dance wildly"), {"action": "dance", "target": "wildly"})

    def test_empty_input(self):
        self.assertEqual(self.listener.parse(""), {"action": "", "target": ""})
        self.assertEqual(self.listener.parse("   "), {"action": "", "target": ""})
        self.assertEqual(self.listener.parse(None), {"action": "", "target": ""})


if __name__ == '__main__':
    unittest.main()
