class Listener:
    def parse(self, user_input):
        """
        Maps a raw line to {"action", "target"}.
        "go to produce aisle" and "go produce aisle" both become action "go to".
        Nothing is validated here; unknown actions are the Director's problem.
        """
        words = (user_input or "").strip().lower().split()
        if not words:
            return {"action": "", "target": ""}

        action = words[0]
        rest = words[1:]
        if action == "go":
            action = "go to"
            if rest and rest[0] == "to":
                rest = rest[1:]

        return {"action": action, "target": " ".join(rest)}
