import os
import sys
import json
import random
import logging
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.theme import Theme
from rich.logging import RichHandler
from rich.markup import escape

# Import Engine Components
from grocery.catalog import STORE_DATA_PATH, build_catalog
from grocery.director import Director, EXIT_INTERNAL_ERROR
from grocery.errors import ConfigurationError, InvariantViolation
from grocery.listener import Listener
from grocery.narrator import Narrator
from grocery.player import PlayerState

# --- CONFIGURATION ---
CAMPAIGN_BASE_PATH = STORE_DATA_PATH
DEFAULT_CONFIG_PATH = "config.yaml"
EXIT_LOAD_ERROR = 1
QUIT_WORDS = ("quit", "exit")

DEFAULT_CONFIG = {
    "campaign": "grocery_run",
    "shopping_list_length": 5,
    "inventory_keyword": "inventory",
    "echo_intent": True,
    "debug_mode": False,
    "seed": None,
}

DEFAULT_CONFIG_YAML = """
# GROCERY RUN CONFIGURATION
# -------------------------
# Which store to load (a folder under grocery/data/campaigns).
campaign: grocery_run

# How many produce names end up on the shopping list.
shopping_list_length: 5

# 'take inventory' lists what is in the cart.
inventory_keyword: inventory

# Repeat every recognized command back to the shopper.
echo_intent: true

# Dump Director events and turn on DEBUG logging.
debug_mode: false

# Fix the shopping list for a repeatable trip (GROCERY_SEED overrides this).
seed: null
"""

custom_theme = Theme({
    "info": "bold #b0d8e3",       # Pale Cyan
    "text": "default",            # Adaptive
    "dim": "dim",                 # Grey
    "warning": "bold #ffafaf",    # Soft red
    "success": "bold #a3be8c",    # Soft green
})

load_dotenv()
console = Console(theme=custom_theme)
logger = logging.getLogger("grocery")


def configure_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def load_config(config_path=None):
    """
    Loads config.yaml or creates default if missing.
    Missing keys fall back to DEFAULT_CONFIG; GROCERY_SEED overrides 'seed'.
    """
    config_path = config_path or os.getenv("GROCERY_CONFIG", DEFAULT_CONFIG_PATH)
    if not os.path.exists(config_path):
        with open(config_path, "w") as f:
            f.write(DEFAULT_CONFIG_YAML.strip() + "\n")

    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"{config_path} must hold a mapping of settings")

    config = dict(DEFAULT_CONFIG)
    config.update({key: value for key, value in loaded.items() if key in DEFAULT_CONFIG})

    env_seed = os.getenv("GROCERY_SEED")
    if env_seed:
        config["seed"] = env_seed

    if config["seed"] is not None:
        try:
            config["seed"] = int(config["seed"])
        except (TypeError, ValueError):
            raise ConfigurationError(f"seed must be an integer, got {config['seed']!r}")

    length = config["shopping_list_length"]
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ConfigurationError(f"shopping_list_length must be a positive integer, got {length!r}")

    return config


def load_campaign(campaign_id, base_path=CAMPAIGN_BASE_PATH):
    """
    Loads and merges all YAML files for a given campaign ID.
    """
    campaign_path = os.path.join(base_path, campaign_id)

    campaign_db = {
        'manifest': {},
        'scenes': {},
        'assets': {}
    }

    # Load Manifest (Title, intro, start location)
    with open(os.path.join(campaign_path, "manifest.yaml"), "r") as f:
        campaign_db['manifest'] = yaml.safe_load(f) or {}

    # Load Scenes (store locations)
    with open(os.path.join(campaign_path, "scenes.yaml"), "r") as f:
        campaign_db['scenes'] = yaml.safe_load(f) or {}

    # Load Assets (items and produce inventory)
    with open(os.path.join(campaign_path, "assets.yaml"), "r") as f:
        campaign_db['assets'] = yaml.safe_load(f) or {}

    return campaign_db


def render_results(out, narrator, results):
    for event in results:
        text = narrator.narrate(event)
        event_type = event.get('event_type')
        if event_type == "location_description":
            out.print(Panel(text, border_style="info"))
        elif event_type == "session_end":
            out.print(Panel(text, title=event['outcome'], border_style=narrator.style_for(event)))
        else:
            out.print(text, style=narrator.style_for(event))


# ============================================
# GAME LOOP
# ============================================
def start_game(config, out=None, ask=None, campaign=None):
    """
    Runs one shopping trip and returns the exit code for the host.
    'ask' is called once per turn and returns the raw line; 'campaign'
    skips reading YAML from disk.
    """
    out = out or console
    if ask is None:
        ask = lambda: Prompt.ask("\n[info]What to do next? >_[/info]", console=out)

    # 1. LOAD STORE DATA
    try:
        if campaign is None:
            campaign = load_campaign(config['campaign'])
        catalog = build_catalog(campaign, config['shopping_list_length'], random.Random(config.get('seed')))
    except FileNotFoundError as e:
        out.print(Panel(f"[warning]ERROR: Store data not found.[/] Missing file: {escape(str(e))}", border_style="warning"))
        return EXIT_LOAD_ERROR
    except yaml.YAMLError as e:
        out.print(Panel(f"[warning]YAML STRUCTURE ERROR:[/]\nCheck the store files for indentation or syntax errors.\nDetails: {escape(str(e))}", border_style="warning"))
        return EXIT_LOAD_ERROR
    except ConfigurationError as e:
        out.print(Panel(f"[warning]STORE DATA ERROR:[/]\n{escape(str(e))}", border_style="warning"))
        return EXIT_LOAD_ERROR

    # 2. INITIALIZE SESSION STATE
    session = PlayerState(catalog.start_location)
    director = Director(
        catalog,
        session,
        inventory_keyword=config.get('inventory_keyword', "inventory"),
        echo_intent=config.get('echo_intent', True),
    )
    listener = Listener()
    narrator = Narrator()
    is_debug = config.get('debug_mode', False)

    out.print(Panel(f"[bold blue]{escape(catalog.title)}[/bold blue]", title="TRIP STARTED", border_style="info"))
    intro = catalog.manifest.get('intro')
    if intro:
        out.print(f"\n{escape(intro)}")
    out.print("[dim]Type 'quit' to give up and head home.[/dim]\n")

    # The shopper sees where they are before the first prompt
    render_results(out, narrator, director.look_around())

    # 3. THE LOOP
    while not session.terminated:
        try:
            user_input = ask()
        except (EOFError, KeyboardInterrupt):
            user_input = "leave"

        if user_input.strip().lower() in QUIT_WORDS:
            command = {"action": "leave", "target": ""}
        else:
            command = listener.parse(user_input)

        try:
            results = director.execute(command)
        except InvariantViolation as e:
            out.print(Panel(f"[warning]INTERNAL ERROR:[/]\nThe store's records contradict themselves.\nDetails: {escape(str(e))}", border_style="warning"))
            return EXIT_INTERNAL_ERROR

        if is_debug:
            out.print(Panel(f"[dim]Results (List):[/]\n{escape(json.dumps(results, indent=2))}", title="[DEBUG: Director Output]", border_style="dim"))

        render_results(out, narrator, results)

    return session.exit_code


# ============================================
# MAIN
# ============================================
def main():
    try:
        config = load_config()
    except (yaml.YAMLError, ConfigurationError) as e:
        console.print(Panel(f"[warning]CONFIG ERROR:[/]\n{escape(str(e))}", border_style="warning"))
        return EXIT_LOAD_ERROR

    configure_logging(config['debug_mode'])
    logger.debug("config: %s", config)
    return start_game(config)


if __name__ == "__main__":
    sys.exit(main())
