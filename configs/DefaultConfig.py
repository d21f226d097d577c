import os
from dotenv import load_dotenv

# Load variables from .env file if it exists
load_dotenv()

# --- Value Retrieval Logic ---
def get_config_value(key_name: str, default: str = None) -> str | None:
    """Checks environment variables first, then falls back to the given default."""
    val = os.getenv(key_name)
    if val:
        return val
    return default

def get_config_bool(key_name: str, default: bool) -> bool:
    val = get_config_value(key_name)
    if val is None:
        return default
    flag = val.strip().lower()
    if flag in ("1", "true", "yes", "on"):
        return True
    if flag in ("0", "false", "no", "off"):
        return False
    print(f"WARNING: {key_name}={val!r} is not a boolean. Using default {default}.")
    return default

def get_config_float(key_name: str, default: float) -> float:
    val = get_config_value(key_name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        print(f"WARNING: {key_name}={val!r} is not a number. Using default {default}.")
        return default

# --- Core Bot Credentials ---
DISCORD_SDK = get_config_value("DISCORD_SDK")

# --- Menu Defaults ---
MENU_TIMEOUT = get_config_float("MENU_TIMEOUT", 300.0)  # seconds
MENU_DELETE_ON_TIMEOUT = get_config_bool("MENU_DELETE_ON_TIMEOUT", True)
MENU_MENTION = get_config_bool("MENU_MENTION", False)
MENU_KEEP_USER_REACTION_ON_STOP = get_config_bool("MENU_KEEP_USER_REACTION_ON_STOP", True)
MENU_LOADING_MESSAGE = get_config_value("MENU_LOADING_MESSAGE", "Loading, please be patient...")
