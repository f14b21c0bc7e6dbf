"""
Global configuration settings for the OD&H player app.
"""
import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Paths
APP_DIR = pathlib.Path(__file__).parent.absolute()
MEDIA_DIR = pathlib.Path(os.environ.get("ODH_MEDIA_DIR", pathlib.Path.home() / "Music" / "odh"))
CATALOG_PATH = os.environ.get("ODH_CATALOG_PATH")  # None -> bundled catalog.json

# Playback defaults
DEFAULT_VOLUME = int(os.environ.get("ODH_DEFAULT_VOLUME", "75"))  # percent

# Timing (milliseconds)
TRANSITION_DELAY_MS = 200   # fade-out window before the audio resource is swapped
POPOVER_ARM_DELAY_MS = 100  # outside presses ignored right after the volume popover opens

# UI configuration
WINDOW_TITLE = "OD&H Player"
