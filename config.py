import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent
load_dotenv(BASE_DIR / ".env")
PROMPTS_DIR = BASE_DIR / "prompts"

# Excalidraw is imported as an ES module inside the headless page
EXCALIDRAW_MODULE_URL = os.environ.get(
    "EXCALIDRAW_MODULE_URL", "https://esm.sh/@excalidraw/excalidraw@0.18.0"
)
EXCALIDRAW_HOST_URL = os.environ.get("EXCALIDRAW_HOST_URL", "https://esm.sh")

# Browser settings
RENDER_HEADLESS = os.environ.get("RENDER_HEADLESS", "1") not in ("0", "false", "no")

# Timeouts in seconds
RENDER_VISIBLE_TIMEOUT = float(os.environ.get("RENDER_VISIBLE_TIMEOUT", "10"))
RENDER_INIT_TIMEOUT = float(os.environ.get("RENDER_INIT_TIMEOUT", "60"))
FONT_SETTLE_MS = int(os.environ.get("FONT_SETTLE_MS", "1000"))

# Scene / output geometry
DEFAULT_SCALE = float(os.environ.get("DEFAULT_SCALE", "2"))
EXPORT_PADDING = float(os.environ.get("EXPORT_PADDING", "20"))
FORCED_FONT_FAMILY = int(os.environ.get("FORCED_FONT_FAMILY", "1"))  # Virgil
FALLBACK_WIDTH = int(os.environ.get("FALLBACK_WIDTH", "800"))
FALLBACK_HEIGHT = int(os.environ.get("FALLBACK_HEIGHT", "600"))
OUTPUT_PREFIX = os.environ.get("OUTPUT_PREFIX", "excalidraw")

# Server settings
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
SERVER_HOST = os.environ.get("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("SERVER_PORT", "8000"))
