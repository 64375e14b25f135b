import os
import logging

# Socket.IO endpoint of the shared board server
SERVER_URL = os.environ.get(
    "MAGIC_TOGETHER_SERVER", "https://magic-together-sockets.dootlord.meme"
)
SOCKET_TRANSPORTS = ["websocket"]
USER_AGENT = "MagicTogetherClient/1.0"

# Transient notice shown for server errors
NOTICE_DURATION_MS = int(os.environ.get("MAGIC_TOGETHER_NOTICE_MS", "5000"))

# Window
WINDOW_WIDTH = int(os.environ.get("MAGIC_TOGETHER_WIDTH", "1200"))
WINDOW_HEIGHT = int(os.environ.get("MAGIC_TOGETHER_HEIGHT", "800"))
FPS = 60
DOUBLE_CLICK_MS = 400

LOG_LEVEL = os.environ.get("MAGIC_TOGETHER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level=None):
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
