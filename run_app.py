"""Desktop launcher for the local library catalog.

Applies pending migrations, starts the Django development server, shows
a tray icon with a Quit entry and opens the catalog in the browser once
the server accepts connections. ``LOCALLIBRARY_HOST`` and
``LOCALLIBRARY_PORT`` choose the address (default ``127.0.0.1:8000``).
"""
import io
import logging
import os
import socket
import sys
import threading
import time
import webbrowser

from django.core.management import execute_from_command_line
from PIL import Image, ImageDraw
from pystray import Icon, Menu, MenuItem

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "locallibrary.settings")

HOST = os.environ.get("LOCALLIBRARY_HOST", "127.0.0.1")
PORT = int(os.environ.get("LOCALLIBRARY_PORT", "8000"))

logger = logging.getLogger("catalog.launcher")


def get_icon_path():
    """Get the path to the icon file, works both in dev and when frozen."""
    base_path = getattr(sys, "_MEIPASS", os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_path, "favicon.png")


def load_icon_image():
    """Return the tray icon image, drawing a plain book glyph if the file is missing."""
    icon_path = get_icon_path()
    if os.path.exists(icon_path):
        return Image.open(icon_path)

    logger.warning("Icon file not found at %s, using a generated icon", icon_path)
    image = Image.new("RGB", (64, 64), color="navy")
    draw = ImageDraw.Draw(image)
    draw.rectangle((16, 12, 48, 52), fill="white")
    draw.line((32, 12, 32, 52), fill="navy", width=2)
    return image


def create_tray_icon():
    def on_quit(icon, item):
        icon.stop()
        os._exit(0)

    menu = Menu(
        MenuItem("Open catalog", lambda icon, item: webbrowser.open_new(catalog_url())),
        MenuItem("Quit", on_quit),
    )
    icon = Icon("LocalLibrary", load_icon_image(), "Local Library Server", menu)
    icon.run()


def catalog_url():
    return f"http://{HOST}:{PORT}/catalog/"


def wait_for_server(host=HOST, port=PORT, timeout=20):
    """Wait until the Django dev server is accepting connections."""
    start = time.time()
    while time.time() - start < timeout:
        try:
            with socket.create_connection((host, port), timeout=1):
                return True
        except OSError:
            time.sleep(0.2)
    return False


def open_browser_when_ready():
    if wait_for_server():
        webbrowser.open_new(catalog_url())
    else:
        logger.error("Server did not start listening on %s:%s", HOST, PORT)


def run_server():
    if sys.stdout is None:
        sys.stdout = io.StringIO()
    if sys.stderr is None:
        sys.stderr = io.StringIO()

    execute_from_command_line(["manage.py", "migrate", "--noinput"])

    threading.Thread(target=open_browser_when_ready, daemon=True).start()
    threading.Thread(target=create_tray_icon, daemon=False).start()

    execute_from_command_line(["manage.py", "runserver", f"{HOST}:{PORT}", "--noreload"])


if __name__ == "__main__":
    run_server()
