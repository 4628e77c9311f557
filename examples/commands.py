"""Example commands: press Enter, type a command name, press Enter again."""

import webbrowser

from kiku import keys
from kiku.app import App
from kiku.events import Notification


def report(notification):
    if notification is Notification.FAILURE:
        print("Unknown command")


# Holding Ctrl or Alt while typing never lands in the buffer.
app = App(
    {"case_sensitive": False, "blacklisted_key_codes": keys.MODIFIER_CODES},
    sink=report,
)


@app.on("docs")
def docs():
    """Open the Python documentation in the default browser."""
    webbrowser.open("https://docs.python.org/3/")


@app.on("hello")
def hello():
    print("Hello!")


if __name__ == "__main__":
    app()
