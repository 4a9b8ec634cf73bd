"""StuddyBuddy command line interface."""

from studdybuddy import __version__

__all__ = ["__version__"]
