"""softkeys — on-screen keyboard for touch-only devices."""

from softkeys.__version__ import __version__

__all__ = ["__version__"]
