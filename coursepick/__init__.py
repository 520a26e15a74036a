"""Interactive course selection client: login, course files and add-to-cart requests."""

__version__ = "0.6.0"
__all__ = ["__version__"]