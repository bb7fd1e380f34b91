"""Backend package for the RailOptic simulation API.

This package provides the background simulation runner, the command
dispatch table, state payloads and the FastAPI web server consumed by the
operator console.
"""

__version__ = "1.0.0"
