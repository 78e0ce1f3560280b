"""Git change summaries for humans, APIs, Jira and LLMs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("pushbrief")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
