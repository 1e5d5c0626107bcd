"""ClawAPI

An OpenAI-compatible chat gateway backed by replayed browser sessions.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("clawapi")
except PackageNotFoundError:
    __version__ = "1.0.0"
__author__ = "ClawAPI"
