r"""
Benchmark configuration defaults and environment access.

Environment variables (also read from a .env file):
    MONGO_BENCH_URI: Connection URI (default: mongodb://localhost:27017)
    MONGO_BENCH_DATABASE: Database name (default: test)
    MONGO_BENCH_ITERATIONS: Iterations per query (default: 10)
    MONGO_BENCH_CONNECT_TIMEOUT: Connect and ping deadline in seconds (default: 10)
    MONGO_BENCH_DISCONNECT_TIMEOUT: Disconnect deadline in seconds (default: 10)

    from mongo_bench.config import get_env, DEFAULT_URI

    uri = get_env("URI", default=DEFAULT_URI)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Look for .env in current dir or the project root
env_file = Path(".env")
if not env_file.exists():
    env_file = Path(__file__).parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file)

__all__ = [
    "DEFAULT_ADAPTER",
    "DEFAULT_DATABASE",
    "DEFAULT_ITERATIONS",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_URI",
    "ENV_PREFIX",
    "get_env",
    "get_env_float",
    "get_env_int",
]

ENV_PREFIX = "MONGO_BENCH_"

DEFAULT_ADAPTER = "mongodb"
DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "test"
DEFAULT_ITERATIONS = 10
DEFAULT_TIMEOUT_SECONDS = 10.0


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with MONGO_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "URI").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def get_env_int(key: str, *, default: int) -> int:
    """Get prefixed environment variable as an integer.

    Raises:
        ValueError: If the variable is set but not an integer.
    """
    value = get_env(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        msg = f"{ENV_PREFIX}{key} must be an integer, got '{value}'"
        raise ValueError(msg) from None


def get_env_float(key: str, *, default: float) -> float:
    """Get prefixed environment variable as a float.

    Raises:
        ValueError: If the variable is set but not a number.
    """
    value = get_env(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        msg = f"{ENV_PREFIX}{key} must be a number, got '{value}'"
        raise ValueError(msg) from None
