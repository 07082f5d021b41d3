"""Reading ``.env`` files.

One ``KEY=VALUE`` per line; blank lines and ``#`` comments are skipped. Values
are taken literally, without ``${VAR}`` expansion.
"""

from pathlib import Path

import structlog
from dotenv import dotenv_values

from repo_tasks.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

DOTENV_FILENAME = ".env"


def read_dotenv(path: Path | str) -> dict[str, str]:
    """Parse a dotenv file into a dictionary.

    Args:
        path: Location of the file

    Returns:
        Mapping of variable names to values. Lines without ``=`` are dropped.

    Raises:
        ConfigurationError: If the file does not exist
    """
    dotenv_path = Path(path)
    if not dotenv_path.is_file():
        raise ConfigurationError(f"no .env file found: {dotenv_path}")

    values = dotenv_values(dotenv_path, interpolate=False)
    loaded = {key: value for key, value in values.items() if value is not None}
    log.debug("dotenv_loaded", path=str(dotenv_path), keys=sorted(loaded))
    return loaded
