"""Loading of the ``.env`` file read by ``python -m prose_pod_api``."""

from pathlib import Path

from dotenv import load_dotenv


def load_environment(env_file: str | Path | None = None) -> bool:
    """Load variables from a .env file into ``os.environ``.

    Variables already set in the environment win over the file, so a
    deployment can override any ``PROSE_POD_*`` value.

    Returns:
        True if the file existed and was loaded
    """
    path = Path(env_file) if env_file is not None else Path.cwd() / ".env"
    if not path.exists():
        return False
    return load_dotenv(path, override=False)
