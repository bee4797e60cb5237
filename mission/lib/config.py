import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

from mission.errors import ValidationError

from . import paths

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class StoreSettings:
    url: str | None = None
    deploy_key: str | None = None
    db_path: Path | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def backend(self) -> str:
        return "http" if self.url else "sqlite"


def clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml, returning its content or an empty dict if not found."""
    path = paths.config_file()
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"Config {path} must be a mapping")
    return data


def store_settings() -> StoreSettings:
    """Resolve store settings. Env vars win over config.yaml."""
    section = load_config().get("store") or {}
    if not isinstance(section, dict):
        raise ValidationError(f"Config section 'store' must be a mapping, got {section!r}")

    url = os.environ.get("MC_STORE_URL") or section.get("url")
    deploy_key = os.environ.get("MC_DEPLOY_KEY") or section.get("deploy_key")
    db = section.get("db")
    timeout = section.get("timeout", DEFAULT_TIMEOUT)

    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid store.timeout: {timeout!r}") from e

    return StoreSettings(
        url=url.rstrip("/") if url else None,
        deploy_key=deploy_key or None,
        db_path=Path(db).expanduser() if db else paths.default_db(),
        timeout=timeout,
    )
