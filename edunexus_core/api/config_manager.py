"""
Storage Configuration Manager
Loads backend address and local store settings from defaults, a TOML file
and the environment, in that order of precedence (last wins).
"""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

from edunexus_core.errors import ConfigurationError
from edunexus_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_DB_PATH = Path("local_data") / "edunexus.db"
DEFAULT_NAMESPACE = "edunexus"
DEFAULT_CONFIG_PATH = Path(".edunexus") / "config.toml"

ENV_API_URL = "EDUNEXUS_API_URL"
ENV_DB_PATH = "EDUNEXUS_DB_PATH"
ENV_NAMESPACE = "EDUNEXUS_NAMESPACE"


@dataclass(frozen=True)
class StorageConfig:
    """Settings for the hybrid persistence layer"""
    api_url: str = DEFAULT_API_URL
    db_path: Union[str, Path] = DEFAULT_DB_PATH
    namespace: str = DEFAULT_NAMESPACE
    headers: Dict[str, str] = field(default_factory=dict)

    def storage_key(self, collection: str) -> str:
        """Namespaced local store key, e.g. ``edunexus_users``"""
        return f"{self.namespace}_{collection}"


def _load_toml(path: Path) -> Dict[str, Any]:
    """
    Read the ``[storage]`` table from a TOML file.

    Expected format:
        [storage]
        api_url = "http://localhost:5000/api"
        db_path = "local_data/edunexus.db"
        namespace = "edunexus"

        [storage.headers]
        X-Client = "edunexus"
    """
    try:
        data = toml.load(str(path))
    except toml.TomlDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}: {e}",
            source=str(path),
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}",
            source=str(path),
        ) from e

    section = data.get("storage", {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            "[storage] must be a table",
            config_key="storage",
            source=str(path),
        )
    return section


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> StorageConfig:
    """
    Build a StorageConfig.

    Args:
        path: TOML file to read. When omitted, ``.edunexus/config.toml`` is
            used if it exists.
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Resolved StorageConfig
    """
    environ = os.environ if environ is None else environ
    config = StorageConfig()

    toml_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if path is not None or toml_path.exists():
        section = _load_toml(toml_path)
        headers = section.get("headers", {})
        config = replace(
            config,
            api_url=section.get("api_url", config.api_url),
            db_path=section.get("db_path", config.db_path),
            namespace=section.get("namespace", config.namespace),
            headers={str(k): str(v) for k, v in headers.items()},
        )
        logger.debug(f"Loaded storage config from {toml_path}")

    overrides = {}
    if environ.get(ENV_API_URL):
        overrides["api_url"] = environ[ENV_API_URL]
    if environ.get(ENV_DB_PATH):
        overrides["db_path"] = environ[ENV_DB_PATH]
    if environ.get(ENV_NAMESPACE):
        overrides["namespace"] = environ[ENV_NAMESPACE]
    if overrides:
        config = replace(config, **overrides)

    if not str(config.api_url).strip():
        raise ConfigurationError("api_url must not be empty", config_key="api_url")
    if not config.namespace:
        raise ConfigurationError("namespace must not be empty", config_key="namespace")

    return replace(config, api_url=str(config.api_url).rstrip("/"))
