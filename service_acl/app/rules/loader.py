"""
Load ACL configuration files.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from shared.logging import get_logger
from shared.errors import ConfigurationError
from .models import AclConfig

logger = get_logger("acl.config_loader")


def _read(path: Path) -> Any:
    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(handle)
        if suffix == ".json":
            return json.load(handle)
    raise ConfigurationError(
        "Unsupported ACL config format",
        {"path": str(path), "suffix": suffix}
    )


def parse_acl_config(data: Union[Dict[str, Any], None]) -> AclConfig:
    """Validate raw config data; an empty document is an empty config."""
    if data is None:
        return AclConfig()
    if not isinstance(data, dict):
        raise ConfigurationError("ACL config must be a mapping", {"type": type(data).__name__})
    return AclConfig.coerce(data)


def load_acl_config(path: Union[str, Path]) -> AclConfig:
    """Read a ``.yaml``/``.yml`` or ``.json`` ACL config file."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError("ACL config file not found", {"path": str(path)})

    try:
        data = _read(path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError("ACL config file is not parseable", {"path": str(path), "error": str(e)}) from e

    config = parse_acl_config(data)
    logger.info(
        "ACL config loaded",
        path=str(path),
        rules=len(config.rules),
        endpoints=len(config.endpoints)
    )
    return config
