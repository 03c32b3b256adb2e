from __future__ import annotations

from .load import load_config
from .schema import AppConfig, BackendConfig, EnvOverrides

__all__ = ["AppConfig", "BackendConfig", "EnvOverrides", "load_config"]
