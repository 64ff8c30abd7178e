# strapkit/config.py
from __future__ import annotations
import copy
import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)


DEFAULTS: Dict[str, Any] = {
    "assets": {
        "bootstrap_css": "https://cdn.jsdelivr.net/npm/bootstrap@3.4.1/dist/css/bootstrap.min.css",
        "bootstrap_theme_css": None,
        "bootstrap_js": "https://cdn.jsdelivr.net/npm/bootstrap@3.4.1/dist/js/bootstrap.min.js",
        "jquery_js": "https://code.jquery.com/jquery-1.12.4.min.js",
        "modal_js": None,
    },
    "form": {
        "id_prefix": "c",
        "title": "strapkit",
    },
    "logging": {
        "level": "WARNING",
    },
    "pager": {
        "items_per_page": 5,
        "label_previous": "&laquo;",
        "label_next": "&raquo;",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Singleton config loader that supports:
      - an embedded config module (default name: _strapkit_config, attribute: CONFIG)
      - a fallback YAML file (strapkit.yaml)

    Whatever is loaded is merged over `DEFAULTS`, so every documented key is
    always present.

    Usage:
        cfg = Config()
        url = cfg.get_nested("assets.bootstrap_css")
        cfg.reload()    # re-read embedded/file (useful in dev)

    Parameters:
      config_file: path to YAML config (relative or absolute).
      prefer_embedded: when True (default) try embedded module first, otherwise check file first.
      embedded_module_name: module name to import when looking for embedded config.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(
        self,
        config_file: str = "strapkit.yaml",
        prefer_embedded: bool = True,
        embedded_module_name: str = "_strapkit_config",
    ):
        # initialize only once
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self.config_file_arg = config_file
        self.prefer_embedded = bool(prefer_embedded)
        self.embedded_module_name = embedded_module_name

        self._config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._source: Optional[str] = None  # 'embedded' or 'file' or None

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)

        self.reload()

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next `Config()` starts from scratch."""
        cls._instance = None

    # ----- public API -----
    def reload(self, prefer_embedded: Optional[bool] = None) -> None:
        """
        Reload the configuration. If prefer_embedded is provided, it overrides the instance preference
        just for this reload.
        """
        prefer = self.prefer_embedded if prefer_embedded is None else bool(prefer_embedded)

        if prefer:
            loaded = self._try_load_embedded() or self._try_load_file()
        else:
            loaded = self._try_load_file() or self._try_load_embedded()

        if not loaded:
            self._source = None
            self._config = copy.deepcopy(DEFAULTS)
        logger.debug("Config loaded from %s", self._source or "defaults")

    def load_file(self, path: str) -> None:
        """Point the loader at an explicit YAML file and reload from it."""
        self._resolved_config_path = Path(path).resolve()
        if not self._try_load_file():
            raise FileNotFoundError(f"Config file not readable: {path}")

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration as a dict."""
        return copy.deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "assets.bootstrap_css").
        Returns default if any step is missing.
        """
        cur: Any = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    def set_nested(self, path: str, value: Any, sep: str = ".") -> None:
        """Override a single value in memory (tests and embedding applications)."""
        parts = path.split(sep)
        cur = self._config
        for part in parts[:-1]:
            cur = cur.setdefault(part, {})
        cur[parts[-1]] = value

    @property
    def is_embedded(self) -> bool:
        return self._source == "embedded"

    @property
    def source(self) -> Optional[str]:
        """Return 'embedded'|'file'|None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Try to resolve the YAML config path:
          1. config_file is absolute and exists
          2. config_file relative to cwd exists
          3. config_file relative to the project root (parent of this package) exists
        """
        candidate = Path(config_file)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        in_cwd = (Path.cwd() / config_file).resolve()
        if in_cwd.exists():
            return in_cwd

        project_root = Path(__file__).resolve().parent.parent
        in_root = (project_root / config_file).resolve()
        if in_root.exists():
            return in_root

        return None

    def _try_load_embedded(self) -> bool:
        try:
            module = importlib.import_module(self.embedded_module_name)
        except ModuleNotFoundError:
            return False
        cfg = getattr(module, "CONFIG", None)
        if not isinstance(cfg, dict):
            logger.warning("Embedded config module %s has no CONFIG dict", self.embedded_module_name)
            return False
        self._config = _deep_merge(DEFAULTS, cfg)
        self._source = "embedded"
        return True

    def _try_load_file(self) -> bool:
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Could not read config file %s: %s", self._resolved_config_path, exc)
            return False
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning("Config file %s does not hold a mapping; ignoring it", self._resolved_config_path)
            return False
        self._config = _deep_merge(DEFAULTS, data)
        self._source = "file"
        return True


def get_config(*args, **kwargs) -> Config:
    """
    Convenience factory that returns the singleton Config instance.
    Arguments forwarded to Config() only on the first call.
    """
    return Config(*args, **kwargs)
