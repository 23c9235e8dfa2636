from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml  # type: ignore


ENV_PREFIX = "TUNCONF_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass()
class Settings:
    """Settings of the command-line tool itself, not of any tunnel."""

    log_level: str = "WARNING"
    log_json: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "Settings":
        r = EnvReader(env)
        return cls(
            log_level=(r.get("LOG_LEVEL", "WARNING") or "WARNING").upper(),
            log_json=r.get_bool("LOG_JSON", False),
            log_file=r.get("LOG_FILE") or None,
        )

    @classmethod
    def read_file(cls, path: str, base: Optional["Settings"] = None) -> "Settings":
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return parse_settings(load_yaml(text), base)

    def apply_args_overrides(self, args: object) -> None:
        if getattr(args, "log_level", None) is not None:
            self.log_level = str(getattr(args, "log_level")).upper()
        if getattr(args, "log_json", None) is not None:
            self.log_json = bool(getattr(args, "log_json"))
        if getattr(args, "log_file", None) is not None:
            v = getattr(args, "log_file")
            self.log_file = v if v else None

    def validate(self) -> List[str]:
        errs: List[str] = []
        if self.log_level not in LOG_LEVELS:
            errs.append(f"log_level invalid: {self.log_level} (expected one of {', '.join(LOG_LEVELS)})")
        return errs

    def validate_or_raise(self) -> None:
        errs = self.validate()
        if errs:
            raise ValueError("Settings validation failed:\n- " + "\n- ".join(errs))


class EnvReader:
    def __init__(self, env: Mapping[str, str], prefix: str = ENV_PREFIX) -> None:
        self._env = env
        self._prefix = prefix

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._env.get(self._prefix + key, default)

    def get_bool(self, key: str, default: bool) -> bool:
        val = self._env.get(self._prefix + key)
        if val is None:
            return default
        return _to_bool(val, default)


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    val_lower = str(value).strip().lower()
    if val_lower in {"1", "true", "yes", "y", "on"}:
        return True
    if val_lower in {"0", "false", "no", "n", "off"}:
        return False
    return default


def load_yaml(text: str) -> Dict[str, Any]:
    obj = yaml.safe_load(text)
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError("Invalid YAML root: expected mapping")
    return obj


def parse_settings(data: Dict[str, Any], base: Optional[Settings] = None) -> Settings:
    """Layer a settings mapping (``log-level``, ``log-json``, ``log-file``) over ``base``."""
    s = base if base is not None else Settings()
    if data.get("log-level") is not None:
        s.log_level = str(data["log-level"]).upper()
    if data.get("log-json") is not None:
        s.log_json = _to_bool(data["log-json"], s.log_json)
    if "log-file" in data:
        s.log_file = str(data["log-file"]) if data["log-file"] else None
    return s
