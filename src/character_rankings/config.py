from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from character_rankings.exceptions import RankingsException


class RankingConfigError(RankingsException):
    """Raised when configuration values are invalid."""


_DEFAULTS: dict[str, object] = {
    "data": {
        "characters_path": "data/characters.json",
        "rankings_path": "data/ranking_data.json",
        "validate": True,
    },
    "display": {
        "top_n": 10,
        "trend_count": 5,
        "changes_limit": 30,
        "analysis_top_n": 30,
    },
}


@dataclass(frozen=True)
class RankingSettings:
    characters_path: Path
    rankings_path: Path
    validate: bool
    top_n: int
    trend_count: int
    changes_limit: int
    analysis_top_n: int


def create_config(
    yaml_path: str = "rankings.yaml",
    env_prefix: str = "RANKINGS",
    defaults: dict[str, object] | None = None,
    *,
    characters_path: str | None = None,
    rankings_path: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``RANKINGS__DATA__VALIDATE``.
        defaults: Default configuration values.
        characters_path: Override the character catalog document path.
        rankings_path: Override the ranking document path.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]

    overrides = _build_overrides(characters_path, rankings_path)
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _build_overrides(characters_path: str | None, rankings_path: str | None) -> dict[str, object]:
    data: dict[str, object] = {}
    if characters_path is not None:
        data["characters_path"] = characters_path
    if rankings_path is not None:
        data["rankings_path"] = rankings_path
    return {"data": data} if data else {}


def _as_bool(key: str, raw: object) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise RankingConfigError(f"'{key}' must be a boolean, got {raw!r}")


def _as_positive_int(key: str, raw: object) -> int:
    try:
        value = int(str(raw))
    except ValueError:
        raise RankingConfigError(f"'{key}' must be an integer, got {raw!r}") from None
    if value <= 0:
        raise RankingConfigError(f"'{key}' must be > 0, got {value}")
    return value


def load_settings(cfg: ConfigurationSet | None = None) -> RankingSettings:
    if cfg is None:
        cfg = create_config()
    return RankingSettings(
        characters_path=Path(str(cfg["data.characters_path"])).expanduser(),
        rankings_path=Path(str(cfg["data.rankings_path"])).expanduser(),
        validate=_as_bool("data.validate", cfg["data.validate"]),
        top_n=_as_positive_int("display.top_n", cfg["display.top_n"]),
        trend_count=_as_positive_int("display.trend_count", cfg["display.trend_count"]),
        changes_limit=_as_positive_int("display.changes_limit", cfg["display.changes_limit"]),
        analysis_top_n=_as_positive_int("display.analysis_top_n", cfg["display.analysis_top_n"]),
    )
