import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

from canvaslog.detect import LAYOUTS, Dialect


load_dotenv()


ENV_PREFIX = "CANVAS_CHECK_"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}

CATEGORY_SOURCES = ("tag", "id_range", "total")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AnalyzerConfig:
    expected_main: int = 4
    expected_rookie: int = 50
    strict_pixel_count: bool = False
    expected_pixels_per_artist: Optional[int] = None
    category_source: str = "tag"
    first_artist_id: int = 0
    check_islands: bool = False
    check_shapes: bool = False
    dialect: Dialect = field(default_factory=Dialect)

    def validate(self) -> "AnalyzerConfig":
        if self.expected_main < 0 or self.expected_rookie < 0:
            raise ConfigError("expected artist counts must not be negative")

        if self.category_source not in CATEGORY_SOURCES:
            raise ConfigError(
                f"category_source must be one of {', '.join(CATEGORY_SOURCES)}, "
                f"got {self.category_source!r}"
            )

        if self.dialect.delimiter == "":
            raise ConfigError("delimiter must not be empty")

        if self.first_artist_id < 0:
            raise ConfigError("first_artist_id must not be negative")

        if self.expected_pixels_per_artist is not None and self.expected_pixels_per_artist < 0:
            raise ConfigError("expected_pixels_per_artist must not be negative")

        if self.strict_pixel_count and self.expected_pixels_per_artist is None:
            raise ConfigError(
                "strict_pixel_count requires expected_pixels_per_artist"
            )

        return self


# ---------- Env helpers ----------

def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _env_bool(env: Mapping[str, str], name: str) -> Optional[bool]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def load_config(env: Optional[Mapping[str, str]] = None, **overrides) -> AnalyzerConfig:
    """
    Build the analyzer configuration.

    Defaults come from CANVAS_CHECK_* environment variables (a .env file
    is loaded on import); keyword overrides that are not None win.
    """
    env = os.environ if env is None else env

    values = {
        "expected_main": _env_int(env, "EXPECTED_MAIN"),
        "expected_rookie": _env_int(env, "EXPECTED_ROOKIE"),
        "strict_pixel_count": _env_bool(env, "STRICT_PIXEL_COUNT"),
        "expected_pixels_per_artist": _env_int(env, "PIXELS_PER_ARTIST"),
        "category_source": env.get(ENV_PREFIX + "CATEGORY_SOURCE"),
        "first_artist_id": _env_int(env, "FIRST_ARTIST_ID"),
        "check_islands": _env_bool(env, "ISLANDS"),
        "check_shapes": _env_bool(env, "SHAPES"),
    }
    values["layout"] = env.get(ENV_PREFIX + "LAYOUT")
    values["delimiter"] = env.get(ENV_PREFIX + "DELIMITER")

    values.update({k: v for k, v in overrides.items() if v is not None})
    layout = values.pop("layout")
    delimiter = values.pop("delimiter")

    config = AnalyzerConfig(**{k: v for k, v in values.items() if v is not None})
    if layout is not None:
        if layout not in LAYOUTS:
            raise ConfigError(
                f"layout must be one of {', '.join(LAYOUTS)}, got {layout!r}"
            )
        config = replace(config, dialect=LAYOUTS[layout])
    if delimiter is not None:
        config = replace(config, dialect=replace(config.dialect, delimiter=_delimiter(delimiter)))

    return config.validate()


def _delimiter(value: str) -> Optional[str]:
    # "space"/"whitespace" mean split on any whitespace run
    if value.strip().lower() in ("space", "whitespace", "ws"):
        return None
    return value
