"""Parsing module for maze configuration files.

A config file holds one KEY=VALUE pair per line. Blank lines and `#`
comments are ignored. WIDTH and HEIGHT are required; SEED, OUTPUT_FILE,
DEMO and LOG_LEVEL are optional.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple


REQUIRED_KEYS = ("WIDTH", "HEIGHT")
OPTIONAL_KEYS = ("SEED", "OUTPUT_FILE", "DEMO", "LOG_LEVEL")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Config:
    """Parsed configuration for maze generation."""

    width: int
    height: int
    seed: Optional[int] = None
    output_file: Optional[Path] = None
    demo: bool = False
    log_level: str = "WARNING"


class ConfigError(ValueError):
    """Configuration and validation error."""

    pass


def parse_bool(value: str, *, key: str) -> bool:
    """Parse a boolean from a config value."""

    v = value.strip().lower()
    if v in {"true", "1", "yes", "y", "on"}:
        return True
    if v in {"false", "0", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_int(value: str, *, key: str) -> int:
    """Parse an integer from a config value."""

    try:
        return int(value.strip())
    except ValueError as exc:
        msg = f"Invalid integer for {key}: {value!r}"
        raise ConfigError(msg) from exc


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid LOG_LEVEL: {value!r} "
            f"(expected one of {', '.join(LOG_LEVELS)})"
        )
    return level


def read_pairs(path: Path) -> Dict[str, Tuple[int, str]]:
    """Read raw KEY=VALUE pairs, keyed by upper-cased key.

    Values are paired with their line number for error messages.
    """

    raw: Dict[str, Tuple[int, str]] = {}
    try:
        with path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                stripped = line.split("#", 1)[0].strip()
                if not stripped:
                    continue
                if "=" not in stripped:
                    raise ConfigError(
                        f"Line {line_no}: Invalid syntax "
                        f"(expected KEY=VALUE)\n→ {line.rstrip()}"
                    )
                k, v = stripped.split("=", 1)
                key = k.strip().upper()
                if key not in REQUIRED_KEYS and key not in OPTIONAL_KEYS:
                    raise ConfigError(
                        f"Line {line_no}: Unknown configuration "
                        f"key '{k.strip()}'"
                    )
                if key in raw:
                    raise ConfigError(
                        f"Line {line_no}: Duplicate key '{key}' "
                        f"(first set on line {raw[key][0]})"
                    )
                raw[key] = (line_no, v.strip())
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read"
                          f" config file: {path}: {exc}") from exc
    return raw


def read_config(path: Path) -> Config:
    """Read and validate the configuration file.

    Maze sizes are not range-checked here; the maze constructors reject
    grids smaller than 3x3.
    """

    raw = read_pairs(path)

    missing = [key for key in REQUIRED_KEYS if key not in raw]
    if missing:
        raise ConfigError(
            f"Missing required config keys: {', '.join(missing)}"
        )

    values = {key: value for key, (_line, value) in raw.items()}
    width = parse_int(values["WIDTH"], key="WIDTH")
    height = parse_int(values["HEIGHT"], key="HEIGHT")

    seed: Optional[int] = None
    if "SEED" in values:
        seed = parse_int(values["SEED"], key="SEED")

    output_file: Optional[Path] = None
    if values.get("OUTPUT_FILE"):
        output_file = Path(values["OUTPUT_FILE"]).expanduser()

    demo = parse_bool(values.get("DEMO", "False"), key="DEMO")
    log_level = parse_log_level(values.get("LOG_LEVEL", "WARNING"))

    return Config(
        width=width,
        height=height,
        seed=seed,
        output_file=output_file,
        demo=demo,
        log_level=log_level,
    )
