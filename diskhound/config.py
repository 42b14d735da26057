from __future__ import annotations

import dataclasses as dc
import logging
import os
import pathlib
import typing as t

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

from .errors import ConfigurationError
from .size_utils import parse_size_to_bytes
from .walker import ErrorPolicy


logger = logging.getLogger(__name__)

PathLikeStr = str | os.PathLike[str]
ConfigDict = dict[str, t.Any]

CONFIG_ENV = "DISKHOUND_CONFIG"

DEFAULT_TOP = 10
DEFAULT_DEPTH = 1
DEFAULT_WORKERS = 1


def platform_config_default() -> pathlib.Path:
    """
    Determine the default config path by OS:
      - Windows: %APPDATA%/diskhound/config.toml
      - Others:  ~/.config/diskhound/config.toml
    """
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return pathlib.Path(appdata) / "diskhound" / "config.toml"
    return pathlib.Path.home() / ".config" / "diskhound" / "config.toml"


@dc.dataclass(frozen=True)
class ScanConfig:
    root: pathlib.Path
    exclude: frozenset[str] = frozenset()
    depth: int = DEFAULT_DEPTH
    min_size: int | None = None   # bytes; None disables the filter
    top: int = DEFAULT_TOP
    workers: int = DEFAULT_WORKERS
    error_policy: ErrorPolicy = ErrorPolicy.SILENT

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ConfigurationError(f"depth must be at least 1, got {self.depth}")
        if self.top < 0:
            raise ConfigurationError(f"top must not be negative, got {self.top}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")
        if self.min_size is not None and self.min_size < 0:
            raise ConfigurationError(f"min-size must not be negative, got {self.min_size}")
        # Accept any iterable of names from callers, store it frozen.
        if not isinstance(self.exclude, frozenset):
            object.__setattr__(self, "exclude", frozenset(self.exclude))


@dc.dataclass
class FileDefaults:
    """Scan defaults read from the [scan] table of the config file."""

    top: int | None = None
    depth: int | None = None
    exclude: list[str] = dc.field(default_factory=list)
    min_size: str | None = None
    workers: int | None = None
    log_skipped: bool | None = None
    source: pathlib.Path | None = None


def resolve_config_path(path: PathLikeStr | None) -> tuple[pathlib.Path, bool]:
    """
    Resolve the config file location using the standard precedence order
    (explicit path -> DISKHOUND_CONFIG env -> platform default).

    Returns (path, explicit) where explicit is True when the user named the file.
    """
    if path:
        return pathlib.Path(path).expanduser(), True
    env = os.environ.get(CONFIG_ENV)
    if env:
        return pathlib.Path(env).expanduser(), False
    return platform_config_default(), False


def load_defaults(path: PathLikeStr | None = None) -> FileDefaults:
    """
    Load scan defaults from TOML. A missing file is only an error when it was
    named explicitly; otherwise built-in defaults apply.
    """
    candidate, explicit = resolve_config_path(path)
    if not candidate.is_file():
        if explicit:
            raise ConfigurationError(f"config file not found: {candidate}")
        logger.debug("no config file at %s; using built-in defaults", candidate)
        return FileDefaults()

    try:
        with candidate.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"invalid config file {candidate}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {candidate}: {e.strerror or e}") from e

    defaults = _parse_config_dict(data, candidate)
    logger.debug("loaded config defaults from %s: %s", candidate, defaults)
    return defaults


def _expect(table: ConfigDict, key: str, kind: type | tuple[type, ...], where: pathlib.Path) -> t.Any:
    value = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; never accept it where a count is expected.
    if isinstance(value, bool) and kind is not bool:
        raise ConfigurationError(f"{where}: 'scan.{key}' has the wrong type")
    if not isinstance(value, kind):
        raise ConfigurationError(f"{where}: 'scan.{key}' has the wrong type")
    return value


def _parse_config_dict(d: ConfigDict, where: pathlib.Path) -> FileDefaults:
    scan = d.get("scan", {})
    if not isinstance(scan, dict):
        raise ConfigurationError(f"{where}: [scan] must be a table")

    exclude = scan.get("exclude", [])
    if not isinstance(exclude, list) or not all(isinstance(x, str) for x in exclude):
        raise ConfigurationError(f"{where}: 'scan.exclude' must be a list of names")

    min_size = _expect(scan, "min_size", (str, int), where)
    return FileDefaults(
        top=_expect(scan, "top", int, where),
        depth=_expect(scan, "depth", int, where),
        exclude=list(exclude),
        min_size=str(min_size) if min_size is not None else None,
        workers=_expect(scan, "workers", int, where),
        log_skipped=_expect(scan, "log_skipped", bool, where),
        source=where,
    )


def build_scan_config(
    path: PathLikeStr,
    *,
    top: int | None = None,
    depth: int | None = None,
    exclude: t.Iterable[str] | None = None,
    min_size: str | None = None,
    workers: int | None = None,
    log_skipped: bool = False,
    defaults: FileDefaults | None = None,
) -> ScanConfig:
    """
    Merge command-line values over config-file defaults over built-in defaults.
    Exclusions are the union of both sources. Size strings are parsed here so
    a malformed --min-size fails before any traversal starts.
    """
    defaults = defaults or FileDefaults()

    def pick(cli_value, file_value, builtin):
        if cli_value is not None:
            return cli_value
        if file_value is not None:
            return file_value
        return builtin

    raw_min = pick(min_size, defaults.min_size, None)
    policy = ErrorPolicy.LOG if (log_skipped or defaults.log_skipped) else ErrorPolicy.SILENT

    return ScanConfig(
        root=pathlib.Path(path).expanduser(),
        exclude=frozenset(defaults.exclude) | frozenset(exclude or ()),
        depth=pick(depth, defaults.depth, DEFAULT_DEPTH),
        min_size=parse_size_to_bytes(raw_min),
        top=pick(top, defaults.top, DEFAULT_TOP),
        workers=pick(workers, defaults.workers, DEFAULT_WORKERS),
        error_policy=policy,
    )
