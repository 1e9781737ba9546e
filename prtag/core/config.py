"""prtag.toml: remote, label names and changelog wording.

Every field has a default, so a repository without the file releases with
the `release: major|minor|patch` labels and pushes tags to `origin`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ChangelogConfig",
    "Config",
    "ConfigError",
    "LabelsConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "prtag.toml"

DEFAULT_REMOTE = "origin"
DEFAULT_MAJOR_LABEL = "release: major"
DEFAULT_MINOR_LABEL = "release: minor"
DEFAULT_PATCH_LABEL = "release: patch"
DEFAULT_CHANGELOG_HEADING = "### 📦 Changes"
DEFAULT_CHANGELOG_EMPTY = "No merged PRs found."


@dataclass(frozen=True, slots=True)
class ConfigError:
    """prtag.toml could not be loaded."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Where tags are pushed and releases are created."""

    remote: str = DEFAULT_REMOTE
    # owner/name; None lets gh infer the repo from the checkout.
    repo: str | None = None


@dataclass(frozen=True, slots=True)
class LabelsConfig:
    """Pull-request label names recognized per bump category."""

    major: tuple[str, ...] = (DEFAULT_MAJOR_LABEL,)
    minor: tuple[str, ...] = (DEFAULT_MINOR_LABEL,)
    patch: tuple[str, ...] = (DEFAULT_PATCH_LABEL,)


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    heading: str = DEFAULT_CHANGELOG_HEADING
    empty: str = DEFAULT_CHANGELOG_EMPTY


@dataclass(frozen=True, slots=True)
class Config:
    """All prtag.toml sections."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: A label is listed under more than one category.
        """
        release: StrDict = get_table(data, "release") or {}
        labels: StrDict = get_table(data, "labels") or {}
        changelog: StrDict = get_table(data, "changelog") or {}

        labels_cfg = LabelsConfig(
            major=tuple(get_str_list(labels, "major") or [DEFAULT_MAJOR_LABEL]),
            minor=tuple(get_str_list(labels, "minor") or [DEFAULT_MINOR_LABEL]),
            patch=tuple(get_str_list(labels, "patch") or [DEFAULT_PATCH_LABEL]),
        )
        _check_labels_disjoint(labels_cfg)

        return cls(
            release=ReleaseConfig(
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
                repo=get_str(release, "repo"),
            ),
            labels=labels_cfg,
            changelog=ChangelogConfig(
                heading=get_str(changelog, "heading") or DEFAULT_CHANGELOG_HEADING,
                empty=get_str(changelog, "empty") or DEFAULT_CHANGELOG_EMPTY,
            ),
        )


def _check_labels_disjoint(labels: LabelsConfig) -> None:
    seen: dict[str, str] = {}
    for category, names in (
        ("major", labels.major),
        ("minor", labels.minor),
        ("patch", labels.patch),
    ):
        for name in names:
            other = seen.get(name)
            if other is not None and other != category:
                raise ValueError(f"label {name!r} is listed under both {other} and {category}")
            seen[name] = category


def _read_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        with path.open("rb") as f:
            parsed: object = tomllib.load(f)
    except FileNotFoundError:
        return Err(ConfigError(f"config file not found: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"cannot read {path}: {e.strerror or e}", path=path))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Invalid TOML in {path.name}: {e}", path=path))

    table = as_str_dict(parsed)
    if table is None:
        return Err(ConfigError(f"{path.name} must contain a TOML table", path=path))
    return Ok(table)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Read `path` and build a Config; a missing file is an error here."""
    raw = _read_toml(path)
    if isinstance(raw, Err):
        return raw

    try:
        return Ok(Config.from_dict(raw.value))
    except ValueError as e:
        return Err(ConfigError(f"invalid {path.name}: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
