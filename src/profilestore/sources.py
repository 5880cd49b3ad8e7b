#!/usr/bin/env python3
"""
Raw section sources: turn a YAML or TOML document into `{profile: {key: value}}`.

The document format itself is handled by PyYAML / tomllib. What lives here is the
part specific to profile files: locating the file, rendering env var templates,
and normalizing section names for the two kinds of profile file.
"""

from __future__ import annotations
import enum
import logging
import os
import tomllib
from pathlib import Path
from typing import IO, Any, Mapping

import yaml

from .exceptions import InvalidInputError
from .utils import find_upwards, render_env_vars

logger = logging.getLogger(__name__)

PathType = str | os.PathLike
PROFILE_PREFIX = "profile "
DEFAULT_PROFILE = "default"

FORMATS = ("yaml", "toml")
SUFFIX_FORMATS = {".yaml": "yaml", ".yml": "yaml", ".toml": "toml"}


class SourceKind(enum.Enum):
    """The dialect of a profile file, which decides how section names are read."""

    # Non-default sections are written "profile <name>"; unprefixed ones are ignored.
    CONFIGURATION = "configuration"
    # Sections are written "<name>"; prefixed ones are ignored.
    CREDENTIALS = "credentials"


# ------------------------------------------------------------------------------
# Reading
# ------------------------------------------------------------------------------


def resolve_path(
    location: PathType, *, case_sensitive: bool = False, start: Path | None = None
) -> Path:
    """Expand `location`, searching ancestor directories for relative paths that don't exist here."""
    path = Path(location).expanduser()
    if path.is_file():
        return path

    found = find_upwards(path, start or Path.cwd(), case_sensitive)
    if found is None or not found.is_file():
        raise InvalidInputError(f"Profile file '{location}' does not exist.")
    return found


def read_document(
    content: PathType | IO[str],
    *,
    fmt: str | None = None,
    case_sensitive: bool = False,
    enable_env_vars: bool = True,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Load the raw document behind `content`, a path or an open text stream.

    Files opened here are always closed; streams passed in are left to the caller.
    """
    if isinstance(content, (str, os.PathLike)):
        path = resolve_path(content, case_sensitive=case_sensitive)
        fmt = fmt or SUFFIX_FORMATS.get(path.suffix.lower(), "yaml")
        with open(path, encoding="utf-8") as f:
            text = f.read()
        origin = str(path)
    else:
        text = content.read()
        fmt = fmt or "yaml"
        origin = "<stream>"

    if fmt not in FORMATS:
        raise InvalidInputError(f"Unsupported profile file format '{fmt}', expected one of {FORMATS}")

    if enable_env_vars:
        text = render_env_vars(text, os.environ if environ is None else environ)

    try:
        document = yaml.safe_load(text) if fmt == "yaml" else tomllib.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise InvalidInputError(f"Unable to parse {origin}: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise InvalidInputError(
            f"{origin} must contain a mapping of profile sections, got {type(document).__name__}"
        )
    return document


def read_sections(
    content: PathType | IO[str] | None,
    kind: SourceKind | None,
    *,
    fmt: str | None = None,
    case_sensitive: bool = False,
    enable_env_vars: bool = True,
    environ: Mapping[str, str] | None = None,
) -> dict[str, dict[str, str]]:
    """Read one profile file and return its normalized raw sections."""
    if content is None:
        raise InvalidInputError("Profile file content is required.")
    if kind is None:
        raise InvalidInputError("Profile file kind is required.")

    document = read_document(
        content,
        fmt=fmt,
        case_sensitive=case_sensitive,
        enable_env_vars=enable_env_vars,
        environ=environ,
    )
    return normalize_sections(document, kind)


# ------------------------------------------------------------------------------
# Normalization
# ------------------------------------------------------------------------------


def normalize_sections(document: Mapping[str, Any], kind: SourceKind) -> dict[str, dict[str, str]]:
    """
    Map section names onto profile names for `kind` and flatten properties to strings.

    Sections that don't belong in this kind of file are skipped with a warning.
    """
    result: dict[str, dict[str, str]] = {}
    # In configuration files "[profile default]" beats "[default]" regardless of order.
    explicit_default = False

    for section_name, section in document.items():
        name = normalize_profile_name(str(section_name), kind)
        if name is None:
            continue
        if not isinstance(section, Mapping):
            logger.warning("Ignoring section '%s': expected a mapping of properties.", section_name)
            continue

        prefixed = str(section_name).strip().startswith(PROFILE_PREFIX)
        if kind is SourceKind.CONFIGURATION and name == DEFAULT_PROFILE:
            if explicit_default and not prefixed:
                logger.warning("Ignoring section '%s' in favor of 'profile default'.", section_name)
                continue
            if prefixed and name in result and not explicit_default:
                logger.warning("Ignoring section 'default' in favor of 'profile default'.")
            explicit_default = explicit_default or prefixed

        result[name] = normalize_properties(name, section)

    return result


def normalize_profile_name(section_name: str, kind: SourceKind) -> str | None:
    """Return the profile name for a section, or None if the section should be skipped."""
    section_name = section_name.strip()
    prefixed = section_name.startswith(PROFILE_PREFIX)

    if kind is SourceKind.CONFIGURATION:
        if prefixed:
            name = section_name[len(PROFILE_PREFIX):].strip()
        elif section_name == DEFAULT_PROFILE:
            name = section_name
        else:
            logger.warning(
                "Ignoring profile '%s' because it was not prefixed with 'profile ' in a configuration file.",
                section_name,
            )
            return None
    else:
        if prefixed:
            logger.warning(
                "Ignoring profile '%s' because credentials files do not use the 'profile ' prefix.",
                section_name,
            )
            return None
        name = section_name

    if not name or any(c.isspace() for c in name):
        logger.warning("Ignoring profile '%s' because its name is empty or contains whitespace.", section_name)
        return None
    return name


def normalize_properties(profile_name: str, section: Mapping[Any, Any]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for key, value in section.items():
        key = str(key).strip()
        if not key:
            logger.warning("Ignoring unnamed property in profile '%s'.", profile_name)
        elif isinstance(value, (Mapping, list, tuple)):
            logger.warning("Ignoring property '%s' in profile '%s': nested values are not supported.", key, profile_name)
        elif value is None:
            properties[key] = ""
        elif isinstance(value, bool):
            properties[key] = "true" if value else "false"
        else:
            properties[key] = str(value)
    return properties
