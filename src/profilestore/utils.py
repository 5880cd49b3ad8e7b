#!/usr/bin/env python3

from __future__ import annotations
import re
from pathlib import Path
from typing import Mapping

from .exceptions import InvalidInputError


def find_in(root: Path, needle: Path, case_sensitive=False) -> Path | None:
    """Find `needle` below `root`, matching each part case-insensitively unless asked not to."""
    if (root / needle).exists():
        return root / needle
    if case_sensitive:
        return None

    cur = root
    for part in needle.parts:
        if (cur / part).exists():
            cur = cur / part
            continue
        if not cur.is_dir():
            return None
        for entry in cur.iterdir():
            if entry.name.lower() == part.lower():
                cur = entry
                break
        else:
            return None

    return cur


def find_upwards(needle: Path, start: Path, case_sensitive=False) -> Path | None:
    """
    Return `needle` qualified by the nearest of `start` and its ancestors that contains it.
    """
    if needle.is_absolute():
        return needle if needle.exists() else None

    cur = start
    while True:
        found = find_in(cur, needle, case_sensitive)
        if found:
            return found
        if cur == cur.parent:
            return None
        cur = cur.parent


# Matches {{ env_var('VAR') }} or {{ env_var('VAR', 'default') }}
ENV_VAR_PATTERN = re.compile(
    r"\{\{\s*env_var\(\s*['\"]([^'\"]+)['\"]\s*(?:,\s*['\"]([^'\"]*)['\"])?\s*\)\s*\}\}"
)


def render_env_vars(content: str, environ: Mapping[str, str]) -> str:
    """
    Substitute `{{ env_var('VAR') }}` and `{{ env_var('VAR', 'default') }}` templates.

    Raises InvalidInputError if a variable is unset and has no default.
    """
    def replace_env_var(match: re.Match) -> str:
        var_name, default = match.group(1), match.group(2)

        value = environ.get(var_name)
        if value is None:
            if default is not None:
                return default
            raise InvalidInputError(
                f"Environment variable '{var_name}' not found and no default provided. "
                f"Use: {{{{ env_var('{var_name}', 'default_value') }}}}"
            )
        return value

    return ENV_VAR_PATTERN.sub(replace_env_var, content)
