#!/usr/bin/env python3

from __future__ import annotations
import logging
from typing import Mapping

from pydantic import ValidationError

from .exceptions import CircularReferenceError, InvalidInputError, MissingParentError
from .profile import SOURCE_PROFILE, Profile

logger = logging.getLogger(__name__)

RawSections = Mapping[str, Mapping[str, str]]

# ------------------------------------------------------------------------------
# Linearization
# ------------------------------------------------------------------------------


def sort_profiles_with_parents_first(raw: RawSections) -> dict[str, Mapping[str, str]]:
    """
    Order raw sections so that every profile comes after the profile named by its
    `source_profile` property.

    Independent profiles keep their input order. Raises `CircularReferenceError`
    when a parent chain loops, and `MissingParentError` when a chain names a
    profile that isn't present.
    """
    unsorted = dict(raw)
    sorted_profiles: dict[str, Mapping[str, str]] = {}

    while unsorted:
        next_name = next(iter(unsorted))
        _sort_profile_and_parents(unsorted, sorted_profiles, next_name)

    return sorted_profiles


def _sort_profile_and_parents(
    unsorted: dict[str, Mapping[str, str]],
    sorted_profiles: dict[str, Mapping[str, str]],
    profile_name: str,
) -> None:
    """
    Move `profile_name` and any of its not-yet-sorted ancestors from `unsorted`
    into `sorted_profiles`, oldest ancestor first.
    """
    path: list[str] = []
    on_path: set[str] = set()

    name: str | None = profile_name
    while name is not None:
        if name in on_path:
            raise CircularReferenceError([*path, name])
        if name in sorted_profiles:
            break

        properties = unsorted.get(name)
        if properties is None:
            raise MissingParentError(name)

        path.append(name)
        on_path.add(name)
        name = properties.get(SOURCE_PROFILE)

    if len(path) > 1:
        logger.debug("Resolved parent chain %s", " -> ".join(path))

    # Ancestors were appended last, so they go in first.
    for name in reversed(path):
        sorted_profiles[name] = unsorted.pop(name)


# ------------------------------------------------------------------------------
# Profile Construction
# ------------------------------------------------------------------------------


def build_profiles(sorted_raw: RawSections) -> dict[str, Profile]:
    """
    Turn parents-first raw sections into `Profile`s.

    A parent that hasn't been built by the time its child is reached is left unset
    rather than reported; `sort_profiles_with_parents_first` is what guarantees it.
    """
    result: dict[str, Profile] = {}
    for name, properties in sorted_raw.items():
        parent = result.get(properties.get(SOURCE_PROFILE))
        try:
            result[name] = Profile(
                name=name,
                properties=properties,
                parent_name=parent.name if parent is not None else None,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Profile '{name}' properties must map strings to strings: {e}") from e
    return result
