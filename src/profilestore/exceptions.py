#!/usr/bin/env python3

from __future__ import annotations
from typing import Iterable


class ProfileStoreError(ValueError):
    """Base class for every error raised while building a profile store."""


class CircularReferenceError(ProfileStoreError):
    """
    A profile's parent chain loops back onto itself.

    `chain` holds the resolution path, ending with the profile that was revisited.
    """

    def __init__(self, chain: Iterable[str]):
        self.chain = tuple(chain)
        super().__init__(
            "Invalid profile file: Circular relationship detected with profiles "
            + " -> ".join(self.chain)
        )


class MissingParentError(ProfileStoreError):
    """A profile names a parent that doesn't exist among the sections being resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parent profile '{name}' does not exist.")


class InvalidInputError(ProfileStoreError):
    """Required construction input is missing or unusable."""
