#!/usr/bin/env python3

from .exceptions import (
    CircularReferenceError,
    InvalidInputError,
    MissingParentError,
    ProfileStoreError,
)
from .linearize import build_profiles, sort_profiles_with_parents_first
from .merge import merge_raw_sections
from .profile import SOURCE_PROFILE, Profile
from .settings import ProfileSettings
from .sources import SourceKind, read_sections
from .store import Aggregator, ProfileStore, load_profile_store

__version__ = "0.1.0"
__all__ = [
    "Aggregator",
    "CircularReferenceError",
    "InvalidInputError",
    "MissingParentError",
    "Profile",
    "ProfileSettings",
    "ProfileStore",
    "ProfileStoreError",
    "SOURCE_PROFILE",
    "SourceKind",
    "build_profiles",
    "load_profile_store",
    "merge_raw_sections",
    "read_sections",
    "sort_profiles_with_parents_first",
]
