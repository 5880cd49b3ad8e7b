#!/usr/bin/env python3

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import IO, Callable, Iterator, Mapping

import rich

from .linearize import build_profiles, sort_profiles_with_parents_first
from .merge import Provenance, merge_provenance, merge_raw_sections, provenance_for
from .profile import Profile
from .render import explain_store
from .settings import ProfileSettings
from .sources import PathType, SourceKind, read_sections

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# Profile Store
# ------------------------------------------------------------------------------


class ProfileStore:
    """
    A read-only collection of profiles, ordered so that parents come before children.

    Build one with `from_raw`, `from_source` or `aggregate`; there are no mutators.
    """

    def __init__(
        self,
        raw: Mapping[str, Mapping[str, str]],
        *,
        label: str = "<raw>",
        provenance: Provenance | None = None,
    ):
        self.label = label
        self._profiles = build_profiles(sort_profiles_with_parents_first(raw))
        self.provenance: Provenance = provenance if provenance is not None else provenance_for(raw, label)
        logger.debug("Built profile store %s with %d profiles", label, len(self._profiles))

    @classmethod
    def from_raw(cls, raw: Mapping[str, Mapping[str, str]], label: str = "<raw>") -> ProfileStore:
        return cls(raw, label=label)

    @classmethod
    def from_source(
        cls,
        content: PathType | IO[str] | None,
        kind: SourceKind | None,
        *,
        fmt: str | None = None,
        settings: ProfileSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ProfileStore:
        """
        Read a single profile file (a path or an open text stream) into a store.

        Without `settings`, the field defaults apply; the process environment is
        only consulted for env var templates, and only when `environ` is None.
        """
        raw = read_sections(
            content,
            kind,
            fmt=fmt,
            case_sensitive=settings.case_sensitive if settings else False,
            enable_env_vars=settings.enable_env_vars if settings else True,
            environ=environ,
        )
        label = "<stream>" if hasattr(content, "read") else str(content)
        return cls(raw, label=label)

    @classmethod
    def aggregator(cls) -> Aggregator:
        return Aggregator()

    @classmethod
    def aggregate(cls, *stores: ProfileStore) -> ProfileStore:
        """
        Merge stores into one. Stores listed earlier win for any property that
        appears in the same profile of more than one store.
        """
        aggregator = cls.aggregator()
        for store in stores:
            aggregator.add(store)
        return aggregator.build()

    # --------------------------------------------------------------------------
    # Read access
    # --------------------------------------------------------------------------

    @property
    def profiles(self) -> Mapping[str, Profile]:
        return MappingProxyType(self._profiles)

    def profile(self, name: str) -> Profile | None:
        return self._profiles.get(name)

    def parent(self, profile: Profile | str) -> Profile | None:
        """Resolve the parent of a profile in this store, if it has one."""
        if isinstance(profile, str):
            profile = self._profiles.get(profile)
            if profile is None:
                return None
        if profile.parent_name is None:
            return None
        return self._profiles.get(profile.parent_name)

    def lineage(self, name: str) -> list[Profile]:
        """The named profile followed by each of its ancestors, nearest first."""
        profile = self._profiles.get(name)
        if profile is None:
            raise KeyError(name)

        chain = []
        while profile is not None:
            chain.append(profile)
            profile = self.parent(profile)
        return chain

    def active_profile(self, settings: ProfileSettings) -> Profile | None:
        return self.profile(settings.profile)

    def raw_sections(self) -> dict[str, dict[str, str]]:
        """Fresh copies of every profile's properties, in resolution order."""
        return {name: dict(profile.properties) for name, profile in self._profiles.items()}

    def explain(self, verbose=False):
        rich.print(explain_store(self, verbose))

    def __getitem__(self, name: str) -> Profile:
        return self._profiles[name]

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ProfileStore):
            return NotImplemented
        return list(self._profiles.items()) == list(other._profiles.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ProfileStore({list(self._profiles.values())!r})"


# ------------------------------------------------------------------------------
# Aggregation
# ------------------------------------------------------------------------------


class Aggregator:
    """Collects stores in priority order, highest first, and merges them on `build`."""

    def __init__(self):
        self._stores: list[ProfileStore] = []

    def add(self, store: ProfileStore) -> Aggregator:
        self._stores.append(store)
        return self

    def apply(self, fn: Callable[[Aggregator], None]) -> Aggregator:
        fn(self)
        return self

    def build(self) -> ProfileStore:
        raw = merge_raw_sections([store.raw_sections() for store in self._stores])
        provenance = merge_provenance([store.provenance for store in self._stores])
        logger.debug("Aggregating %d profile stores into %d profiles", len(self._stores), len(raw))
        return ProfileStore(raw, label="<aggregate>", provenance=provenance)


def load_profile_store(
    settings: ProfileSettings | None = None, environ: Mapping[str, str] | None = None
) -> ProfileStore:
    """
    Build the store described by `settings`: the credentials file, then the config
    file, each only if configured. Credentials take precedence.

    `settings` defaults to one read from the environment.
    """
    settings = settings or ProfileSettings()

    def add_credentials_file(aggregator: Aggregator) -> None:
        if settings.credentials_file is not None:
            store = ProfileStore.from_source(
                settings.credentials_file, SourceKind.CREDENTIALS, settings=settings, environ=environ
            )
            aggregator.add(store)

    def add_config_file(aggregator: Aggregator) -> None:
        if settings.config_file is not None:
            store = ProfileStore.from_source(
                settings.config_file, SourceKind.CONFIGURATION, settings=settings, environ=environ
            )
            aggregator.add(store)

    return ProfileStore.aggregator().apply(add_credentials_file).apply(add_config_file).build()
