#!/usr/bin/env python3

from __future__ import annotations
import logging
from typing import Any, Mapping, Sequence

logger = logging.getLogger(__name__)

# profile name -> property name -> [(source label, value), ...], highest priority first
Provenance = dict[str, dict[str, list[tuple[str, Any]]]]


def merge_raw_sections(
    sources: Sequence[Mapping[str, Mapping[str, str]]]
) -> dict[str, dict[str, str]]:
    """
    Combine raw sections from several sources into one.

    `sources` is ordered highest priority first. When two sources define the same
    property of the same profile, the earlier source's value is kept; everything
    else is carried over from whichever source defines it.
    """
    aggregate: dict[str, dict[str, str]] = {}

    # Walk from lowest priority up so higher priority sources overwrite.
    for index in range(len(sources) - 1, -1, -1):
        for name, properties in sources[index].items():
            current = aggregate.get(name)
            if current is None:
                aggregate[name] = dict(properties)
            else:
                current.update(properties)
        logger.debug("Merged source %d of %d (%d profiles)", index + 1, len(sources), len(sources[index]))

    return aggregate


def merge_provenance(provenances: Sequence[Provenance]) -> Provenance:
    """
    Pivot per-source provenance into a single history per profile property.

    Contributions keep source priority order, so the first entry of every list is
    the value that `merge_raw_sections` keeps.
    """
    result: Provenance = {}
    for provenance in provenances:
        for name, properties in provenance.items():
            merged = result.setdefault(name, {})
            for key, contributions in properties.items():
                history = merged.setdefault(key, [])
                # The same store may be added more than once.
                history.extend(c for c in contributions if c not in history)
    return result


def provenance_for(raw: Mapping[str, Mapping[str, str]], label: str) -> Provenance:
    """Attribute every property in `raw` to a single source."""
    return {
        name: {key: [(label, value)] for key, value in properties.items()}
        for name, properties in raw.items()
    }
