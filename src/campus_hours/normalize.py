"""Name normalization and the join from scraped names to stable entity ids.

Hours pages identify locations only by display name, and those names drift
("Café 1919", "Cafe 1919", "CAFE&nbsp;1919"). Extraction keys its results by
normalize_name() and a matcher turns those keys into entity ids.
"""

import unicodedata
from collections.abc import Iterable, Mapping
from typing import Protocol

from campus_hours.logging import get_logger

log = get_logger(__name__)

_APOSTROPHES = str.maketrans({"\u2018": "'", "\u2019": "'", "\u02bc": "'", "\u00b4": "'"})


def strip_accents(text: str) -> str:
    """Drop combining marks after NFKD decomposition (é -> e, ñ -> n)."""
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def normalize_name(name: str) -> str:
    """Build the lookup key for a display name.

    Lowercases, folds curly apostrophes, strips accents and drops every
    character that is not an ASCII letter or digit. Idempotent.

    >>> normalize_name("Café 1919") == normalize_name("cafe1919")
    True
    """
    folded = strip_accents(name.translate(_APOSTROPHES).lower())
    return "".join(c for c in folded if c.isascii() and c.isalnum())


class EntityMatcher(Protocol):
    """Join strategy from a normalized name key to entity ids."""

    def resolve_all(self, key: str) -> tuple[str, ...]: ...


class NameMatcher:
    """Exact normalized-name match, then fallback to the known id list.

    Args:
        names: entity id -> display names (name plus aliases).
        fallback_ids: ids tried last by normalizing the id itself, so
            "Bruin Plate" still finds a static-table-only id "BruinPlate".
    """

    def __init__(
        self,
        names: Mapping[str, Iterable[str]],
        fallback_ids: Iterable[str] = (),
    ) -> None:
        by_key: dict[str, list[str]] = {}
        for entity_id, entity_names in names.items():
            for name in entity_names:
                ids = by_key.setdefault(normalize_name(name), [])
                if entity_id not in ids:
                    ids.append(entity_id)
        self._by_name = {key: tuple(ids) for key, ids in by_key.items() if key}

        by_id: dict[str, list[str]] = {}
        for entity_id in fallback_ids:
            by_id.setdefault(normalize_name(entity_id), []).append(entity_id)
        self._by_id = {key: tuple(ids) for key, ids in by_id.items() if key}

    def resolve_all(self, key: str) -> tuple[str, ...]:
        """All entity ids sharing this key; more than one when names collide."""
        key = normalize_name(key)
        return self._by_name.get(key) or self._by_id.get(key, ())

    def resolve(self, key: str) -> str | None:
        ids = self.resolve_all(key)
        return ids[0] if ids else None


def join_to_ids(
    extracted: Mapping[str, list], matcher: EntityMatcher
) -> dict[str, list]:
    """Re-key an extraction result from normalized names to entity ids.

    Unmatched keys are logged and dropped. When two keys land on the same id
    the first one seen wins.
    """
    joined: dict[str, list] = {}
    unmatched: list[str] = []
    for key, entries in extracted.items():
        ids = matcher.resolve_all(key)
        if not ids:
            unmatched.append(key)
            continue
        for entity_id in ids:
            if entity_id in joined:
                log.debug("duplicate_entity_key", entity_id=entity_id, key=key)
                continue
            joined[entity_id] = list(entries)

    if unmatched:
        log.info("unmatched_entity_names", keys=unmatched)
    return joined
