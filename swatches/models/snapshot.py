"""Read-only view over a product document from the search index."""
import logging
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSnapshot:
    children_ids: tuple = ()

    @classmethod
    def from_document(cls, document):
        """Build a snapshot from a raw index document.

        ``children_ids`` may be a list or an object keyed by position.
        Anything unusable in it (missing key, wrong type, ids that are not
        integers) gives an empty child set.
        """
        if not isinstance(document, Mapping):
            logger.warning("Ignoring index document of type %s", type(document).__name__)
            return cls()

        raw = document.get("children_ids")
        if not raw:
            return cls()
        # Non-sequential arrays come out of the indexer as JSON objects
        if isinstance(raw, Mapping):
            raw = list(raw.values())
        if not isinstance(raw, (list, tuple, set, frozenset)):
            logger.warning("Ignoring children_ids of type %s", type(raw).__name__)
            return cls()

        try:
            children_ids = tuple(int(child_id) for child_id in raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed children_ids: %r", raw)
            return cls()
        return cls(children_ids=children_ids)

    @property
    def is_empty(self):
        return not self.children_ids
