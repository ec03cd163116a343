"""Resolve the variant of a configurable product from a partial selection.

Two strategies are used depending on what the caller hands in:

- index: the parent carries a search index document listing its children.
  Candidates are limited to those ids and unspecified attributes accept any
  of their options.
- store: no index document. Candidates are the parent's children per the
  relation table and unspecified attributes fall back to their default value.

Not finding a variant is a normal outcome, reported through
``VariationResult.status``. Store errors propagate to the caller.
"""
import logging
from dataclasses import dataclass, field
from flask import current_app
from swatches.services.attribute_service import (
    AttributeMetadataSource,
    ImageAttributeRegistry,
)
from swatches.services.candidate_query import CandidateQuery
from swatches.services.fallback import AttributeFallbackMerger

logger = logging.getLogger(__name__)

MATCHED = "MATCHED"
NO_SWATCH_ATTRIBUTE = "NO_SWATCH_ATTRIBUTE"
EMPTY_CHILD_SET = "EMPTY_CHILD_SET"
NO_CANDIDATE = "NO_CANDIDATE"

STRATEGY_INDEX = "index"
STRATEGY_STORE = "store"


@dataclass(frozen=True)
class VariationResult:
    status: str
    variant: object = None
    strategy: str = None
    filters: dict = field(default_factory=dict)

    @property
    def matched(self):
        return self.status == MATCHED


@dataclass(frozen=True)
class MatcherSettings:
    variation_select_attributes: tuple = ()
    image_input_type: str = "media_image"

    @classmethod
    def from_config(cls, config):
        return cls(
            variation_select_attributes=tuple(
                config.get("VARIATION_SELECT_ATTRIBUTES", ())
            ),
            image_input_type=config.get("IMAGE_ATTRIBUTE_INPUT_TYPE", "media_image"),
        )


class VariationMatcher:
    def __init__(
        self,
        metadata_source=None,
        image_attributes=None,
        settings=None,
        query_factory=CandidateQuery,
        merger=None,
    ):
        self.settings = settings or MatcherSettings()
        self.metadata_source = metadata_source or AttributeMetadataSource()
        self.image_attributes = image_attributes or ImageAttributeRegistry(
            self.metadata_source, input_type=self.settings.image_input_type
        )
        self.query_factory = query_factory
        self.merger = merger or AttributeFallbackMerger()

    def resolve(self, parent, selection):
        """Find the variant of ``parent`` matching ``selection``.

        ``selection`` maps attribute codes to a literal value, an option
        label, or a list of either.
        """
        attributes = list(self.metadata_source.attributes_of(parent))
        if not any(attribute.is_swatch for attribute in attributes):
            logger.debug("Product %s has no swatch attribute", parent.id)
            return VariationResult(NO_SWATCH_ATTRIBUTE)

        snapshot = parent.attached_index_snapshot()
        if snapshot is not None:
            return self._resolve_from_index(parent, snapshot, attributes, selection)
        return self._resolve_from_store(parent, attributes, selection)

    def _resolve_from_index(self, parent, snapshot, attributes, selection):
        if snapshot.is_empty:
            logger.debug("Index document of product %s lists no children", parent.id)
            return VariationResult(EMPTY_CHILD_SET, strategy=STRATEGY_INDEX)

        filters = self.merger.index_filters(attributes, selection)
        query = self.query_factory().filter_by_ids(snapshot.children_ids)
        query.filter_by_attributes(filters)
        self._add_select_fields(query)
        return self._result(parent, query.first_match(), STRATEGY_INDEX, filters)

    def _resolve_from_store(self, parent, attributes, selection):
        filters = self.merger.store_filters(attributes, selection)
        query = self.query_factory().filter_by_parent(parent.id)
        query.filter_by_attributes(filters)
        self._add_select_fields(query)
        return self._result(parent, query.first_match(), STRATEGY_STORE, filters)

    def _add_select_fields(self, query):
        query.include_media_gallery()
        query.include_extra_fields(self.image_attributes.image_attribute_codes())
        query.include_extra_fields(self.settings.variation_select_attributes)

    def _result(self, parent, variant, strategy, filters):
        if variant is None:
            logger.debug(
                "No %s variation of product %s for %s", strategy, parent.id, filters
            )
            return VariationResult(NO_CANDIDATE, strategy=strategy, filters=filters)

        logger.debug(
            "Resolved product %s to variant %s via %s", parent.id, variant.id, strategy
        )
        return VariationResult(MATCHED, variant=variant, strategy=strategy, filters=filters)


def get_matcher():
    """Matcher configured from the current app, sharing its image registry."""
    return VariationMatcher(
        image_attributes=current_app.extensions.get("image_attributes"),
        settings=MatcherSettings.from_config(current_app.config),
    )


def resolve_variation(parent, selection):
    return get_matcher().resolve(parent, selection)
