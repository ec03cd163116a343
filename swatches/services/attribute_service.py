"""Attribute metadata lookups used while resolving variations."""
import logging
import threading
from swatches.extensions import db
from swatches.models.attribute import Attribute

logger = logging.getLogger(__name__)

COLLECTION_TYPES = (list, tuple, set, frozenset)


class AttributeMetadataSource:
    """Reads attribute definitions from the catalog store."""

    def attributes_of(self, parent):
        return parent.get_configurable_attributes()

    def attribute_codes_by_input_type(self, input_type):
        rows = (
            db.session.query(Attribute.code)
            .filter(Attribute.frontend_input == input_type)
            .order_by(Attribute.id)
            .all()
        )
        return [code for (code,) in rows]


class OptionLookup:
    def resolve(self, attribute, labels):
        """Return the ids of the options whose label equals one of ``labels``.

        ``labels`` may be a single label or a list of them. Matching is exact
        and case-sensitive. Unknown labels are skipped, and a label repeated
        in the input yields its id once per occurrence.
        """
        if not isinstance(labels, COLLECTION_TYPES):
            labels = [labels]

        option_ids = []
        for label in labels:
            for option in attribute.options:
                if option.label == label:
                    option_ids.append(int(option.id))
        return option_ids


class ImageAttributeRegistry:
    """Memoized codes of the attributes holding product images.

    The metadata source is queried on first use only. A failed query leaves
    the registry empty so the next call tries again.
    """

    def __init__(self, metadata_source, input_type="media_image"):
        self.metadata_source = metadata_source
        self.input_type = input_type
        self._codes = None
        self._lock = threading.Lock()

    def image_attribute_codes(self):
        codes = self._codes
        if codes is None:
            with self._lock:
                if self._codes is None:
                    self._codes = tuple(
                        self.metadata_source.attribute_codes_by_input_type(
                            self.input_type
                        )
                    )
                    logger.debug(
                        "Loaded %d %s attribute codes",
                        len(self._codes),
                        self.input_type,
                    )
                codes = self._codes
        return codes
