"""Candidate variant queries against the catalog store."""
from dataclasses import dataclass, field
from swatches.extensions import db
from swatches.models.attribute import Attribute, ProductAttributeValue
from swatches.models.product import Product, ProductRelation
from swatches.services.attribute_service import COLLECTION_TYPES


@dataclass
class Variant:
    id: int
    sku: str
    name: str
    attributes: dict = field(default_factory=dict)
    media: list = field(default_factory=list)


def filter_by_parent(query, parent_id):
    """Restrict a product query to the children of ``parent_id``."""
    return query.join(
        ProductRelation, ProductRelation.child_id == Product.id
    ).filter(ProductRelation.parent_id == parent_id)


class CandidateQuery:
    """Chainable product query that yields at most one ``Variant``."""

    def __init__(self, query=None):
        self.query = query if query is not None else Product.query
        self.select_codes = []
        self.with_media = False

    def filter_by_ids(self, ids):
        self.query = self.query.filter(Product.id.in_(list(ids)))
        return self

    def filter_by_parent(self, parent_id):
        self.query = filter_by_parent(self.query, parent_id)
        return self

    def filter_by_attribute(self, code, values):
        if not isinstance(values, COLLECTION_TYPES):
            values = [values]
        # Stored values are text; a null value matches nothing
        values = [str(value) for value in values if value is not None]

        matching = (
            db.select(ProductAttributeValue.product_id)
            .join(Attribute, Attribute.id == ProductAttributeValue.attribute_id)
            .where(Attribute.code == code, ProductAttributeValue.value.in_(values))
        )
        self.query = self.query.filter(Product.id.in_(matching))
        self._select(code)
        return self

    def filter_by_attributes(self, filters):
        for code, values in filters.items():
            self.filter_by_attribute(code, values)
        return self

    def include_media_gallery(self):
        self.with_media = True
        return self

    def include_extra_fields(self, codes):
        for code in codes:
            self._select(code)
        return self

    def first_match(self):
        product = self.query.order_by(Product.id).first()
        if product is None or product.id is None:
            return None
        return self._to_variant(product)

    def _select(self, code):
        if code not in self.select_codes:
            self.select_codes.append(code)

    def _to_variant(self, product):
        attributes = {}
        if self.select_codes:
            rows = (
                db.session.query(Attribute.code, ProductAttributeValue.value)
                .join(
                    ProductAttributeValue,
                    ProductAttributeValue.attribute_id == Attribute.id,
                )
                .filter(
                    ProductAttributeValue.product_id == product.id,
                    Attribute.code.in_(self.select_codes),
                )
                .all()
            )
            attributes = dict(rows)

        media = []
        if self.with_media:
            media = [m.to_dict() for m in product.media.filter_by(disabled=False)]

        return Variant(
            id=product.id,
            sku=product.sku,
            name=product.name,
            attributes=attributes,
            media=media,
        )
