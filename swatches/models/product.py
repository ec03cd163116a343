from datetime import datetime, timezone
from swatches.extensions import db
from swatches.models.snapshot import IndexSnapshot


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    sku = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    type_id = db.Column(
        db.String(20), nullable=False, default="simple", index=True
    )
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    values = db.relationship(
        "ProductAttributeValue",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
    )
    media = db.relationship(
        "ProductMedia",
        backref="product",
        lazy="dynamic",
        cascade="all, delete-orphan",
        order_by="ProductMedia.position",
    )
    super_attributes = db.relationship(
        "ConfigurableAttribute",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="ConfigurableAttribute.position",
    )

    # Search index document attached by the indexer for the current request.
    # Not persisted.
    document_source = None

    @property
    def is_configurable(self):
        return self.type_id == "configurable"

    def get_configurable_attributes(self):
        """Attribute definitions the variants of this product differ by."""
        return [link.attribute for link in self.super_attributes]

    def attached_index_snapshot(self):
        if self.document_source is None:
            return None
        return IndexSnapshot.from_document(self.document_source)

    def __repr__(self):
        return f"<Product {self.sku}: {self.name}>"


class ProductRelation(db.Model):
    """Parent/child link between a configurable product and its variants."""

    __tablename__ = "product_relations"

    parent_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    child_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self):
        return f"<ProductRelation {self.parent_id} -> {self.child_id}>"


class ProductMedia(db.Model):
    __tablename__ = "product_media_gallery"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file = db.Column(db.String(512), nullable=False)
    label = db.Column(db.String(255), default="")
    position = db.Column(db.Integer, default=0)
    disabled = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {"file": self.file, "label": self.label, "position": self.position}

    def __repr__(self):
        return f"<ProductMedia {self.file}>"
