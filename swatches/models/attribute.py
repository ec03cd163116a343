from swatches.extensions import db


class Attribute(db.Model):
    __tablename__ = "attributes"

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(100), unique=True, nullable=False, index=True)
    label = db.Column(db.String(255), nullable=False, default="")
    frontend_input = db.Column(
        db.String(30), nullable=False, default="select", index=True
    )
    swatch_input_type = db.Column(db.String(20))  # visual, text
    default_value = db.Column(db.String(255))

    options = db.relationship(
        "AttributeOption",
        backref="attribute",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="AttributeOption.sort_order",
    )

    SOURCE_INPUT_TYPES = {"select", "multiselect"}
    SWATCH_TYPES = {"visual", "text"}

    @property
    def uses_source(self):
        """Whether stored values are option ids rather than literals."""
        return self.frontend_input in self.SOURCE_INPUT_TYPES

    @property
    def is_swatch(self):
        return self.swatch_input_type in self.SWATCH_TYPES

    @property
    def option_ids(self):
        return [int(option.id) for option in self.options]

    def __repr__(self):
        return f"<Attribute {self.code} [{self.frontend_input}]>"


class AttributeOption(db.Model):
    __tablename__ = "attribute_options"

    id = db.Column(db.Integer, primary_key=True)
    attribute_id = db.Column(
        db.Integer,
        db.ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = db.Column(db.String(255), nullable=False)
    sort_order = db.Column(db.Integer, default=0)

    def __repr__(self):
        return f"<AttributeOption {self.id}: {self.label}>"


class ConfigurableAttribute(db.Model):
    """Attribute a configurable product's variants are differentiated by."""

    __tablename__ = "configurable_attributes"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_id = db.Column(
        db.Integer,
        db.ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
    )
    position = db.Column(db.Integer, default=0)

    attribute = db.relationship("Attribute", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint(
            "product_id", "attribute_id", name="uq_configurable_attribute"
        ),
    )

    def __repr__(self):
        return f"<ConfigurableAttribute {self.product_id}: {self.attribute_id}>"


class ProductAttributeValue(db.Model):
    __tablename__ = "product_attribute_values"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_id = db.Column(
        db.Integer,
        db.ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value = db.Column(db.String(255))  # option id as text for select inputs

    attribute = db.relationship("Attribute", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("product_id", "attribute_id", name="uq_product_value"),
    )

    def __repr__(self):
        return f"<ProductAttributeValue {self.product_id}/{self.attribute_id}={self.value}>"
