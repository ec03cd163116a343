from swatches.models.product import Product, ProductRelation, ProductMedia
from swatches.models.attribute import (
    Attribute,
    AttributeOption,
    ConfigurableAttribute,
    ProductAttributeValue,
)
from swatches.models.snapshot import IndexSnapshot

__all__ = [
    "Product",
    "ProductRelation",
    "ProductMedia",
    "Attribute",
    "AttributeOption",
    "ConfigurableAttribute",
    "ProductAttributeValue",
    "IndexSnapshot",
]
