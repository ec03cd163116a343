"""Flask CLI commands for catalog inspection."""
import click


DEMO_ATTRIBUTES = [
    # code, label, frontend_input, swatch_input_type, default_value, options
    ("color", "Color", "select", "visual", None, [(10, "Red"), (11, "Blue")]),
    ("size", "Size", "select", "text", "21", [(20, "S"), (21, "M")]),
    ("swatch_image", "Swatch Image", "media_image", None, None, []),
    ("material", "Material", "text", None, None, []),
]

DEMO_CHILDREN = [
    # sku, name, values, media files
    (
        "TEE-RED-M",
        "Classic Tee Red M",
        {"color": "10", "size": "21", "swatch_image": "/t/e/tee-red.jpg", "material": "cotton"},
        ["/t/e/tee-red.jpg", "/t/e/tee-red-back.jpg"],
    ),
    (
        "TEE-BLUE-S",
        "Classic Tee Blue S",
        {"color": "11", "size": "20", "swatch_image": "/t/e/tee-blue.jpg", "material": "cotton"},
        ["/t/e/tee-blue.jpg"],
    ),
]


def seed_demo_catalog():
    """Create the demo configurable tee with two variants. Returns the parent."""
    from swatches.extensions import db
    from swatches.models import (
        Attribute,
        AttributeOption,
        ConfigurableAttribute,
        Product,
        ProductAttributeValue,
        ProductMedia,
        ProductRelation,
    )

    attributes = {}
    for code, label, frontend_input, swatch_type, default, options in DEMO_ATTRIBUTES:
        attribute = Attribute(
            code=code,
            label=label,
            frontend_input=frontend_input,
            swatch_input_type=swatch_type,
            default_value=default,
        )
        for i, (option_id, option_label) in enumerate(options):
            attribute.options.append(
                AttributeOption(id=option_id, label=option_label, sort_order=i)
            )
        db.session.add(attribute)
        attributes[code] = attribute

    parent = Product(sku="TEE-CFG", name="Classic Tee", type_id="configurable")
    db.session.add(parent)
    db.session.flush()

    for position, code in enumerate(("color", "size")):
        db.session.add(
            ConfigurableAttribute(
                product_id=parent.id,
                attribute_id=attributes[code].id,
                position=position,
            )
        )

    for sku, name, values, files in DEMO_CHILDREN:
        child = Product(sku=sku, name=name, type_id="simple")
        db.session.add(child)
        db.session.flush()
        for code, value in values.items():
            db.session.add(
                ProductAttributeValue(
                    product_id=child.id,
                    attribute_id=attributes[code].id,
                    value=value,
                )
            )
        for position, file in enumerate(files):
            db.session.add(
                ProductMedia(product_id=child.id, file=file, position=position)
            )
        db.session.add(ProductRelation(parent_id=parent.id, child_id=child.id))

    db.session.flush()
    return parent


def register_cli(app):
    @app.cli.command("seed-demo")
    def seed_demo():
        """Create tables and seed a demo configurable product (idempotent)."""
        from swatches.extensions import db
        from swatches.models import Product

        db.create_all()
        if Product.query.first():
            click.echo("Products already exist, skipping demo seed.")
            return

        parent = seed_demo_catalog()
        db.session.commit()
        click.echo(
            f"Seeded {parent.sku} with {len(DEMO_CHILDREN)} variants."
        )

    @app.cli.command("resolve-variation")
    @click.argument("sku")
    @click.option(
        "--attr", "attrs", multiple=True, help="Selected value as code=value."
    )
    @click.option(
        "--children",
        default=None,
        help="Comma-separated child ids; attaches an index document.",
    )
    def resolve_variation_command(sku, attrs, children):
        """Resolve the variant of a configurable product."""
        from swatches.models import Product
        from swatches.services.variation_service import resolve_variation

        product = Product.query.filter_by(sku=sku).first()
        if not product:
            raise click.ClickException(f"Unknown product {sku}")

        selection = {}
        for pair in attrs:
            if "=" not in pair:
                raise click.BadParameter(
                    f"expected code=value, got {pair!r}", param_hint="--attr"
                )
            code, value = pair.split("=", 1)
            selection[code.strip()] = value.strip()

        if children is not None:
            product.document_source = {
                "children_ids": [c.strip() for c in children.split(",") if c.strip()]
            }

        result = resolve_variation(product, selection)
        if not result.matched:
            click.echo(f"No variation: {result.status}")
            return

        variant = result.variant
        click.echo(f"Matched: {variant.sku} (#{variant.id}) via {result.strategy}")
        for code, value in sorted(variant.attributes.items()):
            click.echo(f"  {code}: {value}")
