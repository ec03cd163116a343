import logging
from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

db = SQLAlchemy()

# Initialized lazily in create_app
image_attributes = None  # type: ignore


def init_swatches(app):
    """Build the process-wide image attribute registry for this app."""
    global image_attributes
    from swatches.services.attribute_service import (
        AttributeMetadataSource,
        ImageAttributeRegistry,
    )

    input_type = app.config.get("IMAGE_ATTRIBUTE_INPUT_TYPE", "media_image")
    image_attributes = ImageAttributeRegistry(
        AttributeMetadataSource(), input_type=input_type
    )
    app.extensions["image_attributes"] = image_attributes
    logger.debug("Image attribute registry ready (input type %s)", input_type)
