import os
from flask import Flask
from dotenv import load_dotenv

load_dotenv()


def create_app(config_name=None):
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV") or "development"

    from swatches.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from swatches.extensions import db, init_swatches

    db.init_app(flask_app)
    init_swatches(flask_app)

    # Import models so create_all sees them
    from swatches.models import (  # noqa: F401
        Product,
        ProductRelation,
        ProductMedia,
        Attribute,
        AttributeOption,
        ConfigurableAttribute,
        ProductAttributeValue,
    )

    # Register CLI commands
    from swatches.cli import register_cli

    register_cli(flask_app)

    # Health check
    @flask_app.route("/health")
    def health():
        checks = {"status": "ok"}
        try:
            db.session.execute(db.text("SELECT 1"))
            checks["db"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check DB probe failed")
            checks["db"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app
