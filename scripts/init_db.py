# scripts/init_db.py

import logging

from invoicing.config import get_settings, setup_logging
from invoicing.db.engine import get_engine
from invoicing.db.schema import metadata

logger = logging.getLogger(__name__)


def main():
    setup_logging(get_settings().log_level)
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("Recreated tables on %s: %s", engine.url.render_as_string(hide_password=True),
                ", ".join(metadata.tables))


if __name__ == "__main__":
    main()
