from pathplan.core.connection import engine, init_storage
from pathplan.core.logging import setup_logging


def create_db_tables():
    logger = setup_logging()
    init_storage(engine)
    logger.info("Database tables created at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    create_db_tables()
