import importlib
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
_is_sqlite = DATABASE_URL.startswith("sqlite")

engine = create_engine(
    DATABASE_URL,
    future=True,
    echo=False,
    isolation_level=settings.DB_ISOLATION_LEVEL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
# expire_on_commit=False keeps loaded rows usable for response shaping
# after the service transaction has committed
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)
Base = declarative_base()


if _is_sqlite:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # product_images.product_id relies on ON DELETE CASCADE
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Model modules registered on Base.metadata (add new modules here)
MODEL_MODULES = [
    "app.models.product",
    "app.models.product_image",
]


def init_db(reset: bool = None):
    """
    Initialize DB schema.

    Behavior:
      - If ``reset`` is true (defaults to the RESET_DB setting), drop & recreate tables.
      - Otherwise, create missing tables and leave existing ones in place.
    """
    if reset is None:
        reset = settings.RESET_DB

    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        logger.info("Resetting database schema")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
