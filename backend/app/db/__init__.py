import importlib

from filelock import FileLock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings
from app.utils.logging import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # sync endpoints and their dependencies may run on different threadpool threads
    connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every module defining tables; imported before create_all so metadata is complete
MODEL_MODULES = [
    "app.models.user",
    "app.models.category",
    "app.models.product",
    "app.models.review",
    "app.models.cart_item",
    "app.models.wishlist_item",
    "app.models.order",
    "app.models.payment_intent",
]


def import_models():
    for mod in MODEL_MODULES:
        importlib.import_module(mod)


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - reset=True (or RESET_DB=1 in the environment) drops and recreates all tables.
      - Otherwise missing tables are created and existing ones are left alone.

    Several uvicorn workers may start at once; a file lock serializes schema creation.
    """
    import_models()
    with FileLock(settings.DB_LOCK_PATH, timeout=30):
        if reset or settings.RESET_DB:
            log.warning("Dropping all tables (reset requested)")
            Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
    log.info("Database initialized (%d tables)", len(Base.metadata.tables))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
