from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def make_session_factory(database_url: str, **engine_kwargs):
    """Create the engine and tables for ``database_url`` and return a session factory."""
    if database_url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, **engine_kwargs)

    from .models import Booking  # noqa: F401  registers the table on Base
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


class BookingStore:
    """Append-only writer for bookings. Nothing here updates or deletes."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def add(self, booking):
        db = self.session_factory()
        try:
            db.add(booking)
            db.commit()
            db.refresh(booking)
            return booking
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
