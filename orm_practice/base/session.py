import enum

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import load_profile, DEFAULT_PROFILE
from ..errors import OrmPracticeError
from ..logger import logger
from .entity import Base


class TransactionState(enum.Enum):
    SESSION_OPEN = "session_open"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class PersistenceUnit:
    """
    Engine and session factory built from a persistence profile.
    """

    def __init__(self, profile):
        self.profile = profile

        engine_kwargs = dict(echo=profile.echo)
        if profile.is_memory_sqlite:
            # Share the single in-memory database between sessions
            engine_kwargs.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )

        logger.debug(f"Opening persistence unit '{profile.name}'")
        self.engine = create_engine(profile.url, **engine_kwargs)

        if profile.create_schema:
            Base.metadata.create_all(self.engine)

        self.SessionFactory = sessionmaker(self.engine, expire_on_commit=False)
        self.closed = False

    def unit_of_work(self):
        if self.closed:
            raise OrmPracticeError(f"Persistence unit '{self.profile.name}' is closed")

        return UnitOfWork(self.SessionFactory)

    def close(self):
        if self.closed:
            return

        logger.debug(f"Closing persistence unit '{self.profile.name}'")
        self.engine.dispose()
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def create_persistence_unit(name=DEFAULT_PROFILE, config_path=None):
    return PersistenceUnit(load_profile(name, config_path))


class UnitOfWork:
    """
    One session and its transaction.

    Leaving the block normally commits. Any exception rolls the transaction
    back and is re-raised. The session is closed in both cases.
    """

    def __init__(self, SessionFactory):
        self.session = SessionFactory()
        self.state = TransactionState.SESSION_OPEN
        self.closed = False

    def begin(self):
        self.session.begin()
        self.state = TransactionState.ACTIVE

    def commit(self):
        logger.debug("Committing ...")
        self.session.commit()
        self.state = TransactionState.COMMITTED

    def rollback(self):
        logger.debug("Rolling back ...")
        self.session.rollback()
        self.state = TransactionState.ROLLED_BACK

    def close(self):
        self.session.close()
        self.closed = True

    def __enter__(self):
        try:
            self.begin()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type is None:
                try:
                    self.commit()
                except Exception:
                    logger.exception("Commit failed")
                    self.rollback()
                    raise
            else:
                logger.error("Unit of work failed", exc_info=(exc_type, exc, tb))
                self.rollback()
        finally:
            self.close()

        return False
