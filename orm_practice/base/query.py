from sqlalchemy import func, select, inspect
from sqlalchemy.exc import MultipleResultsFound

from ..errors import OrmPracticeError, UnknownFieldError, NonUniqueResultError
from ..logger import logger


class EntityQuery:
    """
    Small query builder over ``select()``, bound to a session.

    Usage::

        EntityQuery(session).select_from(Member).where(Member.name == "foo").fetch_one()
        EntityQuery(session).select_from(Member).where_eq("name", "foo").fetch_one()

    Field names given as strings are checked against the entity mapping when
    the condition is added, so a typo fails before any SQL is emitted.
    """

    def __init__(self, session, entity=None):
        self.session = session
        self._entity = None
        self._criteria = []
        self._order_by = []
        self._limit = None

        if entity is not None:
            self.select_from(entity)

    @property
    def entity(self):
        if self._entity is None:
            raise OrmPracticeError("No entity selected, call select_from() first")
        return self._entity

    def select_from(self, entity):
        self._entity = entity
        return self

    def _column(self, field):
        columns = inspect(self.entity).column_attrs
        if field not in columns:
            raise UnknownFieldError(self.entity, field)

        return getattr(self.entity, field)

    def where(self, *criteria):
        self._criteria.extend(criteria)
        return self

    def where_eq(self, field, value):
        self._criteria.append(self._column(field) == value)
        return self

    def filter_by(self, **fields):
        for field, value in fields.items():
            self.where_eq(field, value)
        return self

    def order_by(self, *clauses):
        for clause in clauses:
            if isinstance(clause, str):
                clause = self._column(clause)
            self._order_by.append(clause)
        return self

    def limit(self, count):
        self._limit = count
        return self

    @property
    def statement(self):
        stmt = select(self.entity)

        if self._criteria:
            stmt = stmt.where(*self._criteria)

        if self._order_by:
            stmt = stmt.order_by(*self._order_by)

        if self._limit is not None:
            stmt = stmt.limit(self._limit)

        return stmt

    def fetch(self):
        return self.session.scalars(self.statement).all()

    def fetch_one(self):
        """
        Return the single matching instance, or ``None`` if nothing matches.
        Raises ``NonUniqueResultError`` if several rows match.
        """
        stmt = self.statement
        logger.debug(f"Fetching one {self.entity.__name__}: {stmt}")

        try:
            return self.session.scalars(stmt).one_or_none()
        except MultipleResultsFound as e:
            raise NonUniqueResultError(
                f"Expected at most one {self.entity.__name__}, query returned several"
            ) from e

    def fetch_first(self):
        return self.session.scalars(self.statement.limit(1)).first()

    def fetch_count(self):
        stmt = select(func.count()).select_from(self.entity)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        return self.session.scalar(stmt)
