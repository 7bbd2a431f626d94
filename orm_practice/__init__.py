from .base.entity import Base, Member
from .base.query import EntityQuery
from .base.session import PersistenceUnit, UnitOfWork, TransactionState, create_persistence_unit
from .members import insert_member, find_by_name, count_members
from .save import seed_and_query, SEED_MEMBERS
from .lookup import lookup

__all__ = [
    "Base",
    "Member",
    "EntityQuery",
    "PersistenceUnit",
    "UnitOfWork",
    "TransactionState",
    "create_persistence_unit",
    "insert_member",
    "find_by_name",
    "count_members",
    "seed_and_query",
    "SEED_MEMBERS",
    "lookup",
]

__version__ = '0.1.0'
