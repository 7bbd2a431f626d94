from sqlalchemy import func, select

from .base.entity import Member
from .base.query import EntityQuery
from .logger import logger


def insert_member(session, member):
    """
    Insert ``member`` and return the identifier assigned by the database.
    """
    session.add(member)
    session.flush()

    logger.debug(f"Inserted {member}")
    return member.id


def find_by_name(session, name):
    return EntityQuery(session).select_from(Member).where(Member.name == name).fetch_one()


def count_members(session):
    return session.scalar(select(func.count()).select_from(Member))
