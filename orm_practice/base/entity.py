from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements an "INTEGER PRIMARY KEY" column
IdentityType = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    pass


class Member(Base):
    __tablename__ = "member"

    id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    nick_name: Mapped[Optional[str]] = mapped_column(String(255))
    age: Mapped[Optional[int]] = mapped_column(Integer)

    def __init__(self, name=None, nick_name=None, age=None):
        """
        ``Member()`` is what the ORM uses when loading rows; application code
        passes the name, and optionally the nick name and age. The identifier
        is always assigned by the database on insert.
        """
        super().__init__()
        self.name = name
        self.nick_name = nick_name
        self.age = age

    def __repr__(self):
        return f"Member [id={self.id}, name={self.name}]"

    __str__ = __repr__
