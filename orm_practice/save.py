import argparse
import sys

from .base.entity import Member
from .base.session import create_persistence_unit
from . import cli
from .errors import OrmPracticeError
from .logger import logger
from .lookup import lookup
from .members import insert_member

# (name, nick name, age)
SEED_MEMBERS = [
    ("을지문덕", "문덕", 47),
    ("감강찬", "감찬", 50),
    ("잔다르크", "다라", 18),
    ("마리 앙투아네트", "마리", 18),
]

DEFAULT_NAME = "잔다르크"


def seed_and_query(unit, name=DEFAULT_NAME, members=None):
    """
    Insert the seed members in one transaction and commit, then look up the
    member called ``name`` in a second one.

    Returns the member found, or ``None`` if there is no match, if the seed
    transaction was rolled back, or if the lookup failed. A failed lookup
    leaves the committed seed in place.
    """
    if members is None:
        members = [Member(*values) for values in SEED_MEMBERS]

    try:
        with unit.unit_of_work() as uow:
            for member in members:
                insert_member(uow.session, member)

            uow.session.flush()
    except Exception:
        logger.warning("Seeding failed, transaction rolled back")
        return None

    return lookup(unit, name)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Insert the seed members and look one up by name")
    cli.add_common_arguments(parser, default_name=DEFAULT_NAME)
    args = parser.parse_args(argv)

    cli.configure_logging(args.verbose)

    try:
        unit = create_persistence_unit(args.profile, args.config)
    except OrmPracticeError as e:
        parser.error(str(e))

    with unit:
        seed_and_query(unit, args.name)

    return 0


if __name__ == "__main__":
    sys.exit(main())
