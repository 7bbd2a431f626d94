import argparse
import sys

from .base.session import create_persistence_unit
from . import cli
from .errors import OrmPracticeError
from .logger import logger
from .members import find_by_name

DEFAULT_NAME = "111"


def lookup(unit, name=DEFAULT_NAME):
    """
    Look up the member called ``name`` and print it. Nothing is written; the
    final commit is a no-op.
    """
    try:
        with unit.unit_of_work() as uow:
            found = find_by_name(uow.session, name)
            print(found)
    except Exception:
        logger.warning("Lookup failed, transaction rolled back")
        return None

    return found


def main(argv=None):
    parser = argparse.ArgumentParser(description="Look up a member by name")
    cli.add_common_arguments(parser, default_name=DEFAULT_NAME)
    args = parser.parse_args(argv)

    cli.configure_logging(args.verbose)

    try:
        unit = create_persistence_unit(args.profile, args.config)
    except OrmPracticeError as e:
        parser.error(str(e))

    with unit:
        lookup(unit, args.name)

    return 0


if __name__ == "__main__":
    sys.exit(main())
