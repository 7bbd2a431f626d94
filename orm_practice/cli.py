import logging

from .config import DEFAULT_PROFILE


def add_common_arguments(parser, default_name):
    parser.add_argument("--profile", default=DEFAULT_PROFILE, help="persistence profile to open")
    parser.add_argument("--config", default=None, help="YAML file with persistence profiles")
    parser.add_argument("--name", default=default_name, help="member name to look up")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
