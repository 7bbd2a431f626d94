"""
Persistence profiles.

A profile names a database and how to open it. Resolution order for the
profile table:

1) the built-in ``main`` profile (a SQLite file in the working directory)
2) profiles read from a YAML file: explicit path, else ``$ORM_PRACTICE_CONFIG``,
   else ``persistence.yaml`` in the working directory if present
3) ``$ORM_PRACTICE_URL`` overrides the url of the selected profile

Example file::

    profiles:
      main:
        url: postgresql+psycopg://app@localhost/members
        echo: true
      test:
        url: "sqlite://"
"""
from typing import Dict, Optional
import os

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .errors import ProfileNotFoundError, OrmPracticeError
from .logger import logger

CONFIG_ENV = "ORM_PRACTICE_CONFIG"
URL_ENV = "ORM_PRACTICE_URL"
DEFAULT_CONFIG_FILE = "persistence.yaml"
DEFAULT_PROFILE = "main"


class PersistenceProfile(BaseModel):
    """A named database and how to open it."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = Field(description="SQLAlchemy database URL.")
    echo: bool = Field(default=False, description="Log emitted SQL.")
    create_schema: bool = Field(default=True, description="Create missing tables when the unit opens.")

    @property
    def is_memory_sqlite(self):
        try:
            url = make_url(self.url)
        except ArgumentError:
            return False

        return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class ProfileEntry(BaseModel):
    """One entry of the ``profiles`` mapping; unset fields keep the built-in value."""

    model_config = ConfigDict(extra="forbid")

    url: Optional[str] = None
    echo: Optional[bool] = None
    create_schema: Optional[bool] = None


class ProfilesFile(BaseModel):
    profiles: Dict[str, Optional[ProfileEntry]] = Field(default_factory=dict)


BUILTIN_PROFILES = {
    DEFAULT_PROFILE: PersistenceProfile(name=DEFAULT_PROFILE, url="sqlite:///orm_practice.db"),
}


def _config_path(path=None):
    if path:
        return path

    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return env_path

    if os.path.exists(DEFAULT_CONFIG_FILE):
        return DEFAULT_CONFIG_FILE

    return None


def _read_profiles_file(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise OrmPracticeError(f"Cannot read persistence profiles from '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise OrmPracticeError(f"Invalid YAML in '{path}': {e}") from e

    try:
        return ProfilesFile.model_validate(data or {})
    except ValidationError as e:
        raise OrmPracticeError(f"Invalid persistence profiles in '{path}': {e}") from e


def read_profiles(path=None):
    """
    Return the profile table: built-in profiles updated with the ones read
    from the YAML file, if any.
    """
    profiles = dict(BUILTIN_PROFILES)

    path = _config_path(path)
    if path is None:
        return profiles

    logger.debug(f"Reading persistence profiles from '{path}'")
    config = _read_profiles_file(path)

    for name, entry in config.profiles.items():
        values = entry.model_dump(exclude_none=True) if entry else {}
        base = profiles.get(name)

        if base is not None:
            profiles[name] = base.model_copy(update=values)
            continue

        if "url" not in values:
            raise OrmPracticeError(f"Profile '{name}' in '{path}' has no url")

        profiles[name] = PersistenceProfile(name=name, **values)

    return profiles


def load_profile(name=DEFAULT_PROFILE, path=None):
    profiles = read_profiles(path)

    if name not in profiles:
        raise ProfileNotFoundError(name, sorted(profiles))

    profile = profiles[name]

    url = os.environ.get(URL_ENV)
    if url:
        logger.debug(f"Overriding url of profile '{name}' from ${URL_ENV}")
        profile = profile.model_copy(update={"url": url})

    return profile
