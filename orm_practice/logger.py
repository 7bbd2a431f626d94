import logging

logger = logging.getLogger("orm_practice")
