import logging
from contextlib import contextmanager

from pymongo.errors import PyMongoError

from app.core.errors import StorageFailure

logger = logging.getLogger("assignment.repository")


@contextmanager
def storage_errors(operation: str):
    """Traduce gli errori del driver in StorageFailure, loggando il dettaglio."""
    try:
        yield
    except PyMongoError:
        logger.exception("Operazione Mongo fallita: %s", operation)
        raise StorageFailure()
