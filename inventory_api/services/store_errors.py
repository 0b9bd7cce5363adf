import logging
from contextlib import contextmanager

from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.orm import Session

from inventory_api.core.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(db: Session, action: str):
    """Surface connection-level store failures as ``UpstreamUnavailable``."""
    try:
        yield
    except (OperationalError, DisconnectionError) as exc:
        db.rollback()
        logger.exception("Data store unavailable while %s", action)
        raise UpstreamUnavailable() from exc
