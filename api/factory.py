"""Factory for creating backend client instances."""

from config import Config
from api.client import CategoryBackend
from models.session import Session
from logger import get_logger

logger = get_logger()


def get_backend(config: Config, session: Session) -> CategoryBackend:
    """Create a category backend client based on configuration.

    Args:
        config: Application configuration.
        session: Identity to send with every request.

    Returns:
        CategoryBackend pointed at the configured URL.

    Raises:
        ValueError: If no backend URL is configured.
    """
    if not config.base_url:
        raise ValueError("No backend base_url configured")

    logger.debug(
        f"Using category backend at {config.base_url} as '{session.username}'"
    )
    return CategoryBackend(config.base_url, session, timeout=config.timeout)
