"""Base services container for dependency injection."""

from config import Config
from models.session import Session


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a fake backend for testing.

    Args:
        config: Application configuration object.
        backend: Optional category backend for testing. If provided, the
                 configured URL is ignored.
        session: Optional identity override. Defaults to the configured one.
    """

    def __init__(self, config: Config, backend=None, session: Session = None):
        # Lazy import to avoid circular dependencies
        from api.factory import get_backend
        from services.forms import FormController
        from services.store import CategoryStore
        from services.sync import SyncClient

        self.config = config
        self.session = session or Session.from_config(config)
        self.backend = backend or get_backend(config, self.session)

        self.store = CategoryStore()
        self.sync = SyncClient(self.backend, self.store, self.session)
        self.forms = FormController(self.sync)

    def close(self) -> None:
        close = getattr(self.backend, "close", None)
        if close is not None:
            close()
