"""Session model carrying the identity sent with every backend request."""

from dataclasses import dataclass

from config import Config


@dataclass(frozen=True)
class Session:
    """Identity context for backend requests.

    Attributes:
        username: User the backend attributes changes to.
        device_type: Client type reported to the backend (e.g., "web").
    """

    username: str
    device_type: str = "web"

    @classmethod
    def from_config(cls, config: Config) -> "Session":
        return cls(username=config.username, device_type=config.device_type)

    def identity(self) -> dict:
        """Request body fields shared by every backend call."""
        return {"deviceType": self.device_type, "username": self.username}
