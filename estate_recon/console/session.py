"""
Operator session for the reconciliation console.

Holds the login token, the operator's role and the menus the
role may open. The session is an explicit object handed to
whoever needs it; it is persisted to a JSON file with load(),
save() and clear().
"""

import json
import logging
from pathlib import Path

from pydantic import Field, ValidationError

from estate_recon.config import get_settings
from estate_recon.schemas.base import CamelModel

logger = logging.getLogger(__name__)


class MenuAccess(CamelModel):
    name: str
    permissions: list[str] = Field(default_factory=list)


class SessionState(CamelModel):
    """What the login endpoint returns and what gets persisted."""
    token: str | None = None
    username: str | None = None
    role: str | None = None
    menus: list[MenuAccess] = Field(default_factory=list)
    estate_id: int | None = None


class ConsoleSession:

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path or get_settings().SESSION_FILE)
        self.state = SessionState()

    @property
    def token(self) -> str | None:
        return self.state.token

    @property
    def is_authenticated(self) -> bool:
        return bool(self.state.token)

    def has_permission(self, menu: str, permission: str) -> bool:
        """Whether the operator's role grants `permission` on `menu`."""
        for access in self.state.menus:
            if access.name == menu:
                return permission in access.permissions
        return False

    def auth_headers(self) -> dict[str, str]:
        if not self.state.token:
            return {}
        return {"Authorization": f"Bearer {self.state.token}"}

    def update(self, data: dict) -> None:
        """Replace the session state with a login response payload."""
        self.state = SessionState.model_validate(data)

    def load(self) -> "ConsoleSession":
        """
        Read the persisted session, if any.

        A missing or unreadable file leaves the session signed out.
        """
        if not self.path.exists():
            return self
        try:
            self.state = SessionState.model_validate_json(self.path.read_text())
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            self.state = SessionState()
        return self

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self.state.model_dump(mode="json", by_alias=True))
        )

    def clear(self) -> None:
        """Sign out: forget the state and remove the persisted file."""
        self.state = SessionState()
        self.path.unlink(missing_ok=True)
