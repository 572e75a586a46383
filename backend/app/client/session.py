"""
app/client/session.py - Signed-in state of a checkout terminal.

The token and user are explicit state owned by a `Session` object:
- `Session.load(path)` hydrates from the JSON session file at startup
  (missing or unreadable file -> signed out),
- `set_credentials(...)` updates memory and the file together,
- `logout()` clears both and runs the registered teardown hooks
  (e.g. `PosApiClient.reset_cache`, so no server data outlives the session).
"""
import json
import logging
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, ValidationError

from app.config import settings

logger = logging.getLogger("pos.session")


class SessionUser(BaseModel):
    id: str
    name: str = ""
    email: str = ""


class Session:
    def __init__(self, path: Path, token: Optional[str] = None, user: Optional[SessionUser] = None):
        self.path = Path(path)
        self.token = token
        self.user = user
        self._teardown_hooks: List[Callable[[], None]] = []

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Session":
        session_path = Path(path or settings.session_file)
        try:
            raw = json.loads(session_path.read_text(encoding="utf-8"))
            token = raw.get("token") or None
            user = SessionUser(**raw["user"]) if raw.get("user") else None
        except FileNotFoundError:
            return cls(session_path)
        except (OSError, ValueError, AttributeError, TypeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", session_path, exc)
            return cls(session_path)
        return cls(session_path, token=token, user=user)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def on_logout(self, hook: Callable[[], None]) -> None:
        self._teardown_hooks.append(hook)

    def set_credentials(self, token: str, user_id: str, name: str = "", email: str = "") -> None:
        self.token = token
        self.user = SessionUser(id=user_id, name=name, email=email)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": token, "user": self.user.model_dump()}),
            encoding="utf-8",
        )
        logger.info("Signed in as %s", user_id)

    def logout(self) -> None:
        self.token = None
        self.user = None
        self.path.unlink(missing_ok=True)
        for hook in self._teardown_hooks:
            hook()
        logger.info("Signed out")
