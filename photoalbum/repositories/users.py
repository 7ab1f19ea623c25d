import logging
from typing import Any, Dict, List, Optional

from photoalbum.errors import Conflict, ValidationError
from photoalbum.repositories.base import Record, Repository, next_id, utc_now_iso
from photoalbum.utils.security import hash_password, verify_password


logger = logging.getLogger(__name__)


def strip_password(user: Record) -> Record:
    return {k: v for k, v in user.items() if k != "password"}


class UserRepository(Repository):
    collection = "users"
    label = "User"

    def _present(self, record: Record) -> Record:
        return strip_password(record)

    def list(self, email: Optional[str] = None) -> List[Record]:
        if email is None:
            return super().list()
        return super().list(lambda u: u.get("email") == email)

    def get_by_email(self, email: str) -> Optional[Record]:
        matches = self.list(email=email)
        return matches[0] if matches else None

    def create(self, data: Dict[str, Any]) -> Record:
        email = data.get("email")
        password = data.get("password")
        if not email or not password:
            raise ValidationError("Email and password are required")
        with self.store.transaction() as document:
            users = document["users"]
            if any(u.get("email") == email for u in users):
                raise Conflict("User with this email already exists")
            user = {
                "id": next_id(users),
                "username": data.get("username"),
                "email": email,
                "password": hash_password(password),
                "createdAt": utc_now_iso(),
            }
            users.append(user)
        logger.info("Created user %s", user["id"])
        return strip_password(user)

    def verify_credentials(self, email: str, password: str) -> Optional[Record]:
        document = self.store.read()
        for user in document["users"]:
            if user.get("email") == email:
                if verify_password(password, user.get("password", "")):
                    return strip_password(user)
                return None
        return None
