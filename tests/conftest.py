"""Shared fixtures: an in-memory stand-in for the admin database's user commands."""

from typing import Any, Dict, Iterator, List, Optional
from unittest.mock import Mock, patch

import pytest
from pymongo.errors import OperationFailure

from mongo_init.utils.api import MongoAdminClient


class FakeUserDatabase:
    """Answers ping, updateUser and usersInfo the way mongod does for a single database."""

    def __init__(
        self,
        name: str = "admin",
        users: Optional[Dict[str, List[Dict[str, str]]]] = None,
        can_update: bool = True,
    ):
        self.name = name
        self.users = users if users is not None else {}
        self.can_update = can_update
        self.commands: List[tuple] = []

    def command(self, name: str, value: Any = 1, **kwargs: Any) -> Dict[str, Any]:
        self.commands.append((name, value, kwargs))

        if name == "ping":
            return {"ok": 1.0}

        if name == "updateUser":
            if not self.can_update:
                raise OperationFailure(
                    f"not authorized on {self.name} to execute command {{ updateUser: \"{value}\" }}", code=13
                )
            if value not in self.users:
                raise OperationFailure(f"Could not find user \"{value}\" for db \"{self.name}\"", code=11)
            if "roles" in kwargs:
                self.users[value] = [dict(binding) for binding in kwargs["roles"]]
            return {"ok": 1.0}

        if name == "usersInfo":
            username = value["user"]
            if username not in self.users:
                return {"users": [], "ok": 1.0}
            # mongod does not preserve role order
            roles = list(reversed(self.users[username]))
            return {
                "users": [{"_id": f"{self.name}.{username}", "user": username, "db": self.name, "roles": roles}],
                "ok": 1.0,
            }

        raise OperationFailure(f"no such command: '{name}'", code=59)


@pytest.fixture
def admin_db() -> FakeUserDatabase:
    """Admin database holding a root user with no roles."""
    return FakeUserDatabase(users={"root": []})


@pytest.fixture
def mock_mongo_client(admin_db: FakeUserDatabase) -> Iterator[Mock]:
    with patch("mongo_init.utils.api.MongoClient") as mock_sdk:
        mock_client_instance = Mock()
        mock_client_instance.get_database.return_value = admin_db
        mock_sdk.return_value = mock_client_instance
        yield mock_sdk


@pytest.fixture
def admin_client(mock_mongo_client: Mock) -> MongoAdminClient:
    return MongoAdminClient("mongodb://127.0.0.1:27017")
