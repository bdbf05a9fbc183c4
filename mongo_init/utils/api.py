"""MongoDB admin client for the init-users hook."""

import logging
from typing import Any, Dict, Iterable, List, NoReturn, Optional

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

logger = logging.getLogger(__name__)

# Server error codes, see https://www.mongodb.com/docs/manual/reference/error-codes/
USER_NOT_FOUND_CODE = 11
UNAUTHORIZED_CODE = 13
AUTHENTICATION_FAILED_CODE = 18


class MongoAPIError(Exception):
    """Base exception for MongoDB admin errors."""

    pass


class MongoConnectionError(MongoAPIError):
    """Exception raised when the MongoDB server cannot be reached."""

    pass


class UserNotFoundError(MongoAPIError):
    """Exception raised when the named user does not exist in the target database."""

    def __init__(self, message: str, username: str, database: str):
        super().__init__(message)
        self.username = username
        self.database = database


class AuthorizationDeniedError(MongoAPIError):
    """Exception raised when the connection lacks privilege for the operation."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class UnexpectedFailureError(MongoAPIError):
    """Exception raised for any other server or driver failure."""

    pass


class MongoAdminClient:
    """Client for user-management commands using the official pymongo driver."""

    def __init__(
        self,
        uri: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        auth_source: str = "admin",
        timeout_ms: int = 5000,
    ):
        """Initialize the MongoDB admin client.

        No network traffic happens here; pymongo connects lazily on the
        first command.

        Args:
            uri: MongoDB connection string (e.g., "mongodb://127.0.0.1:27017")
            username: Optional username to authenticate as
            password: Optional password for username
            auth_source: Database holding the credentials (default: "admin")
            timeout_ms: Server selection timeout in milliseconds (default: 5000)
        """
        self.uri = uri
        self.username = username or None
        self.auth_source = auth_source
        self.timeout_ms = timeout_ms

        kwargs: Dict[str, Any] = {"serverSelectionTimeoutMS": timeout_ms}
        if self.username:
            kwargs.update(username=self.username, password=password, authSource=auth_source)
        self._client: MongoClient = MongoClient(uri, **kwargs)

    def __enter__(self) -> "MongoAdminClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close all pooled connections."""
        self._client.close()

    def ping(self) -> bool:
        """Check that the server answers a ping on the admin database.

        Returns:
            True if the server replied with ok: 1

        Raises:
            MongoConnectionError: If the server is unreachable
            MongoAPIError: If the server rejects the command
        """
        try:
            result = self._client.get_database("admin").command("ping")
        except PyMongoError as e:
            _raise_translated(e, "ping server")
        return bool(result.get("ok"))

    def update_user_roles(
        self, username: str, roles: Iterable[Dict[str, str]], database: str = "admin"
    ) -> None:
        """Replace a user's roles with exactly the given bindings.

        updateUser with a roles field discards the user's previous roles,
        so the supplied list becomes the complete role set.

        Args:
            username: Name of an existing user
            roles: Role documents, each {"role": ..., "db": ...}
            database: Database the user is defined on (default: "admin")

        Raises:
            UserNotFoundError: If the user does not exist on database
            AuthorizationDeniedError: If the connection may not modify users
            MongoConnectionError: If the server is unreachable
            UnexpectedFailureError: For any other driver error
        """
        roles = [dict(binding) for binding in roles]
        logger.debug("updateUser %s@%s roles=%s", username, database, roles)
        try:
            self._client.get_database(database).command("updateUser", username, roles=roles)
        except PyMongoError as e:
            _raise_translated(e, f"update roles for {username}@{database}", username, database)

    def get_user_roles(self, username: str, database: str = "admin") -> List[Dict[str, str]]:
        """Fetch the role bindings a user currently holds.

        Args:
            username: Name of the user
            database: Database the user is defined on (default: "admin")

        Returns:
            List of role documents with "role" and "db" keys

        Raises:
            UserNotFoundError: If the user does not exist on database
            AuthorizationDeniedError: If the connection may not view users
            MongoConnectionError: If the server is unreachable
            UnexpectedFailureError: For any other driver error
        """
        try:
            result = self._client.get_database(database).command(
                "usersInfo", {"user": username, "db": database}
            )
        except PyMongoError as e:
            _raise_translated(e, f"fetch user {username}@{database}", username, database)

        users = result.get("users", [])
        if not users:
            raise UserNotFoundError(f"User {username}@{database} not found", username, database)

        return [{"role": binding["role"], "db": binding["db"]} for binding in users[0].get("roles", [])]


def _raise_translated(
    error: PyMongoError, action: str, username: str = "", database: str = ""
) -> NoReturn:
    """Re-raise a pymongo error as the matching MongoAPIError subclass.

    The driver's message is kept verbatim and the original exception is chained.
    """
    message = str(error)
    logger.debug("Failed to %s: %s", action, message)

    if isinstance(error, ConnectionFailure):
        raise MongoConnectionError(message) from error

    if isinstance(error, OperationFailure):
        if error.code == USER_NOT_FOUND_CODE:
            raise UserNotFoundError(message, username, database) from error
        if error.code in (UNAUTHORIZED_CODE, AUTHENTICATION_FAILED_CODE):
            raise AuthorizationDeniedError(message, error.code) from error

    raise UnexpectedFailureError(message) from error
