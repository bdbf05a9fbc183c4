#!/usr/bin/env python3
"""
Grant full administrative roles to the MongoDB root user.

Runs once when a fresh MongoDB container initializes its data volume. The
image's entrypoint has already created the root user from
MONGO_INITDB_ROOT_USERNAME; this step replaces that user's roles with:

- root                  on admin
- readWriteAnyDatabase  on admin

The update is a full replacement, not a merge: any other roles the user held
are discarded. Running it again leaves the same role set.

Usage:
======
    python -m mongo_init.init_users
    python -m mongo_init.init_users --uri mongodb://mongo:27017 --verify
    uv run invoke init-users

Output:
=======
On success exactly one line is written to stdout:

    MongoDB root user roles updated successfully

Diagnostics go to stderr through logging.

Exit Codes:
===========
    0: Roles updated
    non-zero: Any failure. Errors are not caught, so the driver's message and
              traceback surface unchanged and the container start halts.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console

from mongo_init.roles import ROOT_USER_ROLES, role_set
from mongo_init.utils import config
from mongo_init.utils.api import MongoAdminClient, UnexpectedFailureError

console = Console()
logger = logging.getLogger(__name__)


def update_root_user_roles(
    client: MongoAdminClient,
    username: str = "root",
    database: str = "admin",
    verify: bool = False,
    output: Optional[Console] = None,
) -> None:
    """
    Replace the user's roles with ROOT_USER_ROLES and print a confirmation.

    Args:
        client: Connected MongoAdminClient with privilege to update users
        username: User whose roles are replaced (default: "root")
        database: Database the user is defined on (default: "admin")
        verify: Read the user back and compare roles before confirming
        output: Console for the confirmation line (default: stdout)

    Raises:
        UserNotFoundError: If the user does not exist
        AuthorizationDeniedError: If the connection may not modify users
        MongoConnectionError: If the server is unreachable
        UnexpectedFailureError: For other failures, or a verification mismatch
    """
    logger.info("Updating roles for %s@%s", username, database)
    client.update_user_roles(username, ROOT_USER_ROLES, database=database)

    if verify:
        actual = role_set(client.get_user_roles(username, database=database))
        expected = role_set(ROOT_USER_ROLES)
        if actual != expected:
            raise UnexpectedFailureError(
                f"Roles for {username}@{database} are {sorted(actual)}, expected {sorted(expected)}"
            )
        logger.info("Verified roles for %s@%s: %s", username, database, sorted(actual))

    (output or console).print(
        f"MongoDB {username} user roles updated successfully",
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Grant root and readWriteAnyDatabase to the MongoDB root user"
    )
    parser.add_argument("--uri", default=config.MONGO_URI, help="MongoDB connection string")
    parser.add_argument("--username", default=config.MONGO_USERNAME, help="User to authenticate as")
    parser.add_argument("--password", default=config.MONGO_PASSWORD, help="Password to authenticate with")
    parser.add_argument("--auth-source", default=config.MONGO_AUTH_SOURCE, help="Authentication database")
    parser.add_argument("--target-user", default=config.MONGO_TARGET_USER, help="User whose roles are replaced")
    parser.add_argument("--database", default=config.MONGO_ADMIN_DATABASE, help="Database the target user lives on")
    parser.add_argument("--timeout-ms", type=int, default=config.MONGO_TIMEOUT_MS, help="Server selection timeout")
    parser.add_argument(
        "--log-level", default=config.LOG_LEVEL, choices=config.LOG_LEVELS, type=str.upper, help="Logging level"
    )
    parser.add_argument("--verify", action="store_true", help="Read the roles back after updating")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the role update and return the exit code."""
    args = parse_args(argv)
    config.validate_config(
        uri=args.uri,
        username=args.username,
        password=args.password,
        database=args.database,
        target_user=args.target_user,
        timeout_ms=args.timeout_ms,
        log_level=args.log_level,
    )
    config.setup_logging(args.log_level)

    # The URI may embed credentials, so it is not logged
    logger.info("Connecting to MongoDB as %s (auth source: %s)", args.username or "<anonymous>", args.auth_source)
    with MongoAdminClient(
        args.uri,
        username=args.username,
        password=args.password,
        auth_source=args.auth_source,
        timeout_ms=args.timeout_ms,
    ) as client:
        client.ping()
        logger.debug("Server answered ping")
        update_root_user_roles(client, username=args.target_user, database=args.database, verify=args.verify)

    return 0


if __name__ == "__main__":
    sys.exit(main())
