"""Role bindings granted to the administrative account on first start."""

from typing import Final, Iterable

# Full replacement: whatever is listed here becomes the user's complete role set
ROOT_USER_ROLES: Final[list[dict[str, str]]] = [
    {"role": "root", "db": "admin"},
    {"role": "readWriteAnyDatabase", "db": "admin"},
]


def role_set(roles: Iterable[dict[str, str]]) -> set[tuple[str, str]]:
    """
    Collapse role binding documents into a set of (role, db) pairs.

    MongoDB does not guarantee the order of roles returned by usersInfo,
    so comparisons between what was requested and what the server holds
    go through this set.

    Args:
        roles: Role documents with "role" and "db" keys

    Returns:
        Set of (role, db) tuples

    Example:
        >>> role_set([{"role": "root", "db": "admin"}])
        {('root', 'admin')}
    """
    return {(binding["role"], binding["db"]) for binding in roles}
