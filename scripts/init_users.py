#!/usr/bin/env python3
"""
Container init hook: grant administrative roles to the MongoDB root user.

Thin launcher so the hook can be mounted as a plain script; the logic lives in
mongo_init.init_users.

Usage:
    python scripts/init_users.py [--verify]
"""

import sys

from mongo_init.init_users import main

if __name__ == "__main__":
    sys.exit(main())
