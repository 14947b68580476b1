"""Print a value for ADMIN_PASSWORD_HASH.

Usage: python scripts/hash_password.py            (prompts for the password)
       python scripts/hash_password.py <password>
"""

from __future__ import annotations

import getpass
import sys

from werkzeug.security import generate_password_hash


def main() -> None:
    if len(sys.argv) > 1:
        password = sys.argv[1]
    else:
        password = getpass.getpass("Admin password: ")
        if password != getpass.getpass("Repeat password: "):
            raise SystemExit("Passwords do not match.")

    if not password:
        raise SystemExit("Password must not be empty.")

    print(generate_password_hash(password))


if __name__ == "__main__":
    main()
