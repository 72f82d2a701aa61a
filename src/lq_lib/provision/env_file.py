# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Editing of Laravel `.env` files.
"""

import re

# Used when the project ships neither `.env` nor `.env.example`.
BASIC_ENV = """\
APP_NAME=Laravel
APP_ENV=production
APP_KEY=
APP_DEBUG=false
APP_URL=http://localhost

LOG_CHANNEL=stack
LOG_LEVEL=debug

BROADCAST_DRIVER=log
CACHE_DRIVER=file
FILESYSTEM_DISK=local
QUEUE_CONNECTION=database
SESSION_DRIVER=file
SESSION_LIFETIME=120

REDIS_HOST=127.0.0.1
REDIS_PASSWORD=null
REDIS_PORT=6379
"""


def set_env_values(content: str, values: dict[str, str]) -> str:
    """
    Set variables in the content of an `.env` file.

    Existing assignments are replaced in place,
    variables that are not assigned yet are appended at the end.

    Args:
        content (str): Content of the `.env` file.
        values (dict[str, str]): Variables to set.

    Returns:
        str: The updated content.
    """
    lines = content.splitlines()
    missing = dict(values)

    for i, line in enumerate(lines):
        match = re.match(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=", line)
        if not match or match.group(1) not in missing:
            continue

        key = match.group(1)
        lines[i] = f"{key}={missing.pop(key)}"

    if missing and lines and lines[-1].strip():
        lines.append("")
    lines.extend(f"{key}={value}" for key, value in missing.items())

    return "\n".join(lines) + "\n"


def get_env_value(content: str, key: str) -> str | None:
    """
    Return the value assigned to a variable in the content of an `.env` file.

    Returns:
        str | None: The value, or None if the variable is not assigned.
    """
    for line in content.splitlines():
        match = re.match(rf"^\s*{re.escape(key)}\s*=(.*)$", line)
        if match:
            return match.group(1).strip()

    return None
