"""
Reachability checks for the sshlogins handed to ``parallel -S``.

parallel does the distribution itself; this only tells the user up front
which hosts will refuse the connection.
"""

import os
import re
from dataclasses import dataclass
from typing import List, Optional

from fabric import Connection
from loguru import logger
from paramiko import RSAKey

LOCAL_LOGIN = ":"

# [@group/][ncpus/][user@]host[:port]
_SSHLOGIN_RE = re.compile(
    r"^(?:@[^/]+/)?(?:(?P<ncpus>\d+)/)?(?:(?P<user>[^@\s]+)@)?(?P<host>[^:@\s/]+)(?::(?P<port>\d+))?$"
)


@dataclass
class SSHLogin:
    raw: str
    host: str
    user: Optional[str] = None
    port: Optional[int] = None
    ncpus: Optional[int] = None

    @property
    def is_local(self) -> bool:
        return self.host == LOCAL_LOGIN


def parse_sshlogin(raw: str) -> SSHLogin:
    raw = raw.strip()
    if raw == LOCAL_LOGIN or raw.endswith("/" + LOCAL_LOGIN):
        return SSHLogin(raw=raw, host=LOCAL_LOGIN)

    if " " in raw:
        # full ssh command, e.g. "ssh -p 2222 user@host"
        parts = raw.split()
        port = None
        if "-p" in parts[:-1]:
            port_arg = parts[parts.index("-p") + 1]
            port = int(port_arg) if port_arg.isdigit() else None
        login = parse_sshlogin(parts[-1])
        login.raw = raw
        login.port = port or login.port
        return login

    match = _SSHLOGIN_RE.match(raw)
    if not match:
        raise ValueError(f"Cannot parse sshlogin: {raw!r}")
    return SSHLogin(
        raw=raw,
        host=match.group("host"),
        user=match.group("user"),
        port=int(match.group("port")) if match.group("port") else None,
        ncpus=int(match.group("ncpus")) if match.group("ncpus") else None,
    )


def build_connection(login: SSHLogin, key_path: Optional[str] = None) -> Connection:
    connect_kwargs = {}
    if key_path:
        connect_kwargs["pkey"] = RSAKey.from_private_key_file(os.path.expanduser(key_path))
        connect_kwargs["look_for_keys"] = False

    return Connection(
        host=login.host,
        user=login.user,
        port=login.port,
        connect_kwargs=connect_kwargs,
    )


def check_server(login: SSHLogin, key_path: Optional[str] = None) -> bool:
    if login.is_local:
        return True
    try:
        result = build_connection(login, key_path).run("echo 'Ping successful'", hide=True)
        logger.info(f"[{login.raw}] {result.stdout.strip()}")
    except Exception as e:
        logger.error(f"[{login.raw}] Connection failed: {e}")
        return False
    return True


def check_servers(servers: List[str], key_path: Optional[str] = None) -> List[tuple]:
    """(SSHLogin, reachable) for every server, local entries included"""
    logins = [parse_sshlogin(s) for s in servers]
    return [(login, check_server(login, key_path)) for login in logins]
