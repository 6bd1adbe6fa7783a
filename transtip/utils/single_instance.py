"""
Single instance lock for TransTip.
Global hotkeys can only be registered by one running copy.
"""
import socket
from typing import Tuple, Optional

from transtip.constants import LOCK_PORT


def is_already_running(port: int = LOCK_PORT) -> Tuple[bool, Optional[socket.socket]]:
    """Try to bind the lock port on localhost.

    Returns:
        (True, None) if another instance holds the port, otherwise
        (False, socket) where the caller keeps the socket open until exit.
    """
    lock_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        lock_socket.bind(('127.0.0.1', port))
        lock_socket.listen(1)
        return False, lock_socket
    except OSError:
        lock_socket.close()
        return True, None
