"""
registry.py — Named Encrypter Instances
==========================================
Lets call sites look up a shared Encrypter by name instead of
holding a reference. The registry is an ordinary object: create one
at startup and pass it to whoever needs it.
"""

import logging
import threading
from typing import Dict, List, Optional

from encrypter.core.errors import NoInstanceAvailable
from encrypter.core.interface import EncrypterInterface

logger = logging.getLogger(__name__)

DEFAULT_NAME = "default"


class EncrypterRegistry:
    """
    Holds encrypters by name plus a default.

    The first encrypter registered becomes the default unless a
    default has already been set.
    """

    def __init__(self):
        self._instances: Dict[str, EncrypterInterface] = {}
        self._default: Optional[str] = None
        self._lock = threading.Lock()

    def register(
        self,
        encrypter: EncrypterInterface,
        name: str = DEFAULT_NAME,
        default: bool = False,
    ) -> EncrypterInterface:
        """
        Store an encrypter under a name.

        Args:
            encrypter: Instance to share.
            name: Lookup name; replaces any instance already stored there.
            default: Make this the default even if one exists.

        Returns:
            The registered encrypter, for chaining.
        """
        with self._lock:
            self._instances[name] = encrypter
            if default or self._default is None:
                self._default = name
        logger.info("Registered encrypter %r", name)
        return encrypter

    def get(self, name: Optional[str] = None) -> EncrypterInterface:
        """
        Look up an encrypter; the default when name is omitted.

        Raises:
            NoInstanceAvailable: If nothing is registered under that name.
        """
        with self._lock:
            key = self._default if name is None else name
            if key is None or key not in self._instances:
                raise NoInstanceAvailable(
                    f"Unavailable encrypter instance {key or DEFAULT_NAME!r}"
                )
            return self._instances[key]

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._instances

    def names(self) -> List[str]:
        with self._lock:
            return list(self._instances)

    def clear(self) -> None:
        with self._lock:
            self._instances.clear()
            self._default = None
