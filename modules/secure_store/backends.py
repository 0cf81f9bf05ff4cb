"""
Secret backend implementations.

InMemorySecretBackend keeps secrets for the life of the process and is the
default; EncryptedFileSecretBackend persists them with Fernet symmetric
encryption (AES-128-CBC with HMAC-SHA256) under a local directory.
"""

import hashlib
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from .interfaces import ISecretBackend
from .exceptions import InvalidStorageKeyError, SecureStorageError

logger = logging.getLogger(__name__)

_ACCOUNT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_RECORD_SUFFIX = ".secret"


def _check_account(account: str) -> None:
    if not _ACCOUNT_PATTERN.match(account) or account in (".", ".."):
        raise InvalidStorageKeyError(account)


def _check_service(service: str) -> None:
    if not service:
        raise InvalidStorageKeyError(service)


class InMemorySecretBackend(ISecretBackend):
    """
    Process-local secret storage.

    One instance models one device keychain; several SecureStores on
    different namespaces may share it.
    """

    def __init__(self):
        self._items: dict[tuple[str, str], bytes] = {}

    def write(self, service: str, account: str, data: bytes) -> None:
        _check_service(service)
        _check_account(account)
        self._items[(service, account)] = bytes(data)

    def read(self, service: str, account: str) -> Optional[bytes]:
        _check_service(service)
        _check_account(account)
        return self._items.get((service, account))

    def remove(self, service: str, account: str) -> bool:
        _check_service(service)
        _check_account(account)
        return self._items.pop((service, account), None) is not None

    def remove_service(self, service: str) -> int:
        _check_service(service)
        keys = [key for key in self._items if key[0] == service]
        for key in keys:
            del self._items[key]
        return len(keys)

    def accounts(self, service: str) -> list[str]:
        """List account names stored under a service."""
        return sorted(account for svc, account in self._items if svc == service)


class EncryptedFileSecretBackend(ISecretBackend):
    """
    Fernet-encrypted secrets on disk.

    Layout: ``<root>/<digest of service>/<account>.secret``. The service
    directory name is a digest so a namespace can never address a path
    outside its own directory. Each plaintext is prefixed with its
    (service, account) pair, so a file copied into another namespace fails
    to decrypt instead of being silently accepted.

    Changing the key makes every existing record unreadable: reads raise
    SecureStorageError("decrypt_failed"), so a stored session restores to
    Error(STORAGE_ERROR) until the user logs out or logs in again, which
    overwrites or wipes the records.
    """

    def __init__(self, root: Path, key: str):
        if not key:
            raise SecureStorageError(
                "missing_encryption_key",
                "SECURE_STORE_KEY is required for the file backend. "
                "Generate one with Fernet.generate_key()",
            )
        try:
            self._fernet = Fernet(key.encode("utf-8"))
        except ValueError as e:
            raise SecureStorageError("invalid_encryption_key", f"Invalid Fernet key: {e}")
        self._root = Path(root)

    def _service_dir(self, service: str) -> Path:
        _check_service(service)
        digest = hashlib.sha256(service.encode("utf-8")).hexdigest()[:32]
        return self._root / digest

    def _record_path(self, service: str, account: str) -> Path:
        _check_account(account)
        return self._service_dir(service) / f"{account}{_RECORD_SUFFIX}"

    @staticmethod
    def _binding(service: str, account: str) -> bytes:
        return f"{service}\x00{account}\x00".encode("utf-8")

    def write(self, service: str, account: str, data: bytes) -> None:
        path = self._record_path(service, account)
        token = self._fernet.encrypt(self._binding(service, account) + data)
        try:
            path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(token)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SecureStorageError("io_error", f"Failed to write secret: {e}", key=account)

    def read(self, service: str, account: str) -> Optional[bytes]:
        path = self._record_path(service, account)
        try:
            token = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SecureStorageError("io_error", f"Failed to read secret: {e}", key=account)

        try:
            plaintext = self._fernet.decrypt(token)
        except InvalidToken:
            raise SecureStorageError("decrypt_failed", key=account)

        binding = self._binding(service, account)
        if not plaintext.startswith(binding):
            raise SecureStorageError("decrypt_failed", key=account)
        return plaintext[len(binding):]

    def remove(self, service: str, account: str) -> bool:
        path = self._record_path(service, account)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SecureStorageError("io_error", f"Failed to delete secret: {e}", key=account)

    def remove_service(self, service: str) -> int:
        directory = self._service_dir(service)
        if not directory.exists():
            return 0
        count = len(list(directory.glob(f"*{_RECORD_SUFFIX}")))
        try:
            shutil.rmtree(directory)
        except OSError as e:
            raise SecureStorageError("io_error", f"Failed to delete secrets: {e}")
        logger.debug(f"Removed {count} secret(s) from namespace directory {directory.name}")
        return count
