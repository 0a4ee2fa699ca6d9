from __future__ import annotations

import argparse
import logging
import os
from typing import Mapping, Sequence

from stocktracker.contexts.identity.adapters.outbound.security.credential_cipher import (
    ENCRYPTION_KEY_ENV,
    AesGcmCredentialCipher,
    EnvironmentCredentialKeySource,
)
from stocktracker.contexts.identity.application.ports.credential_cipher import (
    CredentialCipherError,
)

log = logging.getLogger(__name__)


class CheckKeyCli:
    """
    CheckKeyCli — validate configured key material and, optionally, one stored token.

    Exit codes: 0 ok, 1 key missing or malformed, 2 token rejected.
    """

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def run(self, argv: Sequence[str]) -> int:
        ns = _build_parser().parse_args(list(argv))
        key_source = EnvironmentCredentialKeySource(environ=self._environ, key_name=ns.key_env)

        try:
            key_source.load()
        except CredentialCipherError as error:
            log.warning("key check failed: env=%s code=%s", ns.key_env, error.code)
            print(f"{ns.key_env}: {error.message}")
            return 1

        if ns.token:
            cipher = AesGcmCredentialCipher(key_source=key_source)
            try:
                cipher.decrypt(token=ns.token)
            except CredentialCipherError as error:
                # plaintext is never printed, only the failure category
                log.warning("token check failed: code=%s", error.code)
                print(f"token rejected: {error.code}")
                return 2
            print("token ok")

        print(f"{ns.key_env}: ok")
        return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="check-key")
    p.add_argument(
        "--key-env",
        default=ENCRYPTION_KEY_ENV,
        help=f"Environment variable holding key material (default: {ENCRYPTION_KEY_ENV})",
    )
    p.add_argument(
        "--token",
        default="",
        help="Stored iv:salt:authTag:ciphertext token to verify against the key",
    )
    return p
