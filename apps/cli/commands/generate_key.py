from __future__ import annotations

import argparse
import json
import logging
from typing import Sequence

from stocktracker.contexts.identity.adapters.outbound.security.credential_cipher import (
    ENCRYPTION_KEY_ENV,
    AesGcmCredentialCipher,
    StaticCredentialKeySource,
    generate_key_material,
)
from stocktracker.contexts.identity.domain.value_objects import EncryptionKeyMaterial

log = logging.getLogger(__name__)

_VERIFY_PROBE = "stocktracker-key-probe"


class GenerateKeyCli:
    """
    GenerateKeyCli — print fresh `ENCRYPTION_KEY` material, optionally proving it round-trips.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        aes_gcm_credential_cipher.py
      - apps/cli/main/main.py
    """

    def run(self, argv: Sequence[str]) -> int:
        ns = _build_parser().parse_args(list(argv))
        key_hex = generate_key_material()

        if ns.verify:
            cipher = AesGcmCredentialCipher(
                key_source=StaticCredentialKeySource(
                    key_material=EncryptionKeyMaterial.from_hex(key_hex),
                )
            )
            if cipher.decrypt(token=cipher.encrypt(plaintext=_VERIFY_PROBE)) != _VERIFY_PROBE:
                log.error("generated key failed round-trip verification")
                return 1
            log.info("generated key verified")

        if ns.format == "json":
            print(json.dumps({"env": ENCRYPTION_KEY_ENV, "key": key_hex}))
        elif ns.format == "env":
            print(f"{ENCRYPTION_KEY_ENV}={key_hex}")
        else:
            print(key_hex)
        return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="generate-key")
    p.add_argument(
        "--format",
        choices=("raw", "env", "json"),
        default="raw",
        help="Output format (default: raw 64-char hex)",
    )
    p.add_argument(
        "--verify",
        action="store_true",
        help="Encrypt and decrypt a probe value with the new key before printing it",
    )
    return p
