from __future__ import annotations

import logging
import sys

from apps.cli.commands.check_key import CheckKeyCli
from apps.cli.commands.generate_key import GenerateKeyCli


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = argv if argv is not None else sys.argv[1:]

    # bare invocation generates a key
    if not args:
        return GenerateKeyCli().run([])

    cmd = args[0]
    rest = args[1:]

    if cmd == "generate-key":
        return GenerateKeyCli().run(rest)
    if cmd == "check-key":
        return CheckKeyCli().run(rest)

    print(
        "Usage:\n"
        "  generate-key [--format raw|env|json] [--verify]\n"
        "  check-key [--key-env NAME] [--token TOKEN]\n"
    )
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
