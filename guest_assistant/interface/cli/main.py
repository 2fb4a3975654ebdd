"""guest-assistant command line: ingest | ask | serve."""

import sys

from guest_assistant.interface.cli import ask, ingest, serve

COMMANDS = {
    "ingest": ingest.main,
    "ask": ask.main,
    "serve": serve.main,
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ("-h", "--help") or argv[0] not in COMMANDS:
        print("usage: guest-assistant {ingest,ask,serve} [options]")
        return 0 if argv and argv[0] in ("-h", "--help") else 2
    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
