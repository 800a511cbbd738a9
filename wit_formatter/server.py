"""WIT formatting service.

Run:
  python -m wit_formatter.server
Then POST documents to:
  http://127.0.0.1:18081/api/v1/format
"""

from __future__ import annotations

import argparse
import sys

import uvicorn

from wit_formatter.env import env_int, env_str


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wit_formatter.server", add_help=True)
    parser.add_argument(
        "--host",
        default=env_str("WIT_FORMATTER_HOST", "127.0.0.1"),
        help="Bind host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=env_int("WIT_FORMATTER_PORT", 18081),
        help="Bind port (default: 18081)",
    )
    parser.add_argument(
        "--log-level",
        default=env_str("WIT_FORMATTER_LOG_LEVEL", "info").lower(),
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="uvicorn log level (default: info)",
    )
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes (development only)")

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    uvicorn.run(
        "wit_formatter.api:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=bool(args.reload),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
