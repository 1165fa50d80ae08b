#!/usr/bin/env python3
"""
Trello tool gateway - board allow-list enforcement in front of Trello operations.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)


def bootstrap(env_pairs: Optional[List[str]] = None) -> None:
    """Load configuration (env + `--env` overrides) and the board policy once at startup."""
    from trellogate.authz.policy import load_board_policy_from_config, set_board_policy
    from trellogate.config import load_config, parse_env_pairs, set_config

    cfg = load_config(parse_env_pairs(env_pairs or []))
    logging.getLogger().setLevel(getattr(logging, cfg.log_level.upper(), logging.INFO))
    set_config(cfg)
    set_board_policy(load_board_policy_from_config(cfg))


def list_tools() -> None:
    from trellogate.tools.registry import describe_tools

    for t in describe_tools():
        print(f"{t['name']:<22} {t['description']}")


def call_tool(name: str, raw_args: str) -> int:
    from trellogate.tools.registry import run_tool

    try:
        args = json.loads(raw_args or "{}")
    except json.JSONDecodeError as e:
        print(f"Invalid --args JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(args, dict):
        print("--args must be a JSON object", file=sys.stderr)
        return 2

    res = run_tool(name, args)
    out = {"ok": res.ok, "result": res.result} if res.ok else {"ok": False, "error": res.error, "errorKind": res.error_kind}
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0 if res.ok else 1


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run access-controlled Trello tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List available tools
  python main.py --list-tools

  # Run one tool
  python main.py --tool get_card --args '{"cardId": "5f1e..."}'

  # Serve tools over HTTP, overriding an env var
  python main.py --serve --env TRELLO_ALLOWED_BOARDS_KEY=work
        """,
    )
    parser.add_argument(
        "--env",
        action="append",
        metavar="KEY=VALUE",
        default=[],
        help="Override an environment variable (repeatable, takes precedence over the environment)",
    )
    parser.add_argument("--list-tools", action="store_true", help="List available tools")
    parser.add_argument("--tool", metavar="NAME", help="Run a single tool by name")
    parser.add_argument("--args", default="{}", help="Tool args as a JSON object (used with --tool)")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP tool server")
    parser.add_argument("--host", default="127.0.0.1", help="Tool server bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8080, help="Tool server listen port (default: 8080)")

    args = parser.parse_args()

    if args.list_tools:
        list_tools()
        return

    if not (args.tool or args.serve):
        parser.print_help()
        return

    from trellogate.config import ConfigError

    try:
        bootstrap(args.env)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.serve:
        from trellogate.api.server import run as run_server
        from trellogate.config import get_config

        run_server(host=args.host, port=args.port, log_level=get_config().log_level)
        return

    sys.exit(call_tool(args.tool, args.args))


if __name__ == "__main__":
    main()
