import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from .common.errors import NetconexError
from .config import load_config
from .executor import RequestExecutor
from .models import Student
from .ops.logger import setup_logger

logger = logging.getLogger(__name__)

RESPONSE_MODELS = {
    "student": Student,
}


def _parse_header(raw: str):
    key, sep, value = raw.partition(":")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"Header must look like 'Name: value', got {raw!r}")
    return key.strip(), value.strip()


def _parse_json(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"--data is not valid JSON: {exc}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="netconex", description="Send a single JSON HTTP request.")

    parser.add_argument("--config", type=str, help="Path to a YAML configuration file.")
    parser.add_argument("--base-url", type=str, help="Overrides requester.base_url.")
    parser.add_argument(
        "--header",
        type=_parse_header,
        action="append",
        default=[],
        help="Extra request header as 'Name: value'. May be repeated.",
    )
    parser.add_argument("--timeout", type=int, help="Connect/read timeout in milliseconds.")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print the JSON response.")
    parser.add_argument("--log-level", type=str, help="Console log level.")

    parser.add_argument("method", type=str.upper, choices=["GET", "DELETE", "POST", "PUT"])
    parser.add_argument("path", type=str, help="Path appended verbatim to the base URL.")
    parser.add_argument("--data", type=_parse_json, help="JSON request body (POST/PUT only).")
    parser.add_argument(
        "--as",
        dest="as_model",
        choices=sorted(RESPONSE_MODELS),
        help="Deserialize a GET response into a typed record before printing.",
    )

    args = parser.parse_args(argv)
    if args.method in ("POST", "PUT") and args.data is None:
        parser.error(f"{args.method} requires --data")
    if args.method in ("GET", "DELETE") and args.data is not None:
        parser.error(f"{args.method} does not take a request body")
    if args.as_model and args.method != "GET":
        parser.error("--as is only supported for GET")
    return args


def build_executor(args) -> RequestExecutor:
    config = load_config(args.config)
    setup_logger(args.log_level or config.logging.level, config.logging.logs_dir)

    requester = config.requester
    overrides: Dict[str, object] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["timeout_ms"] = args.timeout
    if overrides:
        requester = requester.model_copy(update=overrides)

    executor = RequestExecutor.from_config(requester)
    for key, value in args.header:
        executor.set_header(key, value)
    return executor


def run(args) -> str:
    executor = build_executor(args)
    try:
        if args.as_model:
            record = executor.get().execute_and_deserialize(args.path, RESPONSE_MODELS[args.as_model])
            return record.model_dump_json(by_alias=True, indent=2)
        if args.method == "GET":
            text = executor.get().execute(args.path)
        elif args.method == "DELETE":
            text = executor.delete().execute(args.path)
        elif args.method == "POST":
            text = executor.post().execute(args.path, args.data)
        else:
            text = executor.put().execute(args.path, args.data)
    finally:
        executor.close()

    return executor.pretty_print(text) if args.pretty else text


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        output = run(args)
    except (NetconexError, ValueError, FileNotFoundError) as exc:
        logger.error("Request failed: %s", exc)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
