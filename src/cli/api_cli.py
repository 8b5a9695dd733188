"""
Command-line interface for the validation API.

Usage:
    python -m src.cli.api_cli serve [--host HOST] [--port PORT] [--reload]
    python -m src.cli.api_cli check --schema <name> (--json <payload> | --file <path>) [--rules <yaml>]
"""

import argparse
import json
import sys
from pathlib import Path

from fastapi import status
from fastapi.responses import JSONResponse

from src.api.validation import ResponseTranslator, new_trace_id
from src.config import get_settings
from src.core.rules import RuleConfigLoader, RuleEngine, build_default_registry
from src.core.schema import FieldBinder
from src.observability.logger import DEFAULT_LOGGER_NAME, get_logger, log_operation, setup_logger

logger = get_logger(__name__)

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


def serve_command(args) -> int:
    """
    Run the API with uvicorn.

    Args:
        args: Command-line arguments
    """
    import uvicorn

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info(f"Serving validation API on {host}:{port}")
    uvicorn.run("src.api.app:app", host=host, port=port, reload=args.reload)
    return EXIT_ACCEPTED


def check_command(args) -> int:
    """
    Bind and validate a payload offline, printing the response body as JSON.

    Args:
        args: Command-line arguments

    Returns:
        EXIT_ACCEPTED, EXIT_REJECTED or EXIT_USAGE
    """
    try:
        registry = RuleConfigLoader(args.rules).load_registry() if args.rules else build_default_registry()
        schema = registry.get(args.schema)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load schemas: {e}")
        return EXIT_USAGE
    except KeyError as e:
        logger.error(str(e.args[0]))
        return EXIT_USAGE

    try:
        text = Path(args.file).read_text() if args.file else args.json
        payload = json.loads(text)
    except OSError as e:
        logger.error(f"Could not read payload: {e}")
        return EXIT_USAGE
    except json.JSONDecodeError as e:
        logger.error(f"Payload is not valid JSON: {e}")
        return EXIT_USAGE

    with log_operation("Checking payload", logger=logger, schema=schema.name):
        result = FieldBinder(schema).bind(payload, strict=True)
        outcome = RuleEngine(schema).validate_binding(result)
        response = ResponseTranslator().translate(
            outcome,
            handler=lambda model: JSONResponse(content={"accepted": model.model_dump()}),
            model=result.model,
            trace_id=new_trace_id(),
        )

    print(json.dumps(json.loads(response.body)))
    return EXIT_ACCEPTED if response.status_code == status.HTTP_200_OK else EXIT_REJECTED


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Declarative field validation API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API
  python -m src.cli.api_cli serve --port 8080

  # Validate a user payload without starting the server
  python -m src.cli.api_cli check --schema User --json '{"name": "Arthur", "age": 16}'

  # Validate against schemas defined in YAML
  python -m src.cli.api_cli check --schema User --file user.json --rules config/schemas.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: from settings)")
    serve_parser.add_argument("--port", type=int, help="Port (default: from settings)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    check_parser = subparsers.add_parser("check", help="Validate a payload against a schema")
    check_parser.add_argument("--schema", required=True, help="Schema name (e.g. User)")
    payload_group = check_parser.add_mutually_exclusive_group(required=True)
    payload_group.add_argument("--json", help="Payload as a JSON string")
    payload_group.add_argument("--file", help="Path to a JSON payload file")
    check_parser.add_argument("--rules", help="Path to a schema YAML file (default: built-in schemas)")

    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logger(DEFAULT_LOGGER_NAME, level=settings.log_level, format_type=settings.log_format)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    if args.command == "serve":
        return serve_command(args)
    return check_command(args)


if __name__ == "__main__":
    sys.exit(main())
