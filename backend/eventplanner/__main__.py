"""Event planner CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from eventplanner import __version__
from eventplanner.config import get_settings
from eventplanner.pipeline import EventPlanner, FormattedResult, build_capabilities

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# Event Planner Configuration
# API keys and secrets belong in the .env file, not here.

planner:
  min_input_length: 10
  max_input_length: 1000
  min_refinement_length: 5
  max_attendees: 1000
  min_budget: 10000
  default_event_duration: 8
  max_duration_hours: 12
  max_tags: 10
  currency_symbol: "₹"
  enable_fallback_parsing: true

llm:
  extraction_model: "openai:gpt-4.1-mini"
  drafting_model: "openai:gpt-4.1-mini"
  extraction_temperature: 0.1
  drafting_temperature: 0.7
  extraction_timeout_seconds: 30
  drafting_timeout_seconds: 45

venue_search:
  enabled: true
  timeout_seconds: 20
  max_results: 5

cache:
  enabled: true
  expiry_minutes: 60
  max_size: 1000
  sweep_interval_minutes: 5

server:
  host: "0.0.0.0"
  port: 3000
"""


def _init_logfire() -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from eventplanner.observability import initialize_logfire

        initialize_logfire(get_settings())
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def _build_planner() -> EventPlanner:
    settings = get_settings()
    return EventPlanner(settings, build_capabilities(settings))


def _print_result(result: FormattedResult) -> None:
    if not result.success:
        print(f"\n❌ {result.error or 'Planning failed'}\n")
        for error in result.errors:
            print(f"  • {error}")
        if result.error_details and result.error_details.suggestions:
            print("\nSuggestions:")
            for suggestion in result.error_details.suggestions:
                print(f"  • {suggestion}")
        print()
        return

    event = result.event_data
    print(f"\n✓ Plan ready in {result.elapsed_seconds}s{' (cached)' if result.cached else ''}\n")
    if event:
        print(f"Event: {event.event_type} for {event.attendee_count} people")
        print(f"Where/When: {event.location} on {event.date} ({event.duration_hours}h)")
        print(f"Budget: {event.budget:,}\n")

    print(result.draft_plan or "")

    if result.venues:
        print("\nVenues:")
        for venue in result.venues:
            print(f"  • {venue.name} - {venue.url}")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  • {warning}")

    quality = result.quality_indicators
    print(
        f"\nQuality: data={quality.data_completeness} plan={quality.plan_richness} "
        f"venues={quality.venue_relevance} efficiency={quality.execution_efficiency}\n"
    )


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize data directory and configuration file."""
    data_dir = Path("data").resolve()

    try:
        data_dir.mkdir(exist_ok=True)
        logger.info(f"Created data directory: {data_dir}")

        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Copy .env.example to .env and add your API keys")
        print("2. Review and customize data/config.yaml if needed")
        print("3. Run 'python -m eventplanner config' to verify configuration")
        print("4. Run 'python -m eventplanner serve' to start the API\n")

        return 0

    except Exception as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== Event Planner Configuration ===\n")
        print(f"Data Directory: {settings.data_dir}")
        print(f"Environment: {settings.environment}\n")

        planner = settings.planner
        print("Planner:")
        print(f"  Input Length: {planner.min_input_length}-{planner.max_input_length} chars")
        print(f"  Max Attendees: {planner.max_attendees:,}")
        print(f"  Min Budget: {planner.currency_symbol}{planner.min_budget:,}")
        print(f"  Max Duration: {planner.max_duration_hours}h")
        print(f"  Fallback Parsing: {planner.enable_fallback_parsing}\n")

        print("LLM:")
        print(f"  Extraction: {settings.llm.extraction_model} (t={settings.llm.extraction_temperature})")
        print(f"  Drafting: {settings.llm.drafting_model} (t={settings.llm.drafting_temperature})\n")

        print("Venue Search:")
        print(f"  Enabled: {settings.venue_search.enabled}")
        print(f"  Timeout: {settings.venue_search.timeout_seconds}s")
        print(f"  Domains: {len(settings.venue_search.include_domains)}\n")

        print("Cache:")
        print(f"  Enabled: {settings.cache.enabled}")
        print(f"  Expiry: {settings.cache.expiry_minutes} min")
        print(f"  Max Size: {settings.cache.max_size}\n")

        print("API Keys:")
        print(f"  OpenAI: {'✓ Set' if settings.openai_api_key else '✗ Not set'}")
        print(f"  Anthropic: {'✓ Set' if settings.anthropic_api_key else '✗ Not set'}")
        print(f"  Groq: {'✓ Set' if settings.groq_api_key else '✗ Not set'}")
        print(f"  Exa AI: {'✓ Set' if settings.exa_api_key else '✗ Not set'}")
        print(f"  Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")

        return 0

    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"\n❌ Failed to load configuration: {e}\n")
        return 1


def cmd_plan(args: argparse.Namespace) -> int:
    """Plan an event from text given on the command line."""
    _init_logfire()

    try:
        planner = _build_planner()
        result = asyncio.run(planner.run(args.text, args.refine))

        if args.json:
            print(result.model_dump_json(indent=2))
        else:
            _print_result(result)

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Planning failed: {e}", exc_info=True)
        print(f"\n❌ Planning failed: {e}\n")
        return 1


def cmd_health(args: argparse.Namespace) -> int:
    """Run the pipeline health check."""
    _init_logfire()

    try:
        health = asyncio.run(_build_planner().health_check())
        print(json.dumps(health.model_dump(mode="json"), indent=2))
        return 0 if health.status == "healthy" else 1

    except Exception as e:
        logger.error(f"Health check failed: {e}", exc_info=True)
        print(f"\n❌ Health check failed: {e}\n")
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the HTTP API."""
    import uvicorn

    from eventplanner.api import create_app

    try:
        settings = get_settings()
        host = args.host or settings.server.host
        port = args.port or settings.server.port

        print("\n=== Event Planner API ===\n")
        print(f"Version: {__version__}")
        print(f"Listening on: http://{host}:{port}\n")

        uvicorn.run(create_app(settings), host=host, port=port)
        return 0

    except KeyboardInterrupt:
        print("\n\nReceived interrupt signal. Shutting down...\n")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        print(f"\nFailed to start: {e}\n")
        return 1


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Event Planner: corporate event plans from free-text requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Event Planner {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory and configuration file",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_plan = subparsers.add_parser(
        "plan",
        help="Plan an event from a free-text description",
    )
    parser_plan.add_argument("text", help="Event description")
    parser_plan.add_argument(
        "--refine",
        default=None,
        help="Additional requirements to apply to the description",
    )
    parser_plan.add_argument(
        "--json",
        action="store_true",
        help="Print the full result envelope as JSON",
    )
    parser_plan.set_defaults(func=cmd_plan)

    parser_health = subparsers.add_parser(
        "health",
        help="Run a canned request through the pipeline",
    )
    parser_health.set_defaults(func=cmd_health)

    parser_serve = subparsers.add_parser(
        "serve",
        help="Start the HTTP API",
    )
    parser_serve.add_argument("--host", default=None, help="Bind address")
    parser_serve.add_argument("--port", type=int, default=None, help="Bind port")
    parser_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
