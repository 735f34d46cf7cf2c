"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from marketlens.errors import MarketLensError, NotFoundError

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="marketlens", description="Competitor and market research pipeline")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings overlay")
    parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database (overrides settings)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # normalize
    normalize_parser = subparsers.add_parser("normalize", help="Unwrap, repair and normalize a raw payload")
    normalize_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="File holding the raw payload (default: stdin)",
    )
    normalize_parser.add_argument(
        "--kind",
        default="competitor",
        choices=["competitor", "analysis"],
        help="Record type the payload describes",
    )
    normalize_parser.add_argument("--client", type=str, default=None, help="Client name to exclude from competitors")

    # research
    research_parser = subparsers.add_parser("research", help="Run competitor research through the workflow webhook")
    research_parser.add_argument("--request", type=Path, default=None, help="Path to request YAML")
    research_parser.add_argument("--client", type=str, default=None, help="Client name")
    research_parser.add_argument("--market", type=str, default=None, help="Target market")
    research_parser.add_argument("--product-focus", type=str, default=None)
    research_parser.add_argument("--website", type=str, default=None)
    research_parser.add_argument("--facebook", type=str, default=None)
    research_parser.add_argument("--info", type=str, default=None, help="Additional information")
    research_parser.add_argument("--no-store", action="store_true", help="Do not persist the run")

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Strategic analysis with market trends and news")
    analyze_parser.add_argument("--client", type=str, required=True)
    analyze_parser.add_argument(
        "--product-focus",
        type=str,
        default=None,
        help="Product focus (default: the one stored with the client's research run)",
    )
    analyze_parser.add_argument("--run-id", type=str, default=None, help="Restrict to one analysis run")

    # add-competitor
    add_parser = subparsers.add_parser("add-competitor", help="Research one competitor and add it to a run")
    add_parser.add_argument("--run-id", type=str, required=True)
    add_parser.add_argument("--name", type=str, required=True, help="Competitor name")
    add_parser.add_argument("--client", type=str, default=None)
    add_parser.add_argument("--product-focus", type=str, default=None)
    add_parser.add_argument("--website", type=str, default=None)
    add_parser.add_argument("--description", type=str, default=None)

    # summary
    summary_parser = subparsers.add_parser("summary", help="Generate a competitor summary for a run")
    summary_parser.add_argument("--run-id", type=str, required=True)
    summary_parser.add_argument("--client", type=str, default=None)
    summary_parser.add_argument("--product-focus", type=str, default=None)

    # facebook
    facebook_parser = subparsers.add_parser("facebook", help="Discover client and products from a Facebook page")
    facebook_parser.add_argument("--url", type=str, required=True, help="Facebook page URL")

    # store
    store_parser = subparsers.add_parser("store", help="Query stored research")
    store_parser.add_argument(
        "action",
        choices=["runs", "run", "competitors", "analyses"],
        help="List analysis runs, show one run, list competitors or saved market analyses",
    )
    store_parser.add_argument("--client", type=str, default=None, help="Filter by client name")
    store_parser.add_argument("--run-id", type=str, default=None, help="Run to show, or whose competitors to list")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "normalize": _run_normalize,
        "research": _run_research,
        "analyze": _run_analyze,
        "add-competitor": _run_add_competitor,
        "summary": _run_summary,
        "facebook": _run_facebook,
        "store": _run_store,
    }
    try:
        handlers[args.command](args)
    except MarketLensError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(_exit_code(e))


def _exit_code(error: MarketLensError) -> int:
    """2 for invalid input, 1 for upstream and not-found failures."""
    return 2 if error.status_code == 400 else 1


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _settings(args: argparse.Namespace):
    from marketlens.config import Settings

    settings = Settings.from_env(args.config)
    if args.db is not None:
        settings = settings.model_copy(update={"db_path": args.db})
    return settings


def _repository(settings):
    from marketlens.store import ResearchRepository, RowStore

    return ResearchRepository(RowStore(settings.db_path))


def _run_normalize(args: argparse.Namespace) -> None:
    """Run normalize command. Reads the payload as text so fenced or broken JSON is accepted."""
    from marketlens.research import process_analysis_payload, run_pipeline

    raw = args.input.read_text(encoding="utf-8") if args.input else sys.stdin.read()
    if args.kind == "analysis":
        _print_json(process_analysis_payload(raw).model_dump(mode="json"))
        return
    competitors = run_pipeline(raw, client_name=args.client)
    _print_json([c.model_dump(mode="json", by_alias=True) for c in competitors])


def _run_research(args: argparse.Namespace) -> None:
    """Run research command."""
    from marketlens.connectors.registry import ConnectorRegistry
    from marketlens.models.request import ResearchRequest
    from marketlens.research import run_competitor_research

    settings = _settings(args)
    if args.request:
        request = ResearchRequest.from_yaml(args.request)
    else:
        request = ResearchRequest()
    overrides = {
        "client_name": args.client,
        "market": args.market,
        "product_focus": args.product_focus,
        "website_url": args.website,
        "facebook_url": args.facebook,
        "additional_info": args.info,
    }
    request = request.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    if not settings.competitor_webhook_url:
        raise SystemExit("competitor_webhook_url is not configured (MARKETLENS_COMPETITOR_WEBHOOK_URL)")
    webhook = ConnectorRegistry.webhook(settings.competitor_webhook_url, settings)
    repository = None if args.no_store else _repository(settings)
    result = run_competitor_research(request, webhook, repository)
    _print_json(result.to_dict())
    if result.error:
        raise SystemExit(1)


def _run_analyze(args: argparse.Namespace) -> None:
    """Run analyze command. A failed primary call still prints a fallback analysis."""
    from marketlens.connectors.registry import ConnectorRegistry
    from marketlens.errors import MissingFieldError
    from marketlens.research import analysis_error_response, analyze_market

    settings = _settings(args)
    generator = ConnectorRegistry.text_generator(settings)
    repository = _repository(settings)
    product_focus = args.product_focus or repository.product_focus_for_client(args.client)
    try:
        analysis = analyze_market(
            args.client,
            product_focus,
            generator,
            repository,
            run_id=args.run_id,
        )
    except MissingFieldError:
        raise
    except MarketLensError as e:
        logger.error("Market analysis failed: %s", e)
        _print_json(analysis_error_response(e).model_dump(mode="json"))
        raise SystemExit(_exit_code(e))
    _print_json(analysis.model_dump(mode="json"))


def _run_add_competitor(args: argparse.Namespace) -> None:
    """Run add-competitor command."""
    from marketlens.connectors.registry import ConnectorRegistry
    from marketlens.research import add_competitor

    settings = _settings(args)
    competitor = add_competitor(
        args.run_id,
        args.name,
        ConnectorRegistry.text_generator(settings),
        _repository(settings),
        client_name=args.client,
        product_focus=args.product_focus,
        website=args.website,
        description=args.description,
    )
    _print_json(competitor.model_dump(mode="json", by_alias=True))
    if competitor.error:
        raise SystemExit(1)


def _run_summary(args: argparse.Namespace) -> None:
    """Run summary command."""
    from marketlens.connectors.registry import ConnectorRegistry
    from marketlens.research import generate_competitor_summary

    settings = _settings(args)
    summary = generate_competitor_summary(
        args.run_id,
        ConnectorRegistry.text_generator(settings),
        _repository(settings),
        client_name=args.client,
        product_focus=args.product_focus,
    )
    _print_json({"success": True, "summary": summary})


def _run_facebook(args: argparse.Namespace) -> None:
    """Run facebook command."""
    from marketlens.connectors.registry import ConnectorRegistry
    from marketlens.research import analyze_facebook_page

    settings = _settings(args)
    if not settings.facebook_webhook_url:
        raise SystemExit("facebook_webhook_url is not configured (MARKETLENS_FACEBOOK_WEBHOOK_URL)")
    result = analyze_facebook_page(args.url, ConnectorRegistry.webhook(settings.facebook_webhook_url, settings))
    _print_json(result.to_dict())
    if result.error:
        raise SystemExit(1)


def _run_store(args: argparse.Namespace) -> None:
    """Run store command."""
    repository = _repository(_settings(args))
    if args.action == "runs":
        _print_json(repository.list_runs(args.client))
    elif args.action == "run":
        if not args.run_id:
            raise SystemExit("store run requires --run-id")
        run = repository.get_run(args.run_id)
        if run is None:
            raise NotFoundError(f"Analysis run {args.run_id} not found")
        _print_json(run)
    elif args.action == "competitors":
        if args.run_id:
            _print_json(repository.competitors_for_run(args.run_id))
        elif args.client:
            _print_json(repository.competitors_for_client(args.client))
        else:
            raise SystemExit("store competitors requires --run-id or --client")
    elif args.action == "analyses":
        _print_json(repository.saved_analyses(args.client))


if __name__ == "__main__":
    main()
