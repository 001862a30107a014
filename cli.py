import argparse
import json
import os
import sys
import uuid as _uuid

import sources  # noqa: F401 ensure registration
from api.app import build_response
from config.settings import get_settings
from models import ProfileKind
from pipelines.compare_profile import compare_profile_url
from services.errors import ConfigurationMissing, InvalidInput, ScrapeExhausted
from services.reporting import print_summary, usage_for_run
from sources.registry import available_providers
from utils.logging_setup import init_logging


def cmd_compare(args):
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex
    try:
        ctx = compare_profile_url(args.url)
    except InvalidInput as e:
        print(f"Invalid URL: {e}", file=sys.stderr)
        sys.exit(2)
    except (ConfigurationMissing, ScrapeExhausted) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if args.json:
        print(json.dumps(build_response(ctx), indent=2, ensure_ascii=False))
    else:
        print_summary(ctx)
    print(f"run_id={os.environ['RUN_ID']}", file=sys.stderr)


def cmd_providers(args):
    registry = available_providers()
    kinds = [ProfileKind(args.kind)] if args.kind else list(ProfileKind)
    out = {}
    for kind in kinds:
        out[kind.value] = [
            {"priority": i, "identity": spec.identity, "description": spec.description}
            for i, spec in enumerate(registry.get(kind, ()), start=1)
        ]
    print(json.dumps(out, indent=2, ensure_ascii=False))


def cmd_usage(args):
    usage = usage_for_run(args.run_id)
    if not usage:
        print("No traced calls for this run (is CALL_TRACE enabled?)")
        return
    for key, stats in sorted(usage.items()):
        print(f"{key}: calls={stats['calls']}, errors={stats['errors']}, tokens={stats['tokens']}")


def cmd_serve(args):
    import uvicorn
    uvicorn.run("api.app:app", host=args.host, port=args.port, log_level=args.log_level.lower())


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Profile talking points CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cmp = sub.add_parser("compare", help="Scrape a LinkedIn/Twitter profile and print talking points")
    p_cmp.add_argument("url", help="LinkedIn (linkedin.com/in/...) or Twitter/X profile URL")
    p_cmp.add_argument("--json", action="store_true", help="Print the API response JSON instead of a summary")
    p_cmp.set_defaults(func=cmd_compare)

    p_prov = sub.add_parser("providers", help="List scraping providers in fallback order")
    p_prov.add_argument("--kind", choices=[k.value for k in ProfileKind], default=None, help="Only this profile kind")
    p_prov.set_defaults(func=cmd_providers)

    p_use = sub.add_parser("usage", help="Summarize traced scrape/LLM calls for a run (needs CALL_TRACE=true)")
    p_use.add_argument("--run-id", required=True, help="RUN_ID printed by the compare command")
    p_use.set_defaults(func=cmd_usage)

    p_srv = sub.add_parser("serve", help="Serve POST /compare with uvicorn")
    p_srv.add_argument("--host", default="127.0.0.1")
    p_srv.add_argument("--port", type=int, default=8000)
    p_srv.set_defaults(func=cmd_serve, log_level=settings.log_level)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
