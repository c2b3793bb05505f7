"""Command-line interface for wine-lens."""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys

from wine_lens import __version__, analyze_label, search_catalog
from wine_lens.config import PROVIDERS, RecognitionConfig
from wine_lens.exceptions import WineLensError
from wine_lens.fallback import FallbackController
from wine_lens.history import record_history


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="wine-lens",
        description="Recognize wines from label images",
    )
    parser.add_argument("image", nargs="?", help="Path to wine label image")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--search",
        metavar="TEXT",
        help="Search the wine catalog instead of analyzing an image",
    )
    parser.add_argument(
        "--provider",
        help=f"Analysis provider ({', '.join(PROVIDERS)}; default: WINE_LENS_PROVIDER)",
    )
    parser.add_argument(
        "--api-key",
        help="Provider API key (default: WINE_LENS_API_KEY or the vendor env var)",
    )
    parser.add_argument("--model", help="Model name override")
    parser.add_argument("--endpoint", help="Endpoint URL for custom or gateway providers")
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Fail instead of returning development output when the provider fails",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that the configured provider answers, then exit",
    )
    parser.add_argument("--history", metavar="PATH", help="Append the result to a JSONL history file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"wine-lens {__version__}",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.search is not None:
        wines = search_catalog(args.search)
        if args.json:
            print(json.dumps([wine.model_dump() for wine in wines], indent=2, ensure_ascii=False))
        else:
            _print_search(wines)
        return 0

    if args.check:
        return _check_provider(args)

    if not args.image:
        parser.error("an image path is required unless --search is given")

    try:
        config = _build_config(args)
        result = analyze_label(args.image, config=config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except WineLensError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.history:
        record_history(args.history, result)

    if args.json:
        print(result.model_dump_json(indent=2, exclude_none=True))
    else:
        _print_formatted(result)

    return 0


def _check_provider(args: argparse.Namespace) -> int:
    try:
        config = _build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if asyncio.run(FallbackController(config).check()):
        print(f"Provider {config.provider} is reachable.")
        return 0
    print(f"Provider {config.provider} is not reachable.", file=sys.stderr)
    return 1


def _build_config(args: argparse.Namespace) -> RecognitionConfig:
    config = RecognitionConfig.from_env()
    overrides = {
        "provider": args.provider,
        "api_key": args.api_key,
        "model": args.model,
        "endpoint": args.endpoint,
    }
    overrides = {key: value for key, value in overrides.items() if value}
    if args.no_fallback:
        overrides["enable_fallback"] = False
    return dataclasses.replace(config, **overrides)


def _print_formatted(result) -> None:
    """Print result in human-readable format."""
    print()
    print("  wine-lens")
    print()

    wine = result.wine
    if wine is None:
        print("  No wine could be identified from this label.")
    else:
        fields = [
            ("Name", wine.name),
            ("Producer", wine.producer),
            ("Vintage", wine.vintage),
            ("Region", _format_region(wine.region, wine.country)),
            ("Grapes", _format_list(wine.grape_varieties)),
            ("Alcohol", wine.alcohol_content),
            ("Rating", wine.rating),
            ("Serve At", wine.serving_temperature),
            ("Pairings", _format_list(wine.food_pairings)),
            ("Source", wine.source),
        ]
        for label, value in fields:
            display = value if value else "-"
            print(f"  {label + ':':<14} {display}")

    print(f"  {'Confidence:':<14} {result.confidence}%")
    print()
    print(f"  {result.extracted_text}")
    print()


def _print_search(wines) -> None:
    if not wines:
        print("No catalog wines matched.")
        return
    for wine in wines:
        vintage = f" {wine.vintage}" if wine.vintage else ""
        print(f"{wine.id}: {wine.name}{vintage} ({wine.producer}, {wine.region})")


def _format_region(region: str, country: str) -> str | None:
    parts = [p for p in [region, country] if p]
    return ", ".join(parts) if parts else None


def _format_list(items) -> str | None:
    """Format list as comma-separated string."""
    if not items:
        return None
    return ", ".join(items)


if __name__ == "__main__":
    sys.exit(main())
