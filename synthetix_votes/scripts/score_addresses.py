"""
Score addresses from the command line.

Usage:
    synthetix-votes --rpc-url https://... --snapshot 13000000 0xabc... 0xdef...
    synthetix-votes --addresses-file voters.txt --config vote_config.json --json
    synthetix-votes --validate-config --config vote_config.json
    synthetix-votes --example
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from web3 import Web3

from ..config import settings
from ..config.schema import StrategyConfig, load_config, validate_config
from ..core.exceptions import StrategyError
from ..core.strategy import compute_scores
from ..fetchers.subgraph import FallbackHolderSource, StaticHolderSource, SubgraphHolderSource


def parse_snapshot(value: str):
    """Block number, or "latest"."""
    if value == "latest":
        return value
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"snapshot must be a block number or 'latest', got {value!r}")


def read_addresses(args) -> List[str]:
    addresses = list(args.addresses)
    if args.addresses_file:
        with open(args.addresses_file, "r") as f:
            addresses.extend(line.strip() for line in f if line.strip() and not line.startswith("#"))
    return addresses


def print_validation(validation: dict) -> None:
    print("=" * 70)
    print("CONFIG VALIDATION")
    print("=" * 70)
    print(f"Valid: {validation['is_valid']}")
    for error in validation["errors"]:
        print(f"  ❌ {error}")
    for warning in validation["warnings"]:
        print(f"  ⚠️  {warning}")


def print_scores(result) -> None:
    print(f"\n{'='*70}")
    print(f"🗳️  Synthetix debt-weighted scores @ block {result.block_tag}")
    print(f"{'='*70}\n")
    print(f"  Primary debt:            ${result.total_primary_debt:,.2f}")
    print(f"  Scaled secondary debt:   ${result.scaled_total_secondary_debt:,.2f}")
    print(f"  Secondary block:         {result.secondary_block}")
    print(f"  Holders (primary/sec.):  {result.primary_holders}/{result.secondary_holders}")
    if result.any_rate_invalid:
        print("  ⚠️  DebtCache reported anyRateIsInvalid at this block")

    ranked = sorted(result.scores.items(), key=lambda x: x[1], reverse=True)
    print(f"\n  {'Address':<44} {'Score':>14}")
    for address, score in ranked:
        print(f"  {address:<44} {score:>14,.4f}")
    print(f"\n  Total score: {sum(result.scores.values()):,.4f}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Synthetix debt-weighted voting scores")
    parser.add_argument("addresses", nargs="*", help="Addresses to score")
    parser.add_argument("--addresses-file", type=str, help="File with one address per line")
    parser.add_argument("--rpc-url", type=str, default=settings.RPC_URL, help="Primary chain RPC URL")
    parser.add_argument("--snapshot", type=parse_snapshot, default="latest", help="Block number or 'latest'")
    parser.add_argument("--config", "-c", type=str, help="Path to JSON config file")
    parser.add_argument("--fallback-file", type=str,
                        help="Holder JSON export used when the secondary subgraph is down")
    parser.add_argument("--strict", action="store_true", help="Fail on malformed subgraph responses")
    parser.add_argument("--json", action="store_true", help="Print full result as JSON")
    parser.add_argument("--output", "-o", type=str, help="Path to output JSON file")
    parser.add_argument("--validate-config", action="store_true", help="Validate config and exit")
    parser.add_argument("--example", action="store_true", help="Print example config and exit")
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.example:
        print(StrategyConfig.from_settings().to_json())
        return 0

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ Could not load config: {e}")
        return 1
    if args.strict:
        config.strict = True

    validation = validate_config(config)
    if args.validate_config:
        print_validation(validation)
        return 0 if validation["is_valid"] else 1

    addresses = read_addresses(args)
    if not args.rpc_url:
        parser.error("--rpc-url (or SNX_VOTES_RPC_URL) is required")

    secondary_source = None
    if args.fallback_file:
        secondary_source = FallbackHolderSource(
            SubgraphHolderSource(
                config.secondary_subgraph_url,
                first=config.query_first, timeout=config.query_timeout, strict=config.strict
            ),
            StaticHolderSource.from_json_file(args.fallback_file, first=config.query_first),
        )

    w3 = Web3(Web3.HTTPProvider(args.rpc_url))
    try:
        result = compute_scores(
            w3, addresses, snapshot=args.snapshot, config=config, secondary_source=secondary_source
        )
    except StrategyError as e:
        print(f"❌ {e}")
        return 1

    output_json = json.dumps(result.to_dict(), indent=2, default=str)
    if args.output:
        with open(args.output, "w") as f:
            f.write(output_json)
        print(f"\nResults written to: {args.output}")
    elif args.json:
        print(output_json)
    else:
        print_scores(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
