"""Command-line entry point for the Bushido toolkit.

Subcommands::

    bushido token 42                  # show the traits of one token
    bushido distribution              # rarity audit over the whole collection
    bushido metadata -o ./output      # write all metadata JSON files
    bushido contract -o ./output      # render the Solidity contract
    bushido whitelist kols.json       # Merkle root and proofs for the KOL allowlist
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.table import Table

from bushido.config import Config
from bushido.engine import (
    CLANS,
    MAX_SUPPLY,
    RARITY_WEIGHTS,
    AssignmentError,
    RarityTier,
    assign_token,
    rarity_distribution,
    rarity_roll,
)
from bushido.metadata import MetadataGenerator
from bushido.scaffolder import ContractGenerator
from bushido.utils import (
    console,
    format_ether,
    format_percent,
    print_error,
    print_header,
    print_success,
    print_summary_table,
)
from bushido.whitelist import WhitelistError, WhitelistManager


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_token(config: Config, args: argparse.Namespace) -> int:
    traits = assign_token(args.token_id)
    clan = CLANS[traits.clan]
    print_summary_table(
        {
            "Token": f"#{traits.token_id}",
            "Clan": f"{traits.clan} ({clan.name} {clan.kanji}, {clan.virtue})",
            "Warrior Number": str(traits.sequence),
            "Roll": str(rarity_roll(traits.token_id)),
            "Rarity": f"{int(traits.rarity)} ({traits.rarity.label})",
            "Voting Power": str(traits.voting_power),
        },
        title=f"{config.collection.name_prefix} #{traits.token_id}",
    )
    return 0


def cmd_distribution(config: Config, args: argparse.Namespace) -> int:
    counts = rarity_distribution()
    table = Table(title="Rarity distribution", show_header=True, header_style="bold cyan")
    table.add_column("Tier")
    table.add_column("Count", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Target", justify="right")
    for tier in RarityTier:
        table.add_row(
            tier.label,
            str(counts[tier]),
            format_percent(counts[tier], MAX_SUPPLY),
            f"{RARITY_WEIGHTS[tier]:.2f}%",
        )
    console.print(table)
    return 0


def cmd_metadata(config: Config, args: argparse.Namespace) -> int:
    print_header("Metadata")
    generator = MetadataGenerator(config)
    paths = asyncio.run(generator.generate_all(show_progress=True))
    print_success(f"Wrote {len(paths)} files to {config.metadata_dir}")
    return 0


def cmd_contract(config: Config, args: argparse.Namespace) -> int:
    print_header("Contract")
    generator = ContractGenerator(config)
    path = asyncio.run(generator.write())
    print_summary_table(
        {
            "Contract": config.collection.contract_name,
            "Mint price": format_ether(config.mint.price_wei),
            "Max per wallet": str(config.mint.max_per_wallet),
            "Written to": str(path),
        },
        title="Contract",
    )
    print_success("Contract rendered")
    return 0


def cmd_whitelist(config: Config, args: argparse.Namespace) -> int:
    print_header("Whitelist")
    source = Path(args.kol_list)
    if not source.exists():
        print_error(f"Error: KOL list not found: {source}")
        return 1

    manager = WhitelistManager.load(source, config)
    table = Table(title="Allowlist by tier", show_header=True, header_style="bold cyan")
    table.add_column("Tier")
    table.add_column("Name")
    table.add_column("Wallets", justify="right")
    table.add_column("Allocation", justify="right")
    for tier, row in manager.breakdown().items():
        table.add_row(tier, row["name"], str(row["count"]), str(row["allocation"]))
    console.print(table)

    distribution = asyncio.run(manager.export())
    print_summary_table(
        {
            "Merkle root": distribution.merkle_root,
            "Eligible wallets": str(distribution.total_eligible),
            "Total allocation": str(distribution.total_allocation),
            "Written to": str(config.whitelist_dir),
        },
        title="Distribution",
    )
    print_success("Allowlist exported")
    return 0


COMMANDS = {
    "token": cmd_token,
    "distribution": cmd_distribution,
    "metadata": cmd_metadata,
    "contract": cmd_contract,
    "whitelist": cmd_whitelist,
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bushido",
        description="Bushido collection toolkit -- deterministic trait assignment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bushido token 1\n"
            "  bushido distribution\n"
            "  bushido metadata -o ./output\n"
            "  bushido contract --config bushido.json\n"
            "  bushido whitelist kol-list.json -o ./output\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a saved JSON config (default: build from BUSHIDO_* env vars)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    token = sub.add_parser("token", help="Show the derived traits of one token")
    token.add_argument("token_id", type=int, help=f"Token id in [1, {MAX_SUPPLY}]")

    sub.add_parser("distribution", help="Audit the rarity distribution of the collection")

    for name, help_text in (
        ("metadata", "Write metadata JSON for every token"),
        ("contract", "Render the Solidity contract"),
        ("whitelist", "Build the KOL allowlist Merkle distribution"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        if name == "whitelist":
            cmd.add_argument("kol_list", help="JSON list of {address, tier} entries (or {\"kols\": [...]})")
        cmd.add_argument(
            "--output", "-o",
            default=None,
            help="Output directory (overrides the configured one)",
        )

    return parser


def load_config(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    output = getattr(args, "output", None)
    if output:
        config = config.model_copy(update={"output_dir": Path(output)})
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``bushido`` / ``python -m bushido.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.exists():
        print_error(f"Error: config file not found: {config_path}")
        sys.exit(1)

    config = load_config(args)
    try:
        code = COMMANDS[args.command](config, args)
    except (AssignmentError, WhitelistError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
