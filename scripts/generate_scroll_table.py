"""Generate a scroll or wand roll table covering every eligible spell of one rank."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import get_args

from vendor_tables import terminal
from vendor_tables.config import get_settings
from vendor_tables.exceptions import VendorTablesError
from vendor_tables.ids import random_id, sequential_ids
from vendor_tables.scrolls import (
    RarityFilter,
    Tradition,
    build_scroll_table,
    load_spells,
    make_request,
)


def _output_filename(kind: str, rank: int, tradition: str, rarity: str) -> str:
    parts = [kind, f"rank-{rank}"]
    if tradition != "random":
        parts.append(tradition)
    if rarity != "any":
        parts.append(rarity)
    return "-".join(parts) + ".json"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a PF2e scroll or wand roll table")
    parser.add_argument("--kind", choices=["scroll", "wand"], default="scroll")
    parser.add_argument("--rank", type=int, required=True, help="Spell rank (1-10)")
    parser.add_argument("--tradition", choices=get_args(Tradition), default="random")
    parser.add_argument("--rarity", choices=get_args(RarityFilter), default="any")
    parser.add_argument("--spells-dir", type=Path, help="Spell JSON directory")
    parser.add_argument("--output-dir", type=Path, help="Output directory for table JSON")
    parser.add_argument("--dry-run", action="store_true", help="Preview without writing files")
    parser.add_argument(
        "--seed-ids",
        metavar="PREFIX",
        help="Use deterministic sequential document IDs with this prefix",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    spells_dir = args.spells_dir or settings.spells_dir
    output_dir = args.output_dir or settings.output_dir / "scrolls"
    id_source = sequential_ids(args.seed_ids) if args.seed_ids is not None else random_id

    try:
        request = make_request(
            kind=args.kind, rank=args.rank, tradition=args.tradition, rarity=args.rarity
        )
        spells = load_spells(spells_dir)
        table = build_scroll_table(
            spells,
            request,
            id_source=id_source,
            document_uuid_template=settings.spell_uuid_template,
            ownership_default=settings.ownership_default,
        )
    except VendorTablesError as e:
        terminal.error(str(e))
        sys.exit(1)

    content = json.dumps(table.to_foundry(), indent=2, ensure_ascii=False)
    path = output_dir / _output_filename(args.kind, args.rank, args.tradition, args.rarity)

    terminal.table_summary(table, indent=0)
    if args.dry_run:
        terminal.subsection(f"DRY RUN: Would write to {path}")
        terminal.code_block(content)
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content + "\n", encoding="utf-8")
    terminal.success(f"✓ Created roll table \"{table.name}\" with {len(table.results)} entries")
    terminal.info(f"  Written to {path}")


if __name__ == "__main__":
    main()
