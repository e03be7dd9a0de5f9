"""
CLI script for generating vendor roll tables.

Orchestrates the vendor table pipeline:
1. Load the equipment catalog (skipping unreadable item files)
2. Load vendor profiles from YAML
3. Filter each partition, removing always-available items from rotating stock
4. Build weighted roll tables
5. Write Foundry-importable JSON files and print a report
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from vendor_tables import terminal
from vendor_tables.catalog import load_catalog, rarity_breakdown
from vendor_tables.config import get_settings
from vendor_tables.exceptions import VendorTablesError
from vendor_tables.generator import ALWAYS_AVAILABLE, VendorTables, generate_vendor_tables
from vendor_tables.ids import IdSource, random_id, sequential_ids
from vendor_tables.models import ItemRecord
from vendor_tables.profiles import VendorProfile, load_profiles


def write_tables(result: VendorTables, output_dir: Path, dry_run: bool = False) -> list[Path]:
    written: list[Path] = []
    for key, table in result.tables.items():
        path = output_dir / result.output_filename(key)
        content = json.dumps(table.to_foundry(), indent=2, ensure_ascii=False)
        if dry_run:
            terminal.subsection(f"DRY RUN: Would write to {path}")
            terminal.code_block(content)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")
        written.append(path)
    return written


def generate_profile(
    catalog: list[ItemRecord],
    profile: VendorProfile,
    *,
    output_dir: Path,
    player_level: int,
    id_source: IdSource,
    dry_run: bool = False,
) -> VendorTables:
    settings = get_settings()
    terminal.section_header(f"VENDOR: {profile.name}")

    result = generate_vendor_tables(
        catalog,
        profile,
        player_level=player_level,
        weights=settings.weight_model(),
        id_source=id_source,
        document_uuid_template=settings.equipment_uuid_template,
        ownership_default=settings.ownership_default,
    )
    written = write_tables(result, output_dir, dry_run=dry_run)
    _print_vendor_report(result, written)
    return result


def _print_vendor_report(result: VendorTables, written: list[Path]) -> None:
    written_names = {path.name for path in written}
    for partition in result.partitions:
        label = "Always Available" if partition.key == ALWAYS_AVAILABLE else "Rotating Stock"
        terminal.subsection(f"{label}: {len(partition.items)} item(s)")
        if partition.table is None:
            terminal.warning("No eligible items - table not generated")
            continue

        terminal.table_summary(partition.table)
        terminal.key_value(
            "Rarity", terminal.format_rarity_breakdown(rarity_breakdown(partition.items)), indent=2
        )
        roll_count = result.profile.rotating_stock.roll_count
        if partition.key != ALWAYS_AVAILABLE and roll_count:
            terminal.bullet(f"Roll {roll_count} times to generate current inventory", indent=2)
        filename = result.output_filename(partition.key)
        if filename in written_names:
            terminal.success(f"  ✓ Saved {filename}")


def _print_usage_hint() -> None:
    terminal.subsection("To use these tables in Foundry VTT:")
    terminal.bullet("Import each JSON file from the Rollable Tables tab")
    terminal.bullet("Show 'Always Available' tables as permanent stock")
    terminal.bullet("Re-roll 'Rotating Stock' tables each visit for fresh inventory")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate PF2e vendor roll tables")
    parser.add_argument(
        "--profile",
        action="append",
        dest="profiles",
        metavar="SLUG",
        help="Vendor profile slug to generate (repeatable, default: all profiles)",
    )
    parser.add_argument("--equipment-dir", type=Path, help="Equipment item JSON directory")
    parser.add_argument("--profiles-dir", type=Path, help="Vendor profile YAML directory")
    parser.add_argument("--output-dir", type=Path, help="Output directory for table JSON")
    parser.add_argument("--player-level", type=int, help="Party level used in names and filters")
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

    equipment_dir = args.equipment_dir or settings.equipment_dir
    profiles_dir = args.profiles_dir or settings.profiles_dir
    player_level = args.player_level or settings.player_level
    output_dir = args.output_dir or settings.output_dir / f"level-{player_level}"
    id_source = sequential_ids(args.seed_ids) if args.seed_ids is not None else random_id

    try:
        profiles = load_profiles(profiles_dir)
        if args.profiles:
            unknown = sorted(set(args.profiles) - profiles.keys())
            if unknown:
                terminal.error(f"Unknown vendor profile(s): {', '.join(unknown)}")
                terminal.info(f"Available: {', '.join(profiles)}")
                sys.exit(1)
            profiles = {slug: profiles[slug] for slug in args.profiles}

        terminal.info("Reading equipment data...")
        catalog = load_catalog(equipment_dir)
        terminal.info(f"Found {len(catalog):,} equipment items.")

        empty: list[str] = []
        for profile in profiles.values():
            result = generate_profile(
                catalog,
                profile,
                output_dir=output_dir,
                player_level=player_level,
                id_source=id_source,
                dry_run=args.dry_run,
            )
            empty.extend(f"{profile.slug}/{key}" for key in result.empty_partitions)

    except VendorTablesError as e:
        terminal.error(str(e))
        sys.exit(1)
    except Exception as e:
        terminal.error(f"Unexpected error: {e}")
        sys.exit(1)

    if empty:
        terminal.error(f"No eligible items for: {', '.join(empty)}")
        sys.exit(1)

    terminal.success("\n✓ Vendor tables generated")
    _print_usage_hint()


if __name__ == "__main__":
    main()
