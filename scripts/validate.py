"""Validate generated roll table JSON files against the JSON Schema and Pydantic models."""

import argparse
import json
import sys
from pathlib import Path

from jsonschema import Draft202012Validator
from pydantic import ValidationError as PydanticValidationError

from vendor_tables.config import get_settings
from vendor_tables.models import RollTable

REPO_ROOT = Path(__file__).parent.parent
SCHEMA_PATH = REPO_ROOT / "data" / "schema" / "roll-table.schema.json"


def load_schema() -> dict:
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def validate_file(filepath: Path, validator: Draft202012Validator) -> list[str]:
    errors: list[str] = []

    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        errors.append(f"JSON parse error: {e}")
        return errors

    for error in validator.iter_errors(data):
        path = " -> ".join(str(p) for p in error.absolute_path)
        location = f" at {path}" if path else ""
        errors.append(f"Schema: {error.message}{location}")

    try:
        RollTable.model_validate(data)
    except PydanticValidationError as e:
        for err in e.errors():
            loc = " -> ".join(str(part) for part in err["loc"])
            location = f" at {loc}" if loc else ""
            errors.append(f"Model: {err['msg']}{location}")

    return errors


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate generated roll table JSON files")
    parser.add_argument("directory", nargs="?", type=Path, help="Directory of table JSON files")
    args = parser.parse_args()

    directory = args.directory or get_settings().output_dir
    validator = Draft202012Validator(load_schema())

    json_files = sorted(directory.rglob("*.json"))

    if not json_files:
        print(f"No roll table JSON files found in {directory}. Nothing to validate.")
        return 0

    total_errors = 0
    for filepath in json_files:
        errors = validate_file(filepath, validator)
        if errors:
            print(f"\n{filepath.relative_to(directory)}:")
            for error in errors:
                print(f"  - {error}")
            total_errors += len(errors)

    if total_errors:
        print(f"\n{total_errors} error(s) in {len(json_files)} file(s)")
        return 1

    print(f"All {len(json_files)} file(s) valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
