"""
Vendor profiles loaded from YAML.

A profile names a vendor and describes up to two partitions: an optional
always-available partition matched by explicit inclusion lists, and a rotating
stock partition matched by category criteria. Profiles without an
always-available partition produce a single vendor table.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from vendor_tables.exceptions import CriteriaError
from vendor_tables.models import FixedInclusionCriteria, RotatingCriteria

log = logging.getLogger(__name__)


class AlwaysAvailablePartition(BaseModel):
    description: str
    img: str | None = None
    criteria: FixedInclusionCriteria

    model_config = {"frozen": True, "extra": "forbid"}


class RotatingStockPartition(BaseModel):
    description: str
    img: str | None = None
    roll_count: int | None = Field(default=None, alias="rollCount", ge=1)
    criteria: RotatingCriteria

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}


class VendorProfile(BaseModel):
    slug: str = Field(pattern=r"^[a-z0-9][a-z0-9-]*$")
    name: str = Field(min_length=1)
    description: str = ""
    always_available: AlwaysAvailablePartition | None = Field(
        default=None, alias="alwaysAvailable"
    )
    rotating_stock: RotatingStockPartition = Field(alias="rotatingStock")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}


def load_profile(path: Path) -> VendorProfile:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CriteriaError(f"Cannot read vendor profile {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CriteriaError(f"YAML parse error in vendor profile {path}: {e}") from e

    if not isinstance(data, dict):
        raise CriteriaError(f"Vendor profile {path} must be a mapping")

    data.setdefault("slug", path.stem)
    try:
        return VendorProfile.model_validate(data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{' -> '.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise CriteriaError(f"Invalid vendor profile {path.name}: {details}") from e


def load_profiles(directory: Path) -> dict[str, VendorProfile]:
    if not directory.is_dir():
        raise CriteriaError(f"Vendor profile directory not found: {directory}")

    profiles: dict[str, VendorProfile] = {}
    for path in sorted(directory.glob("*.yaml")):
        profile = load_profile(path)
        if profile.slug in profiles:
            raise CriteriaError(f"Duplicate vendor profile slug '{profile.slug}' in {path.name}")
        profiles[profile.slug] = profile

    log.info("Loaded %d vendor profile(s) from %s", len(profiles), directory)
    return profiles
