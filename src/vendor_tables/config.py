"""
Configuration management for vendor table generation.

Loads settings from environment variables and config file, with sensible defaults.
"""

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vendor_tables.exceptions import CriteriaError
from vendor_tables.weights import DEFAULT_RARITY_WEIGHTS, WeightModel


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VENDOR_TABLES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    equipment_dir: Path = Field(
        default_factory=lambda: Path("../pf2e/packs/equipment"),
        description="Directory of exported equipment item JSON files",
    )
    spells_dir: Path = Field(
        default_factory=lambda: Path("../pf2e/packs/spells"),
        description="Directory of exported spell JSON files",
    )
    profiles_dir: Path = Field(
        default_factory=lambda: Path("data/vendors"),
        description="Directory of vendor profile YAML files",
    )
    output_dir: Path = Field(
        default_factory=lambda: Path("vendor-tables"),
        description="Directory generated tables are written to",
    )
    player_level: int = Field(default=7, ge=1, le=20, description="Party level")
    rarity_weights: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_RARITY_WEIGHTS),
        description="Selection weight per rarity tag",
    )
    equipment_uuid_template: str = Field(
        default="Compendium.pf2e.equipment-srd.Item.{id}",
        description="documentUuid template for equipment entries",
    )
    spell_uuid_template: str = Field(
        default="Compendium.pf2e.spells-srd.Item.{id}",
        description="documentUuid template for spell entries",
    )
    ownership_default: int = Field(default=0, ge=0, le=3, description="Table visibility level")
    log_level: str = Field(default="INFO", description="Logging level")

    def weight_model(self) -> WeightModel:
        try:
            return WeightModel(weights=self.rarity_weights)
        except ValidationError as e:
            raise CriteriaError(f"Invalid rarity weights {self.rarity_weights}: {e}") from e


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
