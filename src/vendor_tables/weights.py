"""Rarity-to-weight model for weighted roll tables."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_RARITY_WEIGHTS: dict[str, int] = {
    "common": 4,
    "uncommon": 2,
    "rare": 1,
    "unique": 0,
}


class WeightModel(BaseModel):
    """
    Maps a rarity tag to the number of consecutive roll values an entry occupies.

    A weight of 0 is valid and means the rarity is never selectable. Tags missing
    from the mapping fall back to the ``common`` weight.
    """

    weights: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_RARITY_WEIGHTS))

    model_config = {"frozen": True}

    @field_validator("weights")
    @classmethod
    def _validate_weights(cls, value: dict[str, int]) -> dict[str, int]:
        if "common" not in value:
            raise ValueError("rarity weights must define a 'common' weight")
        negative = sorted(tag for tag, weight in value.items() if weight < 0)
        if negative:
            raise ValueError(f"rarity weights must be non-negative, got negative for {negative}")
        return value

    def weight_for(self, rarity: str) -> int:
        weight = self.weights.get(rarity)
        if weight is None:
            return self.weights["common"]
        return weight
