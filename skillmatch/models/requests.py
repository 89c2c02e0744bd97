import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

logger = logging.getLogger(__name__)


class MatchOptions(BaseModel):
    """Per-call options for the matching engine.

    Accepts snake_case names or the camelCase keys upstream forms send.
    Malformed values (``null``, non-numeric strings, ...) fall back to the
    field default with a warning instead of failing the match.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    use_taxonomy: bool = Field(True, validation_alias=AliasChoices("use_taxonomy", "useTaxonomy"))
    include_partial_matches: bool = Field(
        True, validation_alias=AliasChoices("include_partial_matches", "includePartialMatches"),
    )
    category_weight_overrides: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices(
            "category_weight_overrides", "categoryWeightOverrides", "categoryWeights",
        ),
    )
    minimum_score: float = Field(0.0, validation_alias=AliasChoices("minimum_score", "minimumScore"))
    # Infer missing categories from the skill name instead of defaulting to "technical"
    auto_categorize: bool = Field(False, validation_alias=AliasChoices("auto_categorize", "autoCategorize"))

    @field_validator("use_taxonomy", "include_partial_matches", "auto_categorize", "minimum_score", mode="wrap")
    @classmethod
    def _default_when_invalid(cls, value: Any, handler, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if value is None:
            return default
        try:
            result = handler(value)
        except ValidationError:
            logger.warning("Invalid %s %r, using default %r", info.field_name, value, default)
            return default
        if isinstance(result, float) and not math.isfinite(result):
            logger.warning("Invalid %s %r, using default %r", info.field_name, value, default)
            return default
        return result

    @field_validator("category_weight_overrides", mode="before")
    @classmethod
    def _drop_invalid_overrides(cls, value: Any) -> dict[str, float]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            logger.warning("Ignoring category weight overrides %r: expected an object", value)
            return {}
        overrides: dict[str, float] = {}
        for category, weight in value.items():
            try:
                number = float(weight)
            except (TypeError, ValueError):
                number = math.nan
            if not isinstance(category, str) or isinstance(weight, bool) or not math.isfinite(number):
                logger.warning("Dropping category weight override %r: %r", category, weight)
                continue
            overrides[category] = number
        return overrides
