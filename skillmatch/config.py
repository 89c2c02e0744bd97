from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Recommendation / normalizer defaults
    max_complementary_suggestions: int = 5
    attribute_default_subcategory: str = "programming"
    requirement_default_subcategory: str = "general"

    # Ranking insights thresholds (percent)
    top_candidate_threshold: float = 80.0
    skill_gap_coverage_threshold: float = 50.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "SKILLMATCH_"}


settings = Settings()
