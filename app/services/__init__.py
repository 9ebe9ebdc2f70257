"""Services package."""
from app.services import congestion_estimator, hours_oracle, signal_extractor
from app.services.search_pipeline import SearchPipeline

__all__ = ["SearchPipeline", "congestion_estimator", "hours_oracle", "signal_extractor"]
