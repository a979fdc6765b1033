"""Gap repair and temporal aggregation processors."""
