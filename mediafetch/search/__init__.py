"""Search query building, aggregation and result normalization."""
