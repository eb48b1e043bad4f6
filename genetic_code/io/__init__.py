"""Output path helpers and Parquet schemas."""
