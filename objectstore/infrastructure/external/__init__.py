"""External integrations (S3-compatible object storage)."""
