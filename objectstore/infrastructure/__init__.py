"""Infrastructure layer: S3-compatible storage client and its exceptions."""
