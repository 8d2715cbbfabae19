"""Application layer: DTOs and the upload service surface."""
