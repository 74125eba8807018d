"""Application layer: use cases, DTOs and collaborator interfaces."""
