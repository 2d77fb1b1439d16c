"""Infrastructure: configuration, database, logging and persistence models."""
