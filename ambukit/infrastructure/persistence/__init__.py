"""SQL persistence: database handle, models, repositories and seeds."""
