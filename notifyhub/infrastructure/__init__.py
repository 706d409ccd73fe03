"""Infrastructure adapters: database, storage and realtime delivery."""
