"""In-memory caches; nothing here survives a restart."""
