"""SecureNotes: authenticated notes API with a dual-write primary/fallback note store."""
