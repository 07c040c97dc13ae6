"""AssetVerse: multi-tenant asset lifecycle API."""
