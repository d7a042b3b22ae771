"""pydantic-ai agents backing the extraction and drafting capabilities."""
