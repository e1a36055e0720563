"""Output layer: human (Rich), JSON, and quiet rendering of ServiceResult."""
