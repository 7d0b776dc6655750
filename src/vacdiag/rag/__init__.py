"""Term-frequency vector retrieval over the knowledge base."""
