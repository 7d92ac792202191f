"""Main layer - settings, composition root and the public client."""
