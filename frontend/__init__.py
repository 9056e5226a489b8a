"""Blog client: remote gateway, async operations and the composition root."""
