"""Pure client-side state: actions, reducers and the store."""
