"""Client-side services that run before data reaches the gateway."""
