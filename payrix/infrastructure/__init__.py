"""Infrastructure adapters: HTTP transport, codec, rate limiting, logging."""
