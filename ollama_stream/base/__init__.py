"""Base layer: credentials, errors, logging, HTTP transport, wire models and
streaming primitives shared by the endpoint callers."""
