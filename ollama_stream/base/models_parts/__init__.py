"""One-class-per-file model implementations; import from ``base.models``."""
