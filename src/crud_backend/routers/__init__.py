"""HTTP adapters translating requests into service calls."""
