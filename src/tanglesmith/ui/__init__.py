"""User interfaces built on top of the tangling API."""
