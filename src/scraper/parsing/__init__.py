"""HTML extraction primitives and the site markup they are configured with."""
