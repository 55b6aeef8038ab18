"""Bot core — command descriptors, handlers, and the router."""
