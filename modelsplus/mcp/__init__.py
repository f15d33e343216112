"""Model Context Protocol (JSON-RPC 2.0) surface over the catalog."""
