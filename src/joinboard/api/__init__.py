"""HTTP transport for the remote document store."""
