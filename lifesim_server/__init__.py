"""HTTP server exposing a running life simulation."""
