"""Infrastructure layer: HTTP transport and auth interception."""
