"""HTTP routers: HTML form UI, JSON API and health check."""
