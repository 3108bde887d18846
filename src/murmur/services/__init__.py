"""Business helpers used by the API routers."""
