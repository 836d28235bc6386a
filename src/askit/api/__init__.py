"""HTTP layer: response envelope and versioned routers."""
