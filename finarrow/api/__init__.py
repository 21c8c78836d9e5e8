"""HTTP API routers (mounted under /api/v1 by ``finarrow.main``)."""
