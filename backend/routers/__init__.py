"""HTTP routers for the RailOptic backend."""
