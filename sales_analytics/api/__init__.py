"""HTTP surface — routers, dependencies, schemas."""
