"""
Package initializer for the HouseHub messaging backend.

Settings live in `househub.settings` (base/dev/prod/test); the ASGI
entry point is `househub.asgi.application`.
"""
