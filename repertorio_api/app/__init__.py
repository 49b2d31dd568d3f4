"""
FastAPI application package.

``main.create_app`` wires the configuration, logging, storage and
routers defined in the subpackages together.
"""
