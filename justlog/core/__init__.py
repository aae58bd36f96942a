# justlog/core/__init__.py
# Pure core layer: models, duration math, clock, exceptions & output registry
