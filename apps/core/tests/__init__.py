# apps/core/tests/__init__.py
