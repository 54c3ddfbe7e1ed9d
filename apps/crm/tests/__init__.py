# apps/crm/tests/__init__.py
