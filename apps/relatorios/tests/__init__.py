# apps/relatorios/tests/__init__.py
