# apps/board/tests/__init__.py
