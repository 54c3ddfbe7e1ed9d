# apps/board/__init__.py

"""
Board - Aplicação Kanban do Fluxo Board

Funcionalidades:
- Interface Kanban drag-and-drop
- Sessão do dashboard via WebSocket (estado, toasts, arraste otimista)
- HTMX para recarregar colunas
"""
