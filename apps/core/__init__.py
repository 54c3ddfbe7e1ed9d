# apps/core/__init__.py

"""
Core - Dados do Fluxo Board

Contém:
- Models (Usuario, Board, Tarefa, Contato, RegistroSync)
- Stores assíncronos de acesso a dados com espelho em memória
- Notificações (toasts) para o usuário
- API JSON de boards, tarefas e contatos
- Comando de seed para desenvolvimento
"""
