# apps/board/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket para a aplicação board
websocket_urlpatterns = [
    # Sessão do dashboard - boards, tarefas, arraste e CRM em tempo real
    re_path(r'ws/board/$', consumers.BoardConsumer.as_asgi()),
]
