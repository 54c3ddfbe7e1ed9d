# apps/__init__.py

"""
Fluxo Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Models, stores de dados, notificações e API JSON
- board: Kanban, sessão WebSocket e reconciliação do drag-and-drop
- crm: Integração com o Method CRM
- relatorios: Visão geral (estatísticas do dashboard)
"""

__version__ = '0.1.0'
__author__ = 'Equipe Fluxo'
