# apps/relatorios/__init__.py

"""
Relatórios - Visão geral do Fluxo Board

Funcionalidades:
- Tarefas ativas, vencendo hoje e atrasadas
- Contatos (total e novos no mês)
- Resultado das sincronizações com o Method CRM
"""
