# apps/crm/__init__.py

"""
CRM - Integração com o Method CRM

Funcionalidades:
- Importação de Customers como contatos (upsert)
- Criação de Activities a partir de tarefas
- Histórico de sincronização (method_sync)
"""
