# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import Board, Contato, RegistroSync, Tarefa, Usuario


CORES_BOARD = {
    'blue': '#3B82F6',
    'green': '#10B981',
    'purple': '#8B5CF6',
    'red': '#EF4444',
    'yellow': '#F59E0B',
    'gray': '#6B7280',
}


def _badge(cor, texto):
    return format_html(
        '<span style="background-color: {}; color: white; '
        'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
        cor, texto
    )


class TarefaInline(admin.TabularInline):
    """Tarefas exibidas dentro do board"""
    model = Tarefa
    extra = 0
    fields = ['titulo', 'status', 'prioridade', 'prazo']
    ordering = ['-criado_em']


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para o modelo Usuario"""

    list_display = [
        'username', 'email', 'get_full_name', 'boards_count',
        'is_active', 'date_joined'
    ]
    list_filter = ['is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'first_name', 'last_name', 'email']
    ordering = ['-date_joined']

    # Adicionar campos customizados ao formulário
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Informações Adicionais', {
            'fields': ('telefone', 'method_crm_username')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Informações Adicionais', {
            'fields': ('telefone',)
        }),
    )

    def boards_count(self, obj):
        """Conta quantidade de boards"""
        return obj.boards.count()

    boards_count.short_description = 'Boards'


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin para boards Kanban"""

    list_display = ['nome', 'usuario', 'cor_badge', 'tarefas_count', 'criado_em']
    list_filter = ['cor', 'criado_em']
    search_fields = ['nome', 'descricao', 'usuario__username']
    readonly_fields = ['criado_em', 'atualizado_em']
    inlines = [TarefaInline]

    def cor_badge(self, obj):
        return _badge(CORES_BOARD.get(obj.cor, '#6B7280'), obj.get_cor_display())

    cor_badge.short_description = 'Cor'

    def tarefas_count(self, obj):
        """Conta tarefas do board"""
        return obj.tarefas.count()

    tarefas_count.short_description = 'Tarefas'


@admin.register(Tarefa)
class TarefaAdmin(admin.ModelAdmin):
    """Admin para tarefas"""

    list_display = ['titulo', 'board', 'status_badge', 'prioridade', 'prazo', 'lembrete', 'usuario']
    list_filter = ['status', 'prioridade', 'lembrete', 'criado_em']
    search_fields = ['titulo', 'descricao', 'board__nome']
    readonly_fields = ['criado_em', 'atualizado_em']
    date_hierarchy = 'criado_em'

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('titulo', 'descricao', 'board', 'usuario')
        }),
        ('Acompanhamento', {
            'fields': ('status', 'prioridade', 'prazo', 'lembrete')
        }),
        ('Datas', {
            'fields': ('criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )

    def status_badge(self, obj):
        """Exibe o status com badge colorido"""
        cores = {
            'todo': '#6B7280',  # cinza
            'progress': '#F59E0B',  # amarelo
            'done': '#10B981',  # verde
        }
        return _badge(cores.get(obj.status, '#6B7280'), obj.get_status_display())

    status_badge.short_description = 'Status'


@admin.register(Contato)
class ContatoAdmin(admin.ModelAdmin):
    """Admin para contatos"""

    list_display = ['nome', 'email', 'empresa', 'origem', 'usuario', 'criado_em']
    search_fields = ['nome', 'email', 'empresa', 'method_crm_id']
    list_filter = ['criado_em']
    readonly_fields = ['criado_em', 'atualizado_em']

    def origem(self, obj):
        if obj.method_crm_id:
            return _badge('#8B5CF6', 'Method CRM')
        return _badge('#6B7280', 'Local')

    origem.short_description = 'Origem'


@admin.register(RegistroSync)
class RegistroSyncAdmin(admin.ModelAdmin):
    """Log de sincronização (somente leitura)"""

    list_display = ['tipo_entidade', 'entidade_id', 'status_badge', 'method_crm_id', 'usuario', 'criado_em']
    list_filter = ['status_sync', 'tipo_entidade', 'criado_em']
    search_fields = ['entidade_id', 'method_crm_id', 'mensagem_erro']

    def status_badge(self, obj):
        cores = {
            'pending': '#F59E0B',
            'synced': '#10B981',
            'error': '#EF4444',
        }
        return _badge(cores.get(obj.status_sync, '#6B7280'), obj.get_status_sync_display())

    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
