# apps/core/models.py

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Usuario(AbstractUser):
    """
    Modelo de usuário customizado

    Cada usuário é dono dos próprios boards, tarefas e contatos.
    Nenhum dado é compartilhado entre usuários.
    """

    # === INFORMAÇÕES PESSOAIS ===
    telefone = models.CharField(max_length=20, blank=True)

    # === INTEGRAÇÃO METHOD CRM ===
    method_crm_username = models.CharField(
        max_length=150,
        blank=True,
        help_text="Usuário correspondente no Method CRM (opcional)"
    )

    # === METADADOS ===
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'usuario'

    def __str__(self):
        nome_completo = self.get_full_name()
        if nome_completo:
            return f"{nome_completo} ({self.username})"
        return self.username


class Board(models.Model):
    """Quadro Kanban do usuário"""

    COR_CHOICES = [
        ('blue', 'Azul'),
        ('green', 'Verde'),
        ('purple', 'Roxo'),
        ('red', 'Vermelho'),
        ('yellow', 'Amarelo'),
        ('gray', 'Cinza'),
    ]

    nome = models.CharField(max_length=200)
    descricao = models.TextField(blank=True, default='')
    cor = models.CharField(max_length=20, choices=COR_CHOICES, default='blue')
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='boards'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'boards'
        ordering = ['-criado_em', '-id']
        indexes = [
            models.Index(fields=['usuario', '-criado_em'], name='boards_usuario_criado_idx'),
        ]

    def __str__(self):
        return f"{self.nome} ({self.usuario.username})"

    def clean(self):
        cores_validas = getattr(settings, 'FLUXO_BOARD_CORES', [valor for valor, _ in self.COR_CHOICES])
        if self.cor not in cores_validas:
            raise ValidationError({'cor': f"Cor inválida: {self.cor}"})


class Tarefa(models.Model):
    """
    Tarefa de um board

    O status define em qual coluna a tarefa aparece. Colunas não são
    persistidas: são apenas o agrupamento das tarefas por status.
    """

    STATUS_CHOICES = [
        ('todo', 'A Fazer'),
        ('progress', 'Em Progresso'),
        ('done', 'Concluído'),
    ]

    PRIORIDADE_CHOICES = [
        ('low', '🟢 Baixa'),
        ('medium', '🟡 Média'),
        ('high', '🔴 Alta'),
    ]

    titulo = models.CharField(max_length=200)
    descricao = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='todo')
    prioridade = models.CharField(max_length=10, choices=PRIORIDADE_CHOICES, default='medium')
    prazo = models.DateTimeField(null=True, blank=True)
    lembrete = models.BooleanField(default=False)
    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='tarefas'
    )
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='tarefas'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['-criado_em', '-id']
        indexes = [
            models.Index(fields=['usuario', 'board', '-criado_em'], name='tasks_usuario_board_idx'),
        ]

    def __str__(self):
        return f"{self.titulo} [{self.status}]"

    @classmethod
    def status_validos(cls):
        return [valor for valor, _ in cls.STATUS_CHOICES]

    @classmethod
    def prioridades_validas(cls):
        return [valor for valor, _ in cls.PRIORIDADE_CHOICES]

    def clean(self):
        """Garante que status e prioridade pertencem às enumerações fixas"""
        erros = {}
        if self.status not in self.status_validos():
            erros['status'] = f"Status inválido: {self.status}"
        if self.prioridade not in self.prioridades_validas():
            erros['prioridade'] = f"Prioridade inválida: {self.prioridade}"
        if erros:
            raise ValidationError(erros)

    def esta_atrasada(self):
        """Verifica se a tarefa passou do prazo sem ser concluída"""
        if self.prazo and self.status != 'done':
            return timezone.now() > self.prazo
        return False


class Contato(models.Model):
    """Contato local, criado manualmente ou importado do Method CRM"""

    nome = models.CharField(max_length=200)
    email = models.EmailField(null=True, blank=True)
    telefone = models.CharField(max_length=50, null=True, blank=True)
    empresa = models.CharField(max_length=200, null=True, blank=True)
    method_crm_id = models.CharField(max_length=100, null=True, blank=True)
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='contatos'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'contacts'
        ordering = ['-criado_em', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['method_crm_id', 'usuario'],
                name='contato_method_crm_id_usuario_unico'
            ),
        ]

    def __str__(self):
        if self.empresa:
            return f"{self.nome} - {self.empresa}"
        return self.nome


class RegistroSync(models.Model):
    """
    Log de sincronização com o Method CRM

    Uma linha por tentativa. Registros nunca são atualizados, apenas inseridos.
    """

    STATUS_SYNC_CHOICES = [
        ('pending', 'Pendente'),
        ('synced', 'Sincronizado'),
        ('error', 'Erro'),
    ]

    tipo_entidade = models.CharField(max_length=50)
    entidade_id = models.CharField(max_length=100)
    method_crm_id = models.CharField(max_length=100, null=True, blank=True)
    status_sync = models.CharField(max_length=20, choices=STATUS_SYNC_CHOICES, default='pending')
    mensagem_erro = models.TextField(null=True, blank=True)
    ultima_sync = models.DateTimeField(null=True, blank=True)
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='registros_sync'
    )
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'method_sync'
        ordering = ['-criado_em', '-id']

    def __str__(self):
        return f"{self.tipo_entidade}#{self.entidade_id} - {self.status_sync}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Registros de sincronização não podem ser alterados")
        super().save(*args, **kwargs)
