# apps/crm/esquemas.py

"""
Esquemas dos payloads trocados com o Method CRM

O Method CRM nem sempre preenche os mesmos campos, então cada valor tem
uma ordem de fallback (ex.: nome <- Name | FirstName | LastName).
"""

from datetime import timezone as dt_timezone
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from apps.core.utils import converter_data

from .exceptions import ErroRespostaInvalida

STATUS_ATIVIDADE = {'done': 'Completed'}
STATUS_ATIVIDADE_PADRAO = 'In Progress'

PRIORIDADE_ATIVIDADE = {'high': 'High', 'medium': 'Normal'}
PRIORIDADE_ATIVIDADE_PADRAO = 'Low'

Identificador = Optional[Union[int, str]]


def _primeiro(*valores):
    for valor in valores:
        if valor not in (None, ''):
            return valor
    return None


class ClienteMethod(BaseModel):
    """Registro da tabela Customer"""

    model_config = ConfigDict(
        extra='ignore', populate_by_name=True, str_strip_whitespace=True, coerce_numbers_to_str=True
    )

    nome: Optional[str] = Field(default=None, alias='Name')
    primeiro_nome: Optional[str] = Field(default=None, alias='FirstName')
    sobrenome: Optional[str] = Field(default=None, alias='LastName')
    email: Optional[str] = Field(default=None, alias='Email')
    telefone: Optional[str] = Field(default=None, alias='Phone')
    nome_empresa: Optional[str] = Field(default=None, alias='CompanyName')
    empresa: Optional[str] = Field(default=None, alias='Company')
    record_id: Identificador = Field(default=None, alias='RecordID')
    id_alternativo: Identificador = Field(default=None, alias='Id')

    @model_validator(mode='after')
    def exigir_identificador(self):
        if _primeiro(self.record_id, self.id_alternativo) is None:
            raise ValueError("Customer sem RecordID/Id")
        return self

    @property
    def method_crm_id(self) -> str:
        return str(_primeiro(self.record_id, self.id_alternativo))

    def como_campos_contato(self) -> dict:
        telefone = _primeiro(self.telefone)
        return {
            'nome': _primeiro(self.nome, self.primeiro_nome, self.sobrenome) or 'Unknown',
            'email': _primeiro(self.email),
            'telefone': telefone,
            'empresa': _primeiro(self.nome_empresa, self.empresa),
            'method_crm_id': self.method_crm_id,
        }


class RespostaCriacaoMethod(BaseModel):
    """Resposta do POST em tables/Activity"""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    record_id: Identificador = Field(default=None, alias='RecordID')
    id_maiusculo: Identificador = Field(default=None, alias='Id')
    id_minusculo: Identificador = Field(default=None, alias='id')

    @property
    def method_crm_id(self) -> Optional[str]:
        valor = _primeiro(self.record_id, self.id_maiusculo, self.id_minusculo)
        return str(valor) if valor is not None else None


class DadosTarefaAtividade(BaseModel):
    """Tarefa enviada para virar Activity (aceita chaves em português ou inglês)"""

    model_config = ConfigDict(extra='ignore')

    id: Identificador = Field(default=None, validation_alias=AliasChoices('id', 'task_id'))
    titulo: str = Field(validation_alias=AliasChoices('titulo', 'title'))
    descricao: Optional[str] = Field(default=None, validation_alias=AliasChoices('descricao', 'description'))
    status: Optional[str] = None
    prioridade: Optional[str] = Field(default=None, validation_alias=AliasChoices('prioridade', 'priority'))
    prazo: Any = Field(default=None, validation_alias=AliasChoices('prazo', 'dueDate', 'due_date'))

    def como_atividade(self) -> dict:
        prazo = converter_data(self.prazo)
        return {
            'Subject': self.titulo,
            'Description': self.descricao or '',
            'ActivityType': 'Task',
            'Status': STATUS_ATIVIDADE.get(self.status, STATUS_ATIVIDADE_PADRAO),
            'Priority': PRIORIDADE_ATIVIDADE.get(self.prioridade, PRIORIDADE_ATIVIDADE_PADRAO),
            'DueDate': prazo.astimezone(dt_timezone.utc).isoformat().replace('+00:00', 'Z') if prazo else None,
        }


def ler_clientes(resposta) -> List[ClienteMethod]:
    """
    Extrai os Customers de uma resposta da API

    Aceita o envelope {"value": [...]} ou uma lista simples.
    """
    if resposta is None:
        registros = []
    elif isinstance(resposta, dict):
        registros = resposta.get('value')
    else:
        registros = resposta

    if not isinstance(registros, list):
        raise ErroRespostaInvalida("Invalid response format from Method CRM")

    clientes = []
    for registro in registros:
        if not isinstance(registro, dict):
            raise ErroRespostaInvalida("Invalid response format from Method CRM")
        try:
            clientes.append(ClienteMethod.model_validate(registro))
        except ValidationError as e:
            raise ErroRespostaInvalida(f"Customer inválido na resposta do Method CRM: {e.errors()[0]['msg']}")
    return clientes


def ler_resposta_criacao(resposta) -> str:
    """Retorna o id do registro criado no Method CRM"""
    if not isinstance(resposta, dict):
        raise ErroRespostaInvalida("Invalid response format from Method CRM")

    try:
        method_crm_id = RespostaCriacaoMethod.model_validate(resposta).method_crm_id
    except ValidationError:
        method_crm_id = None
    if method_crm_id is None:
        raise ErroRespostaInvalida("Failed to get record ID from Method CRM response")
    return method_crm_id
