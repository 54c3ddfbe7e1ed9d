# apps/crm/exceptions.py

"""Erros da integração com o Method CRM"""


class ErroCRM(Exception):
    """Base de todos os erros da integração"""


class ErroConfiguracaoCRM(ErroCRM):
    """Credenciais do Method CRM ausentes"""


class ErroApiCRM(ErroCRM):
    """Resposta HTTP fora da faixa 2xx"""

    def __init__(self, status_code: int, corpo: str):
        self.status_code = status_code
        self.corpo = corpo
        super().__init__(f"Method CRM API error: {status_code} - {corpo}")


class ErroRespostaInvalida(ErroCRM):
    """Resposta do Method CRM em formato inesperado"""
