# apps/crm/tests/utils.py

import json

import httpx

from apps.crm.cliente import ClienteMethodCRM


class ApiFalsa:
    """
    Method CRM falso para os testes

    Responde sempre o mesmo status/corpo (ou levanta `erro`) e guarda as
    requisições recebidas.
    """

    def __init__(self, status_code=200, corpo=None, texto=None, erro=None):
        self.status_code = status_code
        self.corpo = corpo
        self.texto = texto
        self.erro = erro
        self.requisicoes = []

    def responder(self, request):
        self.requisicoes.append(request)
        if self.erro is not None:
            raise self.erro
        if self.texto is not None:
            return httpx.Response(self.status_code, text=self.texto)
        return httpx.Response(self.status_code, json=self.corpo)

    def cliente(self):
        return ClienteMethodCRM(
            'test-key',
            base_url='https://crm.test/api/v1',
            transport=httpx.MockTransport(self.responder),
        )

    @property
    def ultimo_corpo(self):
        return json.loads(self.requisicoes[-1].content)
