# apps/crm/cliente.py

import logging
from typing import Any, Optional

import httpx
from django.conf import settings

from .exceptions import ErroApiCRM, ErroConfiguracaoCRM, ErroRespostaInvalida

logger = logging.getLogger(__name__)

URL_PADRAO = 'https://rest.method.me/api/v1'


class ClienteMethodCRM:
    """
    Cliente HTTP da API REST do Method CRM

    Uma instância por invocação; feche com `aclose()` ao terminar.
    A chave da API nunca aparece nos logs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = URL_PADRAO,
        esquema_auth: str = 'APIKey',
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ErroConfiguracaoCRM("Method CRM API key not configured")

        self.base_url = base_url.rstrip('/')
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                'Authorization': f'{esquema_auth} {api_key}',
                'Content-Type': 'application/json',
            },
            transport=transport,
        )

    @classmethod
    def de_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> 'ClienteMethodCRM':
        """Cria o cliente a partir de METHOD_CRM_* nas settings"""
        return cls(
            api_key=getattr(settings, 'METHOD_CRM_API_KEY', ''),
            base_url=getattr(settings, 'METHOD_CRM_BASE_URL', URL_PADRAO),
            esquema_auth=getattr(settings, 'METHOD_CRM_AUTH_SCHEME', 'APIKey'),
            timeout=getattr(settings, 'METHOD_CRM_TIMEOUT', 30.0),
            transport=transport,
        )

    async def chamar(self, endpoint: str, metodo: str = 'GET', dados: Any = None) -> Any:
        """
        Executa uma chamada e devolve o JSON decodificado

        Raises:
            ErroApiCRM: status fora de 2xx (status e corpo na mensagem)
            ErroRespostaInvalida: corpo que não é JSON
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        logger.info(f"📡 Method CRM: {metodo} {url}")

        corpo = dados if dados is not None and metodo != 'GET' else None
        resposta = await self._client.request(metodo, url, json=corpo)

        if not resposta.is_success:
            logger.error(f"❌ Method CRM API error: {resposta.status_code} {resposta.text}")
            raise ErroApiCRM(resposta.status_code, resposta.text)

        try:
            resultado = resposta.json()
        except ValueError:
            logger.error(f"❌ Resposta não-JSON do Method CRM: {resposta.text[:200]}")
            raise ErroRespostaInvalida("Invalid response format from Method CRM")

        logger.debug(f"Method CRM respondeu {resposta.status_code}")
        return resultado

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
