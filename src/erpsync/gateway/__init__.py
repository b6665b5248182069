r"""Remote call gateway to the ERP REST API.

The gateways perform a single call per invocation and translate
transport and HTTP outcomes into classified attempt outcomes. The
resilient gateways compose them with the retry orchestrator.
"""

from __future__ import annotations

__all__ = [
    "AsyncRemoteCallGateway",
    "AsyncResilientGateway",
    "Credentials",
    "RemoteCallGateway",
    "ResilientGateway",
]

from erpsync.gateway.client import RemoteCallGateway
from erpsync.gateway.client_async import AsyncRemoteCallGateway
from erpsync.gateway.credentials import Credentials
from erpsync.gateway.resilient import AsyncResilientGateway, ResilientGateway
