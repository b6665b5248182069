r"""Credentials identifying the caller to the remote ERP service."""

from __future__ import annotations

__all__ = ["Credentials"]

from dataclasses import dataclass, field

from erpsync.core.config import AUTH_PARAM_COMPANY_ID, AUTH_PARAM_SECRET_KEY, DEFAULT_API_ENDPOINT


@dataclass(frozen=True)
class Credentials:
    """Credentials appended to every remote call.

    Args:
        secret_key: The API secret key.
        company_id: The company identifier.
        api_endpoint: The base URL of the REST API.

    Example:
        ```pycon
        >>> from erpsync.gateway import Credentials
        >>> credentials = Credentials(secret_key="s3cr3t", company_id="1234")
        >>> credentials.auth_params()
        {'secret_key': 's3cr3t', 'company_id': '1234'}
        >>> credentials
        Credentials(company_id='1234', api_endpoint='https://main.metakocka.si/rest/eshop/v1/json/')

        ```
    """

    secret_key: str = field(repr=False)
    company_id: str
    api_endpoint: str = DEFAULT_API_ENDPOINT

    def __post_init__(self) -> None:
        if not self.secret_key:
            msg = "secret_key must not be empty"
            raise ValueError(msg)
        if not self.company_id:
            msg = "company_id must not be empty"
            raise ValueError(msg)

    def auth_params(self) -> dict[str, str]:
        """Return the fixed authentication query parameters."""
        return {AUTH_PARAM_SECRET_KEY: self.secret_key, AUTH_PARAM_COMPANY_ID: self.company_id}

    def url_for(self, endpoint: str) -> str:
        """Return the absolute URL of an endpoint.

        Args:
            endpoint: The endpoint path relative to the API endpoint,
                e.g. ``"product_add"``.

        Returns:
            The absolute URL.
        """
        return f"{self.api_endpoint.rstrip('/')}/{endpoint.lstrip('/')}"
