from typing import Any, Dict, List, Mapping, Optional, Tuple

import backoff
import requests
from requests import session
from requests.exceptions import Timeout, ConnectionError, ChunkedEncodingError
from singer import get_logger, metrics

from qb_field.exceptions import ERROR_CODE_EXCEPTION_MAPPING, QuickbaseError, QuickbaseBackoffError
from qb_field.version import VERSION

LOGGER = get_logger()

REQUEST_TIMEOUT = 300
DEFAULT_SERVER = "api.quickbase.com"
DEFAULT_API_VERSION = "v1"

# Methods a collaborator must expose to stand in for `QuickBase`
API_CLIENT_METHODS = (
    "create_field",
    "update_field",
    "get_field",
    "get_field_usage",
    "delete_fields",
)


def is_api_client(obj: Any) -> bool:
    """Returns True when `obj` exposes every field operation of the API client."""
    if obj is None or isinstance(obj, Mapping):
        return False
    return all(callable(getattr(obj, name, None)) for name in API_CLIENT_METHODS)


def raise_for_error(response: requests.Response) -> None:
    """Raises the associated response exception. Takes in a response object,
    checks the status code, and throws the associated exception based on the
    status code.

    Quickbase error bodies look like `{"message": ..., "description": ...}`;
    both are kept on the raised exception.

    :param resp: requests.Response object
    """
    if response.status_code in [200, 201, 204]:
        return
    try:
        response_json = response.json()
    except ValueError:
        response_json = {}
    if not isinstance(response_json, dict):
        response_json = {}

    error_message = ERROR_CODE_EXCEPTION_MAPPING.get(
        response.status_code, {}
    ).get("message", "Unknown Error")
    description = response_json.get("description")
    message = f"HTTP-error-code: {response.status_code}, Error: {response_json.get('message', error_message)}"
    if description:
        message = f"{message}, Description: {description}"
    exc = ERROR_CODE_EXCEPTION_MAPPING.get(response.status_code, {}).get(
        "raise_exception", QuickbaseError
    )
    raise exc(message, response, description) from None


class QuickBase:
    """
    Quickbase REST API client for the field resource.
    ~~~
    Performs:
     - Authentication
     - Response parsing
     - HTTP Error handling and retry
    """

    CLASS_NAME = "QuickBase"

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config = dict(config or {})
        self._session = session()
        self.server = self.config.get("server") or DEFAULT_SERVER
        self.api_version = self.config.get("version") or DEFAULT_API_VERSION
        self.base_url = f"https://{self.server}"
        config_request_timeout = self.config.get("request_timeout")
        self.request_timeout = float(config_request_timeout) if config_request_timeout else REQUEST_TIMEOUT

    def __enter__(self):
        return self

    def __exit__(self, exception_type, exception_value, traceback):
        self._session.close()

    @property
    def realm_hostname(self) -> str:
        realm = self.config.get("realm", "")
        if "." in realm:
            return realm
        return f"{realm}.quickbase.com"

    def authenticate(self, headers: Dict, params: Dict) -> Tuple[Dict, Dict]:
        """Authenticates the request with the user or temporary token"""
        if self.config.get("temp_token"):
            headers["Authorization"] = f"QB-TEMP-TOKEN {self.config['temp_token']}"
        elif self.config.get("user_token"):
            headers["Authorization"] = f"QB-USER-TOKEN {self.config['user_token']}"
        headers["QB-Realm-Hostname"] = self.realm_hostname
        user_agent = f"qb-field/{VERSION}"
        if self.config.get("user_agent"):
            user_agent = f"{user_agent} {self.config['user_agent']}"
        headers["User-Agent"] = user_agent
        return headers, params

    def make_request(
        self,
        method: str,
        endpoint: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        path: Optional[str] = None,
        retry: bool = True
    ) -> Any:
        """
        Sends an HTTP request to the specified API endpoint.

        `retry=False` sends the request once, for calls that must not be repeated.
        """
        params = params or {}
        headers = headers or {}
        endpoint = endpoint or f"{self.base_url}/{self.api_version}/{path}"
        LOGGER.info("API %s %s, %s", method.upper(), endpoint, params)
        headers, params = self.authenticate(headers, params)
        send = self.__make_request if retry else self.__send_request
        return send(
            method, endpoint,
            headers=headers,
            params=params,
            json=body,
            timeout=self.request_timeout
        )

    @backoff.on_exception(
        wait_gen=backoff.expo,
        exception=(
            ConnectionResetError,
            ConnectionError,
            ChunkedEncodingError,
            Timeout,
            QuickbaseBackoffError
        ),
        max_tries=5,
        factor=2,
    )
    def __make_request(
        self, method: str, endpoint: str, **kwargs
    ) -> Any:
        """Performs HTTP Operations, retrying transient failures."""
        return self.__send_request(method, endpoint, **kwargs)

    def __send_request(
        self, method: str, endpoint: str, **kwargs
    ) -> Any:
        """Performs a single HTTP Operation."""
        method = method.upper()
        with metrics.http_request_timer(endpoint):
            if method not in ("GET", "POST", "DELETE"):
                raise ValueError(f"Unsupported method: {method}")
            if method == "GET" or kwargs.get("json") is None:
                # GET requests never carry a body
                kwargs.pop("json", None)
            response = self._session.request(method, endpoint, **kwargs)
            raise_for_error(response)

        return response.json()

    def create_field(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Creates a field; `payload` carries `tableId` plus the field attributes."""
        body = dict(payload)
        table_id = body.pop("tableId")
        return self.make_request(
            "POST",
            params={"tableId": table_id},
            body=body,
            path="fields",
            retry=False
        )

    def update_field(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Updates the field named by `payload["fieldId"]`."""
        body = dict(payload)
        table_id = body.pop("tableId")
        field_id = body.pop("fieldId")
        return self.make_request(
            "POST",
            params={"tableId": table_id},
            body=body,
            path=f"fields/{field_id}"
        )

    def get_field(self, table_id: str, field_id: int) -> Dict[str, Any]:
        return self.make_request(
            "GET",
            params={"tableId": table_id},
            path=f"fields/{field_id}"
        )

    def get_field_usage(self, table_id: str, field_id: int) -> List[Dict[str, Any]]:
        return self.make_request(
            "GET",
            params={"tableId": table_id},
            path=f"fields/usage/{field_id}"
        )

    def delete_fields(self, table_id: str, field_ids: List[int]) -> Dict[str, Any]:
        """Returns `{"deletedFieldIds": [...], "errors": [...]}`."""
        return self.make_request(
            "DELETE",
            params={"tableId": table_id},
            body={"fieldIds": list(field_ids)},
            path="fields"
        )

    def to_json(self) -> Dict[str, Any]:
        """Connection settings needed to rebuild this client."""
        return dict(self.config)
