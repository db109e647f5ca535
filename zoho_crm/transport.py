import requests
from requests.exceptions import ConnectionError, Timeout, RequestException
import singer

from zoho_crm.exceptions import Cancelled, TransportError


LOGGER = singer.get_logger()

API_DOMAIN = "https://crm.zoho.com"
API_PATH = "/crm/private/"
WRITE_METHOD_PREFIXES = ("insert", "update", "delete", "upload", "convert")


def build_url(request, api_domain=API_DOMAIN):
    return f"{api_domain.rstrip('/')}{API_PATH}{request.format.value}/{request.module}/{request.method}"


def is_write_method(method):
    return method.startswith(WRITE_METHOD_PREFIXES)


def fire_request(request, session=None, api_domain=API_DOMAIN, timeout=None):
    """Send ``request`` to Zoho and return the raw body text.

    Raises TransportError on connection problems or an HTTP error status, and
    Cancelled when the call runs past ``timeout``.
    """
    session = session or requests.session()
    url = build_url(request, api_domain)
    params = request.parameters.to_dict()

    LOGGER.debug(f"{request.module}/{request.method} -> {url}")
    try:
        if is_write_method(request.method):
            response = session.post(url, data=params, timeout=timeout)
        else:
            response = session.get(url, params=params, timeout=timeout)
    except Timeout as err:
        raise Cancelled(f"{url} timed out after {timeout}s") from err
    except ConnectionError as err:
        raise TransportError(None, f"could not reach {url}: {err}") from err
    except RequestException as err:
        raise TransportError(None, str(err)) from err

    if response.status_code >= 400:
        LOGGER.warning(f"got status {response.status_code} from zoho for url: {url}")
        raise TransportError(response.status_code, response.text)

    return response.text
