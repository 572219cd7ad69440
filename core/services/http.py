import logging
import time

import requests
from django.conf import settings

from .errors import NetworkError, NotFound, ParseError

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504}


def _timeout():
    return getattr(settings, "PLATFORM_HTTP_TIMEOUT_SECONDS", 10)


def _max_retries():
    return max(1, getattr(settings, "PLATFORM_HTTP_MAX_RETRIES", 3))


def _headers(extra=None):
    headers = {
        "User-Agent": getattr(settings, "PLATFORM_HTTP_USER_AGENT", "digitomize-sync/1.0"),
    }
    if extra:
        headers.update(extra)
    return headers


def _request(method, url, *, params=None, json_body=None, headers=None, accept_statuses=()):
    max_retries = _max_retries()
    for attempt in range(max_retries):
        last_attempt = attempt == max_retries - 1
        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=_headers(headers),
                timeout=_timeout(),
            )
            if response.status_code in RETRY_STATUSES and not last_attempt:
                logger.info("HTTP %s from %s, retrying (attempt %s)", response.status_code, url, attempt + 1)
                time.sleep(2 ** attempt)
                continue
            if response.status_code not in accept_statuses:
                response.raise_for_status()
            return response
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            if status == 404:
                raise NotFound(f"Nothing at {url}") from e
            raise NetworkError(f"HTTP {status} from {url}") from e
        except requests.RequestException as e:
            if not last_attempt:
                time.sleep(2 ** attempt)
                continue
            raise NetworkError(f"Request to {url} failed: {e}") from e
    raise NetworkError(f"Retries exhausted for {url}")


def _decode(response, url):
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"Invalid JSON from {url}") from e


def get_json(url, params=None, headers=None, accept_statuses=()):
    """
    GET and decode JSON. Statuses in accept_statuses are decoded instead of raised,
    for APIs that report errors in the body.
    """
    response = _request("GET", url, params=params, headers=headers, accept_statuses=accept_statuses)
    return _decode(response, url)


def post_json(url, payload, headers=None):
    response = _request("POST", url, json_body=payload, headers=headers)
    return _decode(response, url)


def get_text(url, params=None, headers=None) -> str:
    response = _request("GET", url, params=params, headers=headers)
    return response.text
