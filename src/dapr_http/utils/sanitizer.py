# src/dapr_http/utils/sanitizer.py
"""
Маскирование чувствительных данных перед логированием.

Защищает dapr-api-token, заголовки авторизации и похожие значения
от попадания в логи.
"""

import re
from typing import Any, Dict, Mapping

MASK = "***REDACTED***"

# Точные имена ключей (в нижнем регистре, '-' заменён на '_')
SENSITIVE_KEYS = {
    'dapr_api_token', 'api_token', 'authorization', 'proxy_authorization',
    'cookie', 'set_cookie', 'password', 'api_key', 'client_secret',
}

# Ключ, содержащий одно из этих слов, тоже чувствительный
SENSITIVE_FRAGMENTS = ('token', 'secret', 'password')

SENSITIVE_PATTERNS = [
    # Bearer / Basic в значениях заголовков
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    # token=..., api_token: ...
    (re.compile(r'((?:api[_-]?)?token[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1' + MASK),
]


def _normalize(key: Any) -> str:
    return str(key).lower().replace('-', '_')


def is_sensitive_key(key: Any) -> bool:
    """
    Проверяет, является ли ключ чувствительным.

    Examples:
        >>> is_sensitive_key("dapr-api-token")
        True
        >>> is_sensitive_key("key")
        False
    """
    normalized = _normalize(key)
    if normalized in SENSITIVE_KEYS:
        return True
    return any(fragment in normalized for fragment in SENSITIVE_FRAGMENTS)


def mask_sensitive_data(data: Any, mask: str = MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Examples:
        >>> mask_sensitive_data({"dapr-api-token": "s3cr3t", "method": "GET"})
        {'dapr-api-token': '***REDACTED***', 'method': 'GET'}
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        result = data
        for pattern, replacement in SENSITIVE_PATTERNS:
            result = pattern.sub(replacement.replace(MASK, mask), result)
        return result

    if isinstance(data, Mapping):
        return {
            key: mask if is_sensitive_key(key) else mask_sensitive_data(value, mask)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def mask_headers(headers: Mapping[str, str], mask: str = MASK) -> Dict[str, str]:
    """
    Маскирует чувствительные HTTP заголовки.

    Examples:
        >>> mask_headers({"dapr-api-token": "abc", "content-type": "application/json"})
        {'dapr-api-token': '***REDACTED***', 'content-type': 'application/json'}
    """
    return {key: mask if is_sensitive_key(key) else value for key, value in headers.items()}


def mask_url(url: str, mask: str = MASK) -> str:
    """
    Маскирует чувствительные query параметры в URL.

    Examples:
        >>> mask_url("http://127.0.0.1:3500/v1.0/state/s?api_token=abc&orderId=41")
        'http://127.0.0.1:3500/v1.0/state/s?api_token=***REDACTED***&orderId=41'
    """
    def _replace(match: 're.Match[str]') -> str:
        name = match.group(2)
        if is_sensitive_key(name):
            return f"{match.group(1)}{name}={mask}"
        return match.group(0)

    return re.sub(r'([?&])([^=&#]+)=([^&#]*)', _replace, url)
