from collections.abc import Collection

from fastapi import Request

from quizbook.config import settings


def get_remote_address(request: Request) -> str:
    if not request.client or not request.client.host:
        return "127.0.0.1"
    return request.client.host


def get_ipaddr(request: Request, trusted_proxies: Collection[str] | None = None) -> str:
    """first hop of X-Forwarded-For, when the peer is a trusted proxy"""
    if trusted_proxies is None:
        trusted_proxies = settings.trusted_proxies
    remote = get_remote_address(request)
    if remote in trusted_proxies and (
        forwarded := request.headers.get("X-Forwarded-For")
    ):
        return forwarded.split(",")[0].strip()
    return remote
