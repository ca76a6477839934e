"""Request client helpers"""
from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Best guess at the caller's address, honouring proxy headers"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return "unknown"
