# backend/app/security/fingerprint.py
"""
Server side of device identity binding.

The browser sends an opaque, high-entropy fingerprint. It is never
stored: the ledger keeps sha256(fingerprint-ip-contest_salt) instead.
Mixing in the IP means the same device on two networks produces two
different hashes, and so can vote twice; a replayed fingerprint from a
fixed script on another host does not collide with the original.
"""
import hashlib

from fastapi import Request


def hash_device_fingerprint(fingerprint: str, ip: str, contest_salt: str) -> str:
    """Return the 64-char hex digest stored in votes.device_fingerprint."""
    material = f"{fingerprint}-{ip}-{contest_salt}"
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def get_client_ip(request: Request) -> str:
    """
    Resolve the requester IP from the socket peer, or "unknown".

    Forwarding headers are never read here. Behind a reverse proxy, run
    uvicorn with proxy_headers and forwarded_allow_ips so that
    ProxyHeadersMiddleware rewrites the peer address, and only for
    proxies that are trusted.
    """
    if request.client and request.client.host:
        return request.client.host

    return "unknown"
