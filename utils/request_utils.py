"""
SoYummy Request Utilities
Helper functions for extracting request information
"""

from fastapi import Request
import ipaddress


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request headers

    Handles common proxy configurations and cloud load balancers
    """
    headers_to_check = [
        "cf-connecting-ip",  # Cloudflare
        "x-forwarded-for",   # Standard proxy header
        "x-real-ip",         # Nginx proxy
    ]

    for header in headers_to_check:
        ip = request.headers.get(header)
        if ip:
            # X-Forwarded-For can contain multiple IPs, take the first (original client)
            if "," in ip:
                ip = ip.split(",")[0].strip()

            if _is_valid_ip(ip):
                return ip

    # Fallback to direct connection IP
    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_user_agent(request: Request) -> str:
    """Extract user agent from request headers"""
    return request.headers.get("user-agent", "Unknown")


def _is_valid_ip(ip: str) -> bool:
    try:
        ipaddress.ip_address(ip)
        return True
    except ValueError:
        return False
