"""
SSRF Protection - Refuse to analyze internal addresses.
"""
import ipaddress
import socket
from urllib.parse import urlparse

from seo_checker.logger import logger


class SSRFProtection:
    """Validates target URLs before the analyzer fetches them."""
    
    # Private/internal IP ranges to block
    BLOCKED_RANGES = [
        ipaddress.ip_network("10.0.0.0/8"),
        ipaddress.ip_network("172.16.0.0/12"),
        ipaddress.ip_network("192.168.0.0/16"),
        ipaddress.ip_network("127.0.0.0/8"),
        ipaddress.ip_network("169.254.0.0/16"),
        ipaddress.ip_network("0.0.0.0/8"),
        ipaddress.ip_network("::1/128"),
        ipaddress.ip_network("fc00::/7"),
        ipaddress.ip_network("fe80::/10"),
    ]
    
    # Blocked hostnames
    BLOCKED_HOSTS = {
        "localhost",
        "metadata.google.internal",
        "169.254.169.254",  # AWS/GCP metadata
    }
    
    @classmethod
    def is_blocked_ip(cls, ip_str: str) -> bool:
        ip = ipaddress.ip_address(ip_str)
        return any(ip in blocked_range for blocked_range in cls.BLOCKED_RANGES)
    
    @classmethod
    def validate_url(cls, url: str) -> tuple[bool, str]:
        """
        Validate URL for SSRF vulnerabilities.
        
        Returns:
            tuple: (is_valid, error_message)
        """
        parsed = urlparse(url)
        hostname = parsed.hostname
        if not hostname:
            return False, "Could not parse hostname"
        
        if hostname.lower() in cls.BLOCKED_HOSTS:
            return False, f"Blocked hostname: {hostname}"

        # IP literals (including IPv6) need no DNS
        try:
            if cls.is_blocked_ip(hostname):
                return False, f"IP {hostname} is in a blocked range"
            return True, ""
        except ValueError:
            pass

        try:
            ip_str = socket.gethostbyname(hostname)
        except UnicodeError:
            return False, f"Invalid hostname: {hostname}"
        except socket.gaierror:
            # The GET itself will fail if the host really does not exist
            logger.warning(f"DNS resolution failed for {hostname}")
            return True, ""
        
        if cls.is_blocked_ip(ip_str):
            return False, f"IP {ip_str} is in a blocked range"
        
        return True, ""
