"""Transport layer: HTTP client, configuration and events."""
from .config import TransportConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .events import EventEmitter
from .transport import HttpTransport

__all__ = [
    # Transport
    'HttpTransport',
    
    # Configuration
    'TransportConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    
    # Events
    'EventEmitter',
]
