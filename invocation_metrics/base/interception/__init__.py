"""Interception package: proxies, interceptors and the ``wrap`` entry point."""

from .interceptor import Interceptor
from .proxy import ProxySpec, interceptor_of, proxy_spec_for
from .factory import wrap

__all__ = ["Interceptor", "ProxySpec", "interceptor_of", "proxy_spec_for", "wrap"]
