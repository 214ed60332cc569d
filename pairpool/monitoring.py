"""
Prometheus metrics for a pool.
"""
import logging
import socket
import threading
from socketserver import ThreadingMixIn
from wsgiref.simple_server import make_server, WSGIServer

from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry
from prometheus_client.exposition import make_wsgi_app

logger = logging.getLogger(__name__)


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """A WSGI server that handles each request in its own thread."""
    allow_reuse_address = True
    daemon_threads = True


class PoolMonitor:
    def __init__(self, host="127.0.0.1", port=9090):
        self.host = host
        self.port = port
        self.server = None
        self.thread = None

        # Isolated registry so several pools can live in one process
        self.registry = CollectorRegistry()

        self.operations = Counter(
            'pool_operations_total', 'Pool operations processed',
            ['operation', 'status'], registry=self.registry)
        self.latency = Histogram(
            'pool_operation_latency_seconds', 'Time to process a pool operation',
            ['operation'], registry=self.registry)
        self.reserve = Gauge(
            'pool_reserve', 'Reserve amount per slot', ['slot'], registry=self.registry)
        self.amm_k = Gauge('amm_invariant_k', 'Constant product k', registry=self.registry)

    def start_server(self):
        """Serve the registry over HTTP from a daemon thread."""
        app = make_wsgi_app(self.registry)
        self.server = make_server(self.host, self.port, app, ThreadingWSGIServer)
        self.server.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        self.thread = threading.Thread(target=self.server.serve_forever)
        self.thread.daemon = True
        self.thread.start()
        logger.info(f"Prometheus server started on http://{self.host}:{self.server.server_port}")

    def stop_server(self):
        """Stops the HTTP server."""
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None
            logger.info("Prometheus server stopped.")

    def record_operation(self, operation: str, status: str, latency: float):
        self.operations.labels(operation=operation, status=status).inc()
        self.latency.labels(operation=operation).observe(latency)

    def update_reserves(self, amount1: int, amount2: int):
        self.reserve.labels(slot='token1').set(amount1)
        self.reserve.labels(slot='token2').set(amount2)
        self.amm_k.set(amount1 * amount2)

    def sample(self, name: str, labels: dict = None):
        """Current value of a metric sample, or None."""
        return self.registry.get_sample_value(name, labels or {})
