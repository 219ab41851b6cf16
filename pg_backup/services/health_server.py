"""
Servidor HTTP de salud, estado y disparo manual
"""
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Optional
from ..config import Config
from ..exceptions import BackupServiceUnavailableError
from ..logger import LoggerService
from .status_service import StatusService


class HealthRequestHandler(BaseHTTPRequestHandler):
    """Rutas /health, /status y /trigger"""

    server_version = "pg-backup"

    def do_GET(self):
        self._dispatch('GET')

    def do_POST(self):
        self._dispatch('POST')

    def do_PUT(self):
        self._dispatch('PUT')

    def do_DELETE(self):
        self._dispatch('DELETE')

    def do_PATCH(self):
        self._dispatch('PATCH')

    def _dispatch(self, method: str):
        path = self.path.split('?', 1)[0]
        if path == '/health':
            self._send_json(200, {'status': 'healthy'})
        elif path == '/status':
            self._send_json(200, self.server.status_service.to_dict())
        elif path == '/trigger':
            self._handle_trigger(method)
        else:
            self._send_json(404, {'error': 'Not found'})

    def _handle_trigger(self, method: str):
        if method != 'POST':
            self._send_json(405, {'error': 'Only POST method is allowed'})
            return

        try:
            started_at = self.server.status_service.trigger()
        except BackupServiceUnavailableError:
            self._send_json(503, {
                'error': 'Backup service not available',
                'message': 'The backup service is not initialized',
            })
            return

        self._send_json(202, {
            'status': 'accepted',
            'message': 'Backup started successfully',
            'started_at': started_at.strftime(Config.DISPLAY_TIMESTAMP_FORMAT),
        })

    def _send_json(self, status: int, payload: Dict):
        content = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(content)))
        self.end_headers()
        self.wfile.write(content)

    def log_message(self, format, *args):
        self.server.logger.debug(f"{self.address_string()} - {format % args}")


class HealthServer:
    """Ejecuta el servidor HTTP en un hilo en segundo plano"""

    def __init__(self, status_service: StatusService, port: int = Config.DEFAULT_HEALTH_CHECK_PORT,
                 host: str = '0.0.0.0'):
        self.status_service = status_service
        self.host = host
        self.port = port
        self.logger = LoggerService.get_logger("HealthServer")
        self._server: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> int:
        """
        Inicia el servidor

        Returns:
            Puerto en el que escucha (útil con port=0)
        """
        server = ThreadingHTTPServer((self.host, self.port), HealthRequestHandler)
        server.daemon_threads = True
        server.status_service = self.status_service
        server.logger = self.logger
        self._server = server
        self.port = server.server_address[1]

        self._thread = threading.Thread(target=server.serve_forever, name="health-server", daemon=True)
        self._thread.start()
        self.logger.info(f"Servidor de salud iniciado en el puerto {self.port}")
        return self.port

    def stop(self):
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._server = None
        self.logger.info("Servidor de salud detenido")
