from __future__ import annotations

"""
Simple TCP REPL server for RLisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(define x 1) (+ x 1)"}
- Response: {"ok": true, "result": <display string>} or {"ok": false, "error": <message>}

One Interpreter is kept alive so that definitions persist across evaluations.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Tuple

from rlisp.errors import RLispError
from rlisp.interpreter import Interpreter
from rlisp.types.printer import to_display


HOST = "127.0.0.1"
PORT = 8765


class ReplServer:
    def __init__(self, host: str = HOST, port: int = PORT, interp: Interpreter | None = None):
        self._logger = logging.getLogger("ReplServer")
        self.host = host
        self.port = port
        self.interp = interp if interp is not None else Interpreter()
        # Environments are not thread safe; clients share one session
        self._lock = threading.Lock()

    def handle_request(self, req: Dict[str, Any]) -> Dict[str, Any]:
        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}
        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "Field 'code' must be a string."}
        with self._lock:
            try:
                result = self.interp.eval(code)
            except RLispError as ex:
                return {"ok": False, "error": str(ex)}
            except SystemExit as ex:
                return {"ok": False, "error": f"Program exited with code {ex.code}."}
        return {"ok": True, "result": to_display(result)}

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            self._logger.info("Listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        self._logger.debug("Client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        req = json.loads(line.decode("utf-8"))
                    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
                        resp = {"ok": False, "error": f"Invalid request: {ex}"}
                    else:
                        if isinstance(req, dict):
                            resp = self.handle_request(req)
                        else:
                            resp = {"ok": False, "error": "Invalid request: expected an object"}
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        self._logger.debug("Client disconnected: %s:%d", *addr)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ReplServer().serve_forever()
