"""
Server startup script.
Run from project root: python run.py

Server binds to 0.0.0.0 so you can access it from other devices on the same network.
Note: With reload=True, saving a file triggers a restart.
"""
import logging
import socket

import uvicorn


def _local_ip():
    """Best-effort local network IP (works on same LAN)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.settimeout(0)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = 8000
    ip = _local_ip()
    if ip:
        print(f"To access from another device on the same network, open: http://{ip}:{port}")
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )
