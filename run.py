"""
Task Manager Development Server - WebSocket-enabled
Properly initializes eventlet for full WebSocket support.
"""
import os

os.environ.setdefault("SOCKETIO_ASYNC_MODE", "eventlet")

import eventlet
eventlet.monkey_patch()

from app import create_app, socketio

app = create_app()

if __name__ == "__main__":
    socketio.run(
        app,
        host='0.0.0.0',
        port=app.config['PORT'],
        debug=app.config['ENVIRONMENT'] == 'development',
        use_reloader=False,
        log_output=True
    )
