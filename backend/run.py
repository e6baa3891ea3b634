import sys

from tetris_rooms import create_app, socketio


def serve(app):
    host = app.config['HOST']
    port = app.config['PORT']
    try:
        socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=app.config.get('DEV_SERVER', False))
    except (OSError, RuntimeError) as exc:
        # Cannot bind, or no production server available without DEV_SERVER
        app.logger.critical(f"[startup] cannot listen on {host}:{port}: {exc}")
        sys.exit(1)


if __name__ == '__main__':
    serve(create_app())
