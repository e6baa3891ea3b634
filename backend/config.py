import os

class Config:
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8888'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Werkzeug dev server for local runs only; deploy under eventlet or gevent
    DEV_SERVER = os.environ.get('DEV_SERVER', '0') == '1'
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173',
    ).split(',') if o.strip()]
    # Pieces handed out per /getparts call (historically 5)
    PIECE_BATCH_SIZE = int(os.environ.get('PIECE_BATCH_SIZE', '100'))
    # Zero entries every new player's penalty queue starts with
    PENALTY_QUEUE_SEED = int(os.environ.get('PENALTY_QUEUE_SEED', '10'))
    # Reaper timers (seconds)
    REAPER_INTERVAL_SEC = float(os.environ.get('REAPER_INTERVAL_SEC', '5'))
    WAITING_TIMEOUT_SEC = float(os.environ.get('WAITING_TIMEOUT_SEC', '120'))
    INACTIVITY_TIMEOUT_SEC = float(os.environ.get('INACTIVITY_TIMEOUT_SEC', '10'))
