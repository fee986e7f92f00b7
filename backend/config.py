import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _split_origins(raw):
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Origins allowed for both HTTP (CORS) and Socket.IO connections
    ALLOWED_ORIGINS = _split_origins(
        os.environ.get('ALLOWED_ORIGINS') or 'https://knowyourpartner.netlify.app,http://localhost:3000'
    )
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Static client bundle served at '/'
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER') or os.path.join(BASE_DIR, 'partnerquiz', 'public')
    # Question bank (JSON list of question records)
    QUESTIONS_PATH = os.environ.get('QUESTIONS_PATH') or os.path.join(BASE_DIR, 'partnerquiz', 'data', 'questions.json')
    QUESTIONS_PER_GAME = int(os.environ.get('QUESTIONS_PER_GAME', '10'))
    # Stale room reclamation (seconds). Interval 0 disables the sweep.
    ROOM_IDLE_TIMEOUT_SEC = int(os.environ.get('ROOM_IDLE_TIMEOUT_SEC', str(30 * 60)))
    REAPER_INTERVAL_SEC = int(os.environ.get('REAPER_INTERVAL_SEC', str(5 * 60)))
