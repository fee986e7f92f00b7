from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    # Static files are served by the main blueprint from STATIC_FOLDER
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS') or []
    CORS(flask_app, origins=allowed_origins, methods=['GET', 'POST'])

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The question bank is loaded once; an invalid bank aborts startup
    from partnerquiz.questions import load_questions
    from partnerquiz.services.games.store import RoomStore
    questions = load_questions(flask_app.config['QUESTIONS_PATH'])
    store = RoomStore(questions, questions_per_game=flask_app.config.get('QUESTIONS_PER_GAME', 10))
    flask_app.extensions['room_store'] = store
    flask_app.logger.info(f"[startup] loaded {len(questions)} questions from {flask_app.config['QUESTIONS_PATH']}")

    from partnerquiz.routes import main
    flask_app.register_blueprint(main)

    from partnerquiz.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    from partnerquiz.services.games.scheduler import start_reaper
    start_reaper(flask_app, store)

    @click.command('check-questions')
    @click.option('--path', default=None, help='Question bank to check (defaults to QUESTIONS_PATH).')
    def check_questions_command(path):
        """Loads the question bank and reports how many questions it holds."""
        from partnerquiz.errors import QuestionBankError
        target = path or flask_app.config['QUESTIONS_PATH']
        try:
            bank = load_questions(target)
        except QuestionBankError as exc:
            raise click.ClickException(exc.message)
        click.echo(f'{target}: {len(bank)} questions')

    flask_app.cli.add_command(check_questions_command)

    return flask_app
