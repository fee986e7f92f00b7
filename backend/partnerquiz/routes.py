import os

from flask import Blueprint, abort, current_app, jsonify, send_from_directory

main = Blueprint('main', __name__)


def _static_folder():
    return current_app.config.get('STATIC_FOLDER')


@main.route('/')
def index():
    folder = _static_folder()
    if not folder or not os.path.isfile(os.path.join(folder, 'index.html')):
        abort(404)
    return send_from_directory(folder, 'index.html')


@main.route('/health')
def health():
    store = current_app.extensions['room_store']
    return jsonify({
        'status': 'ok',
        'rooms': len(store),
        'questions': len(store.questions),
    })


@main.route('/<path:filename>')
def static_files(filename):
    folder = _static_folder()
    if not folder:
        abort(404)
    # send_from_directory rejects paths escaping the folder
    return send_from_directory(folder, filename)
