import json

import pytest

from partnerquiz.errors import QuestionBankError
from partnerquiz.questions import load_questions


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    data = res.get_json()
    assert data['status'] == 'ok'
    assert data['rooms'] == 0
    assert data['questions'] > 0


def test_index_serves_client(client):
    res = client.get('/')
    assert res.status_code == 200
    assert b'Know Your Partner' in res.data


def test_missing_static_file(client):
    assert client.get('/nope.js').status_code == 404


def test_index_without_static_folder(flask_app, client, tmp_path):
    flask_app.config['STATIC_FOLDER'] = str(tmp_path)
    assert client.get('/').status_code == 404


def test_load_questions(tmp_path):
    path = tmp_path / 'questions.json'
    path.write_text(json.dumps([{'question': 'Q1'}, {'question': 'Q2'}]))
    assert load_questions(path) == [{'question': 'Q1'}, {'question': 'Q2'}]


@pytest.mark.parametrize('content', ['[]', '{"question": "Q1"}', 'not json'])
def test_load_questions_rejects_bad_banks(tmp_path, content):
    path = tmp_path / 'questions.json'
    path.write_text(content)
    with pytest.raises(QuestionBankError):
        load_questions(path)


def test_load_questions_missing_file(tmp_path):
    with pytest.raises(QuestionBankError):
        load_questions(tmp_path / 'missing.json')


def test_bundled_question_bank_is_valid(flask_app):
    questions = load_questions(flask_app.config['QUESTIONS_PATH'])
    assert len(questions) >= flask_app.config['QUESTIONS_PER_GAME']


def test_check_questions_command(flask_app, tmp_path):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['check-questions'])
    assert result.exit_code == 0
    assert 'questions' in result.output

    bad = tmp_path / 'bad.json'
    bad.write_text('[]')
    result = runner.invoke(args=['check-questions', '--path', str(bad)])
    assert result.exit_code != 0
