from millionaire.models import Question, User


def test_seed_questions_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['seed-questions', '--per-level', '2'])
    assert result.exit_code == 0
    assert 'Seeded 30 questions.' in result.output
    assert Question.query.count() == 30
    assert {q.level for q in Question.query.all()} == set(range(15))


def test_db_reset_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['db-reset', '--per-level', '1'])
    assert result.exit_code == 0
    assert User.query.count() == 3
    assert Question.query.count() == 15
