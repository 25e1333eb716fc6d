from datetime import datetime, timedelta
from laptrack.models import User, RefreshToken
from laptrack.utils.auth_utils import verify_password, generate_refresh_token


def test_init_db(app, db_session):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database tables created' in result.output


def test_create_admin(app, db_session):
    result = app.test_cli_runner().invoke(args=['create-admin', 'Root@Example.com', 'Adm1nPass', '--name', 'Root'])
    assert result.exit_code == 0, result.output
    assert 'Created admin root@example.com' in result.output

    user = User.query.filter_by(email='root@example.com').one()
    assert user.is_admin()
    assert user.name == 'Root'


def test_create_admin_promotes_existing_user(app, db_session, disabled_user):
    result = app.test_cli_runner().invoke(args=['create-admin', 'disabled@example.com', 'N3wPassword'])
    assert result.exit_code == 0, result.output
    assert 'Promoted' in result.output

    user = User.query.filter_by(email='disabled@example.com').one()
    assert user.role == 'admin'
    assert user.is_active()
    assert verify_password('N3wPassword', user.password_hash)
    assert User.query.count() == 1


def test_create_admin_rejects_weak_password(app, db_session):
    result = app.test_cli_runner().invoke(args=['create-admin', 'root@example.com', 'weak'])
    assert result.exit_code != 0
    assert 'PASSWORD' in result.output
    assert User.query.count() == 0


def test_create_admin_rejects_bad_email(app, db_session):
    result = app.test_cli_runner().invoke(args=['create-admin', 'root', 'Adm1nPass'])
    assert result.exit_code != 0
    assert User.query.count() == 0


def test_cleanup_tokens(app, db_session, test_user):
    generate_refresh_token(test_user)
    stale = RefreshToken(test_user.id, 60)
    stale.expires_at = datetime.utcnow() - timedelta(minutes=1)
    db_session.add(stale)
    db_session.commit()

    result = app.test_cli_runner().invoke(args=['cleanup-tokens'])
    assert result.exit_code == 0
    assert 'Removed 1 refresh tokens' in result.output
    assert RefreshToken.query.count() == 1
