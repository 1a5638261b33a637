import logging
from datetime import date

import click
from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider

from .errors import RecordsError
from .extensions import db, migrate, login_manager


class RecordsJSONProvider(DefaultJSONProvider):
    @staticmethod
    def default(o):
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def register_error_handlers(app):
    @app.errorhandler(RecordsError)
    def records_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(403)
    def forbidden(exc):
        return jsonify({"error": "forbidden", "message": "You do not have access to this page."}), 403

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({"error": "not_found", "message": "Not found."}), 404


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.argument("role")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--teacher-id", type=int)
    @click.option("--student-id", type=int)
    def create_user(username, role, password, teacher_id, student_id):
        """Create a login account."""
        from .services import Accounts, get_store
        try:
            user_id = Accounts(get_store()).create_user(
                username, password, role, teacher_id=teacher_id, student_id=student_id)
        except RecordsError as exc:
            raise click.ClickException(exc.message)
        click.echo(f"Created user {username} (id {user_id})")


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json = RecordsJSONProvider(app)
    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    from . import models
    from .models.user import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "unauthorized", "message": "Please log in."}), 401

    from .blueprints.auth import bp as auth_bp
    from .blueprints.admin import bp as admin_bp
    from .blueprints.teacher import bp as teacher_bp
    from .blueprints.student import bp as student_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(teacher_bp, url_prefix="/teacher")
    app.register_blueprint(student_bp, url_prefix="/student")
    register_error_handlers(app)
    register_commands(app)

    return app
