from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    origins = [o.strip() for o in str(flask_app.config.get('CORS_ORIGINS', '*')).split(',') if o.strip()]
    CORS(flask_app, origins=origins or '*')

    # The dictionary is loaded once and shared read-only; a bad word list
    # raises StartupError out of here so the server never starts.
    from wordstack.services.challenge import (
        DefinitionResolver,
        DictionaryIndex,
        ScoringEngine,
        build_providers,
    )
    cfg = flask_app.config
    dictionary = DictionaryIndex.from_file(cfg['WORD_LIST_PATH'])
    flask_app.logger.info(f"[dictionary] loaded {len(dictionary)} words from {cfg['WORD_LIST_PATH']}")

    providers = build_providers(
        str(cfg.get('DEFINITION_PROVIDERS') or '').split(','),
        max_attempts=int(cfg.get('DEFINITION_MAX_ATTEMPTS', 1)),
    )
    resolver = DefinitionResolver(
        providers,
        timeout=float(cfg.get('DEFINITION_TIMEOUT_SEC', 2.0)),
        logger=flask_app.logger,
    )
    flask_app.extensions['dictionary'] = dictionary
    flask_app.extensions['definition_resolver'] = resolver
    flask_app.extensions['scoring_engine'] = ScoringEngine(
        dictionary,
        resolver,
        max_words=int(cfg.get('MAX_SUBMISSION_WORDS', 200)),
        min_word_length=int(cfg.get('MIN_WORD_LENGTH', 3)),
        max_name_length=int(cfg.get('MAX_NAME_LENGTH', 64)),
        gloss_workers=int(cfg.get('GLOSS_WORKERS', 8)),
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from wordstack.main import main
    flask_app.register_blueprint(main)

    from wordstack.api.daily import daily
    flask_app.register_blueprint(daily, url_prefix='/api/daily-challenge')

    # Ensure models are registered with SQLAlchemy metadata
    from wordstack import models  # noqa: F401

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the leaderboard tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('show-puzzle')
    @click.option('--date', 'seed', default=None, help='UTC date as YYYY-MM-DD (default: today).')
    def show_puzzle_command(seed):
        """Prints the daily letters for a date."""
        from wordstack.services.challenge.puzzle import daily_puzzle, today_seed
        seed = seed or today_seed()
        todays = daily_puzzle(
            seed,
            dictionary,
            max_attempts=int(cfg.get('PUZZLE_MAX_ATTEMPTS', 10)),
            min_length=int(cfg.get('PUZZLE_MIN_WORD_LENGTH', 5)),
        )
        click.echo(f"{seed}: {' '.join(todays.letters)} (attempt {todays.attempt}, valid={todays.valid})")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(show_puzzle_command)

    return flask_app
