from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _target_metadata():
    # Imported here so model registration happens after config is loaded
    from app import models  # noqa: F401
    from app.database import Base, DATABASE_URL_SYNC

    # configparser interpolation: escape % in passwords
    config.set_main_option("sqlalchemy.url", DATABASE_URL_SYNC.replace("%", "%%"))
    return Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    target_metadata = _target_metadata()
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    target_metadata = _target_metadata()
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
