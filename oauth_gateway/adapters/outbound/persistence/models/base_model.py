# oauth_gateway/adapters/outbound/persistence/models/base_model.py

from sqlalchemy.orm import declarative_base

# Parent class of every ORM model, owner of the metadata used by alembic
Base = declarative_base()
