# unievent/db/base.py
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# nomes estáveis para constraints/índices (alembic depende deles)
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=naming_convention)

    def __repr__(self) -> str:
        keys = ", ".join(f"{col.name}={getattr(self, col.name, None)!r}" for col in self.__table__.primary_key)
        return f"<{type(self).__name__} {keys}>"
