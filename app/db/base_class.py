# /app/db/base_class.py

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """
    Declarative base for every ORM model.

    Table names default to the lower-cased, pluralized class name
    (`Book` -> `books`); models override `__tablename__` when that is wrong.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"
