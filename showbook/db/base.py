from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """Base class for all models."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Table name is the lower-cased class name, e.g. BookingSeat -> bookingseat."""
        return cls.__name__.lower()
