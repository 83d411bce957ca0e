"""Feature packages: auth, users, genres and books."""


def load_models() -> None:
    """Import every model module so ``Base.metadata`` knows all tables."""
    from book_service.features.books import models as _books  # noqa: F401
    from book_service.features.genres import models as _genres  # noqa: F401
    from book_service.features.users import models as _users  # noqa: F401
