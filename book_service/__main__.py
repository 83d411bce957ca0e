"""Allow ``python -m book_service``."""

from book_service.main import main

main()
