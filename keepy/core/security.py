"""Password hashing (Argon2 via passlib)."""

from passlib.context import CryptContext

from keepy.core.config import Settings, get_settings


class PasswordHasher:
    """Salted one-way password hashing.

    The first configured scheme hashes new passwords; any further schemes are
    accepted for verification only and reported by :meth:`needs_rehash`.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        schemes = list(settings.password_schemes)
        options: dict = {}
        if settings.password_hash_rounds is not None:
            # passlib only flags hashes below min_rounds for upgrade
            options[f"{schemes[0]}__rounds"] = settings.password_hash_rounds
            options[f"{schemes[0]}__min_rounds"] = settings.password_hash_rounds
        self._context = CryptContext(schemes=schemes, deprecated="auto", **options)

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check ``plaintext`` against ``hashed``. Unrecognised hashes never match."""
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        try:
            return self._context.needs_update(hashed)
        except (ValueError, TypeError):
            return True

    def dummy_verify(self) -> None:
        """Burn the time of a failed verify so unknown accounts aren't distinguishable."""
        self._context.dummy_verify()
