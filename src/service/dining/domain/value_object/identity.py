import attrs

from src.service.dining.domain.entity.user_entity import UserRole


@attrs.define(frozen=True)
class Identity:
    """Caller identity taken from a verified token; no store lookup involved"""

    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
